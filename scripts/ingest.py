"""
Phone ingestion script.
Imports phone listings from a CSV export and scores them.

Usage:
    python scripts/ingest.py --csv                        # Import from PHONES_CSV
    python scripts/ingest.py --csv --file=data/phones.csv # Import a specific file
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.config import PHONES_CSV
from src.data_pipeline.csv_importer import CSVImporter
from src.store.phone_store import PhoneStore


def ingest_csv(csv_file=None):
    """Import phones from CSV into the phones table."""
    csv_path = Path(csv_file or PHONES_CSV)
    if not csv_path.is_absolute():
        csv_path = project_root / csv_path

    print(f"\n[*] Importing phones from {csv_path}...")

    try:
        importer = CSVImporter(PhoneStore(), verbose=True)
        stats = importer.import_file(csv_path)
    except FileNotFoundError as e:
        print(f"[-] {e}")
        return False
    except Exception as e:
        print(f"[-] Import failed: {e}")
        return False

    print(f"\n[+] Imported {stats.imported} of {stats.total_lines} rows")
    if stats.skip_reasons:
        print("[*] Skip reasons:")
        for reason, count in sorted(stats.skip_reasons.items()):
            print(f"    - {reason}: {count}")
    if stats.errors:
        print(f"[!] {stats.errors} rows failed to save")

    return stats.errors == 0


def main():
    parser = argparse.ArgumentParser(description='Import phones from CSV')
    parser.add_argument('--csv', action='store_true', help='Import phones from CSV')
    parser.add_argument('--file', type=str, default=None, help='CSV file path (defaults to PHONES_CSV)')

    args = parser.parse_args()

    # If no args, show help
    if not args.csv:
        parser.print_help()
        return

    print("="*60)
    print("Phone Ingestion")
    print("="*60)

    success = ingest_csv(args.file)

    print("\n" + "="*60)
    if success:
        print("[+] Ingestion completed successfully!")
    else:
        print("[-] Ingestion completed with errors")
    print("="*60)

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
