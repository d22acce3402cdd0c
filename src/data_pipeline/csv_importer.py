"""
CSV Importer - Load phone listings from a Flipkart-style CSV export.

Expected columns:
    model,price,memory_and_storage,display,camera,processor,battery,image,url

The first whitespace-delimited token of `model` is the brand. Each row is
scored before it is saved; rows that cannot be parsed are skipped with a
reason and never stop the import.
"""
import csv
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from src.store.records import Phone
from src.scoring.score_updater import PhoneScoreUpdater

MIN_FIELDS = 9

SKIP_INSUFFICIENT_FIELDS = "Insufficient fields"
SKIP_EMPTY_PRICE = "Empty price"
SKIP_INVALID_PRICE = "Invalid price"
SKIP_DUPLICATE = "Duplicate (brand+model)"


class RowRejected(ValueError):
    """A CSV row that cannot become a Phone."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class ImportStats:
    total_lines: int = 0
    imported: int = 0
    skipped: int = 0
    errors: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            'total_lines': self.total_lines,
            'imported': self.imported,
            'skipped': self.skipped,
            'errors': self.errors,
            'skip_reasons': dict(self.skip_reasons),
        }


def split_brand_and_model(full_model: str) -> Tuple[str, str]:
    """'Samsung Galaxy S23 (Green, 128 GB)' -> ('Samsung', 'Galaxy S23 (Green, 128 GB)')."""
    parts = full_model.strip().split(None, 1)
    if not parts:
        return 'Unknown', full_model
    brand = parts[0]
    model = parts[1] if len(parts) > 1 else parts[0]
    return brand, model


def parse_price(raw: str) -> int:
    """'₹24,999' -> 24999. Raises RowRejected for empty or non-numeric prices."""
    cleaned = raw.replace('₹', '').replace(',', '').strip()
    if not cleaned:
        raise RowRejected(SKIP_EMPTY_PRICE)
    try:
        return int(cleaned)
    except ValueError:
        raise RowRejected(SKIP_INVALID_PRICE)


def parse_row(fields: List[str]) -> Phone:
    """Map one CSV row to an unsaved, unscored Phone."""
    if len(fields) < MIN_FIELDS:
        raise RowRejected(SKIP_INSUFFICIENT_FIELDS)

    fields = [value.strip() for value in fields]
    brand, model = split_brand_and_model(fields[0])

    return Phone(
        id=None,
        brand=brand,
        model=model,
        price=parse_price(fields[1]),
        memory_and_storage=fields[2] or None,
        display_info=fields[3] or None,
        camera_info=fields[4] or None,
        processor=fields[5] or None,
        battery=fields[6] or None,
        image_url=fields[7] or None,
        affiliate_flipkart=fields[8] or None
    )


class CSVImporter:
    """Import phones from CSV into a phone store."""

    def __init__(self, phone_store, score_updater: Optional[PhoneScoreUpdater] = None, verbose: bool = False):
        self.phone_store = phone_store
        self.score_updater = score_updater or PhoneScoreUpdater(phone_store)
        self.verbose = verbose

    def import_file(self, csv_path) -> ImportStats:
        """
        Import every row of a CSV file.

        Raises:
            FileNotFoundError: when the file does not exist
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_path}")

        if self.verbose:
            print(f"[*] Importing phones from {csv_path}...")

        with open(csv_path, 'r', encoding='utf-8', newline='') as f:
            return self.import_rows(csv.reader(f))

    def import_rows(self, rows: Iterable[List[str]]) -> ImportStats:
        """Import parsed CSV rows; the first row is the header."""
        stats = ImportStats()
        reasons = Counter()

        rows = iter(rows)
        header = next(rows, None)
        if header is None:
            return stats
        if self.verbose:
            print(f"[*] CSV header: {','.join(header)}")

        for line_number, fields in enumerate(rows, start=2):
            stats.total_lines += 1

            try:
                phone = parse_row(fields)
            except RowRejected as e:
                stats.skipped += 1
                reasons[e.reason] += 1
                if self.verbose:
                    print(f"[!] Line {line_number}: {e.reason}")
                continue

            if self.phone_store.exists_by_brand_and_model(phone.brand, phone.model):
                stats.skipped += 1
                reasons[SKIP_DUPLICATE] += 1
                continue

            try:
                self.phone_store.save(self.score_updater.compute_scores(phone))
            except Exception as e:
                stats.errors += 1
                print(f"[-] Error importing line {line_number} ({phone.display_name}): {e}")
                continue

            stats.imported += 1
            if self.verbose and stats.imported % 100 == 0:
                print(f"[*] Imported {stats.imported} phones so far...")

        stats.skip_reasons = dict(reasons)

        if self.verbose:
            print(f"[+] Import completed: {stats.total_lines} total, {stats.imported} imported, "
                  f"{stats.skipped} skipped, {stats.errors} errors")

        return stats
