"""
Unified database setup script.
Creates all tables and indexes for the phone recommendation service.

Usage:
    python scripts/setup.py
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import psycopg2

from src.config import DB_CONFIG


def setup_phone_schema():
    """Setup phones and phone_insights tables."""
    print("\n[*] Setting up phone schema...")

    conn = psycopg2.connect(**DB_CONFIG)
    cursor = conn.cursor()

    try:
        print("[*] Creating phones table...")
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS phones (
                id SERIAL PRIMARY KEY,
                brand TEXT NOT NULL,
                model TEXT NOT NULL,
                price INTEGER NOT NULL,
                memory_and_storage TEXT,
                display_info TEXT,
                camera_info TEXT,
                processor TEXT,
                battery TEXT,
                image_url TEXT,
                camera_score INTEGER CHECK (camera_score BETWEEN 0 AND 100),
                battery_score INTEGER CHECK (battery_score BETWEEN 0 AND 100),
                software_score INTEGER CHECK (software_score BETWEEN 0 AND 100),
                privacy_score INTEGER CHECK (privacy_score BETWEEN 0 AND 100),
                looks_score INTEGER CHECK (looks_score BETWEEN 0 AND 100),
                affiliate_amazon TEXT,
                affiliate_flipkart TEXT,
                youtube_sentiment_score INTEGER CHECK (youtube_sentiment_score BETWEEN 0 AND 100),
                reddit_sentiment_score INTEGER CHECK (reddit_sentiment_score BETWEEN 0 AND 100)
            );
        """)

        print("[*] Creating phone_insights table...")
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS phone_insights (
                id SERIAL PRIMARY KEY,
                phone_id INTEGER REFERENCES phones(id) ON DELETE CASCADE,
                priority_pattern TEXT,
                why_picked TEXT,
                why_love_it TEXT,
                what_to_know TEXT
            );
        """)

        print("[*] Creating indexes...")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_phones_price ON phones(price);")
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_phone_insights_lookup
            ON phone_insights(phone_id, priority_pattern);
        """)

        conn.commit()
        print("[+] Phone schema created successfully!")
        return True

    except Exception as e:
        print(f"[-] Error setting up phone schema: {e}")
        conn.rollback()
        return False
    finally:
        cursor.close()
        conn.close()


def setup_review_schema():
    """Setup phone_reviews table for video transcripts and Reddit posts."""
    print("\n[*] Setting up review schema...")

    conn = psycopg2.connect(**DB_CONFIG)
    cursor = conn.cursor()

    try:
        print("[*] Creating phone_reviews table...")
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS phone_reviews (
                id SERIAL PRIMARY KEY,
                phone_id INTEGER REFERENCES phones(id) ON DELETE CASCADE,
                source_type VARCHAR(20) NOT NULL CHECK (source_type IN ('youtube', 'reddit')),
                external_id VARCHAR(255) NOT NULL,
                title TEXT,
                url TEXT,
                author TEXT,
                content TEXT,
                sentiment_score INTEGER CHECK (sentiment_score BETWEEN 0 AND 100),
                analyzed_at TIMESTAMP,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (source_type, external_id)
            );
        """)

        print("[*] Creating review indexes...")
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_phone_reviews_phone
            ON phone_reviews(phone_id, source_type);
        """)

        conn.commit()
        print("[+] Review schema created successfully!")
        return True

    except Exception as e:
        print(f"[-] Error setting up review schema: {e}")
        conn.rollback()
        return False
    finally:
        cursor.close()
        conn.close()


def main():
    """Setup complete database schema and indexes."""
    print("="*60)
    print("Database Setup")
    print("="*60)

    success = True

    if not setup_phone_schema():
        success = False

    if not setup_review_schema():
        success = False

    print("\n" + "="*60)
    if success:
        print("[+] Setup completed successfully!")
        print("\nNext steps:")
        print("  1. Run: python cli.py ingest                # Import phones from CSV")
        print("  2. Run: python cli.py sync reddit           # Collect Reddit posts")
        print("  3. Run: python cli.py sync sentiment        # Analyze and aggregate sentiment")
    else:
        print("[-] Setup completed with errors")
    print("="*60)

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
