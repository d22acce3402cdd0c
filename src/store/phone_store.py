"""
PostgreSQL-backed stores for phones, insights and review content.

Each call opens its own connection so the stores can be shared between
request handlers and batch jobs without coordination. Schema lives in
scripts/setup.py.
"""
import psycopg2
from psycopg2.extras import RealDictCursor
from typing import Optional, Dict, List, Any

from src import config
from src.store.records import (
    Phone,
    PhoneInsight,
    PhoneReview,
    PhoneNotFoundError,
    SCORE_FIELDS,
    SENTIMENT_FIELDS,
    check_phone_columns,
)


PHONE_COLUMNS = [
    'id', 'brand', 'model', 'price',
    'memory_and_storage', 'display_info', 'camera_info', 'processor', 'battery',
    'image_url',
    'camera_score', 'battery_score', 'software_score', 'privacy_score', 'looks_score',
    'affiliate_amazon', 'affiliate_flipkart',
    'youtube_sentiment_score', 'reddit_sentiment_score'
]

REVIEW_COLUMNS = [
    'id', 'phone_id', 'source_type', 'external_id', 'title', 'url', 'author',
    'content', 'sentiment_score', 'analyzed_at'
]


class _PostgresStore:
    def __init__(self, db_config: Optional[Dict] = None):
        self.db_config = db_config or config.DB_CONFIG

    def _fetch(self, query: str, params: tuple = ()) -> List[Dict[str, Any]]:
        conn = psycopg2.connect(**self.db_config)
        try:
            cursor = conn.cursor(cursor_factory=RealDictCursor)
            cursor.execute(query, params)
            rows = cursor.fetchall()
            cursor.close()
            return [dict(row) for row in rows]
        finally:
            conn.close()

    def _write(self, query: str, params: tuple) -> Optional[Dict[str, Any]]:
        conn = psycopg2.connect(**self.db_config)
        try:
            cursor = conn.cursor(cursor_factory=RealDictCursor)
            cursor.execute(query, params)
            row = cursor.fetchone() if cursor.description else None
            conn.commit()
            cursor.close()
            return dict(row) if row else None
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


class PhoneStore(_PostgresStore):
    """Phones table access."""

    _SELECT = f"SELECT {', '.join(PHONE_COLUMNS)} FROM phones"

    def find_by_price_range(self, min_price: int, max_price: int) -> List[Phone]:
        rows = self._fetch(
            self._SELECT + " WHERE price BETWEEN %s AND %s ORDER BY id;",
            (min_price, max_price)
        )
        return [Phone(**row) for row in rows]

    def count_by_price_range(self, min_price: int, max_price: int) -> int:
        rows = self._fetch(
            "SELECT COUNT(*) AS total FROM phones WHERE price BETWEEN %s AND %s;",
            (min_price, max_price)
        )
        return int(rows[0]['total']) if rows else 0

    def get(self, phone_id: int) -> Optional[Phone]:
        rows = self._fetch(self._SELECT + " WHERE id = %s;", (phone_id,))
        return Phone(**rows[0]) if rows else None

    def require(self, phone_id: int) -> Phone:
        phone = self.get(phone_id)
        if phone is None:
            raise PhoneNotFoundError(phone_id)
        return phone

    def exists_by_brand_and_model(self, brand: str, model: str) -> bool:
        rows = self._fetch(
            "SELECT 1 FROM phones WHERE brand = %s AND model = %s LIMIT 1;",
            (brand, model)
        )
        return bool(rows)

    def all(self) -> List[Phone]:
        return [Phone(**row) for row in self._fetch(self._SELECT + " ORDER BY id;")]

    def save(self, phone: Phone) -> Phone:
        """Insert a new phone or update every column of an existing one in one statement."""
        data = phone.to_dict()
        columns = [c for c in PHONE_COLUMNS if c != 'id']
        values = tuple(data[c] for c in columns)
        returning = f" RETURNING {', '.join(PHONE_COLUMNS)};"

        if phone.id is None:
            placeholders = ', '.join(['%s'] * len(columns))
            row = self._write(
                f"INSERT INTO phones ({', '.join(columns)}) VALUES ({placeholders})" + returning,
                values
            )
        else:
            assignments = ', '.join(f"{c} = %s" for c in columns)
            row = self._write(
                f"UPDATE phones SET {assignments} WHERE id = %s" + returning,
                values + (phone.id,)
            )
            if row is None:
                raise PhoneNotFoundError(phone.id)
        return Phone(**row)

    def update_scores(self, phone_id: int, scores: Dict[str, int]) -> Phone:
        """UPDATE only the derived score columns, leaving review aggregates alone."""
        return self._update_columns(phone_id, scores, SCORE_FIELDS)

    def update_sentiment(self, phone_id: int, field_name: str, value: int) -> Phone:
        """UPDATE one review aggregate column, leaving derived scores alone."""
        return self._update_columns(phone_id, {field_name: value}, SENTIMENT_FIELDS)

    def _update_columns(self, phone_id: int, values: Dict, allowed) -> Phone:
        check_phone_columns(values, allowed)
        columns = list(values)
        assignments = ', '.join(f"{c} = %s" for c in columns)
        row = self._write(
            f"UPDATE phones SET {assignments} WHERE id = %s RETURNING {', '.join(PHONE_COLUMNS)};",
            tuple(values[c] for c in columns) + (phone_id,)
        )
        if row is None:
            raise PhoneNotFoundError(phone_id)
        return Phone(**row)


class InsightStore(_PostgresStore):
    """phone_insights table access."""

    _SELECT = (
        "SELECT id, phone_id, priority_pattern, why_picked, why_love_it, what_to_know "
        "FROM phone_insights"
    )

    def find_exact(self, phone_id: int, pattern: str) -> Optional[PhoneInsight]:
        rows = self._fetch(
            self._SELECT + " WHERE phone_id = %s AND priority_pattern = %s ORDER BY id LIMIT 1;",
            (phone_id, pattern)
        )
        return PhoneInsight(**rows[0]) if rows else None

    def find_any(self, phone_id: int) -> Optional[PhoneInsight]:
        rows = self._fetch(
            self._SELECT + " WHERE phone_id = %s ORDER BY id LIMIT 1;",
            (phone_id,)
        )
        return PhoneInsight(**rows[0]) if rows else None


class ReviewStore(_PostgresStore):
    """phone_reviews table access (video transcripts and social posts)."""

    _SELECT = f"SELECT {', '.join(REVIEW_COLUMNS)} FROM phone_reviews"

    def save(self, review: PhoneReview) -> PhoneReview:
        columns = [c for c in REVIEW_COLUMNS if c != 'id']
        values = tuple(getattr(review, c) for c in columns)
        placeholders = ', '.join(['%s'] * len(columns))
        updates = ', '.join(f"{c} = EXCLUDED.{c}" for c in columns if c not in ('source_type', 'external_id'))
        row = self._write(
            f"INSERT INTO phone_reviews ({', '.join(columns)}) VALUES ({placeholders}) "
            f"ON CONFLICT (source_type, external_id) DO UPDATE SET {updates} "
            f"RETURNING {', '.join(REVIEW_COLUMNS)};",
            values
        )
        return PhoneReview(**row)

    def exists(self, source_type: str, external_id: str) -> bool:
        rows = self._fetch(
            "SELECT 1 FROM phone_reviews WHERE source_type = %s AND external_id = %s LIMIT 1;",
            (source_type, external_id)
        )
        return bool(rows)

    def pending_content(self, source_type: str) -> List[PhoneReview]:
        rows = self._fetch(
            self._SELECT + " WHERE source_type = %s AND (content IS NULL OR content = '') ORDER BY id;",
            (source_type,)
        )
        return [PhoneReview(**row) for row in rows]

    def pending_sentiment(self, source_type: str) -> List[PhoneReview]:
        rows = self._fetch(
            self._SELECT + " WHERE source_type = %s AND sentiment_score IS NULL ORDER BY id;",
            (source_type,)
        )
        reviews = [PhoneReview(**row) for row in rows]
        return [r for r in reviews if r.analysis_text]

    def for_phone(self, phone_id: int, source_type: str) -> List[PhoneReview]:
        rows = self._fetch(
            self._SELECT + " WHERE phone_id = %s AND source_type = %s ORDER BY id;",
            (phone_id, source_type)
        )
        return [PhoneReview(**row) for row in rows]
