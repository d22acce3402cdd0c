"""
In-memory stores with the same interface as the PostgreSQL stores.

Used for local runs without a database and by the test suite.
"""
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from src.store.records import (
    Phone,
    PhoneInsight,
    PhoneReview,
    PhoneNotFoundError,
    SCORE_FIELDS,
    SENTIMENT_FIELDS,
    check_phone_columns,
)


class InMemoryPhoneStore:
    """Dict-backed phone store. Saves replace whole records."""

    def __init__(self, phones: Optional[List[Phone]] = None):
        self._phones: Dict[int, Phone] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        for phone in phones or []:
            self.save(phone)

    def find_by_price_range(self, min_price: int, max_price: int) -> List[Phone]:
        return [p for p in self.all() if min_price <= p.price <= max_price]

    def count_by_price_range(self, min_price: int, max_price: int) -> int:
        return len(self.find_by_price_range(min_price, max_price))

    def get(self, phone_id: int) -> Optional[Phone]:
        return self._phones.get(phone_id)

    def require(self, phone_id: int) -> Phone:
        phone = self.get(phone_id)
        if phone is None:
            raise PhoneNotFoundError(phone_id)
        return phone

    def exists_by_brand_and_model(self, brand: str, model: str) -> bool:
        return any(p.brand == brand and p.model == model for p in self._phones.values())

    def save(self, phone: Phone) -> Phone:
        with self._lock:
            if phone.id is None:
                phone = replace(phone, id=self._next_id)
            self._next_id = max(self._next_id, phone.id + 1)
            self._phones[phone.id] = phone
        return phone

    def update_scores(self, phone_id: int, scores: Dict[str, int]) -> Phone:
        """Overwrite only the derived score fields of the current record."""
        return self._update_fields(phone_id, scores, SCORE_FIELDS)

    def update_sentiment(self, phone_id: int, field_name: str, value: int) -> Phone:
        """Overwrite one review aggregate of the current record."""
        return self._update_fields(phone_id, {field_name: value}, SENTIMENT_FIELDS)

    def _update_fields(self, phone_id: int, values: Dict, allowed) -> Phone:
        check_phone_columns(values, allowed)
        with self._lock:
            phone = self._phones.get(phone_id)
            if phone is None:
                raise PhoneNotFoundError(phone_id)
            phone = replace(phone, **values)
            self._phones[phone_id] = phone
        return phone

    def all(self) -> List[Phone]:
        return sorted(self._phones.values(), key=lambda p: p.id)


class InMemoryInsightStore:
    """Insights keyed by phone id, kept in insertion order."""

    def __init__(self, insights: Optional[List[PhoneInsight]] = None):
        self._insights: List[PhoneInsight] = list(insights or [])

    def add(self, insight: PhoneInsight) -> PhoneInsight:
        self._insights.append(insight)
        return insight

    def find_exact(self, phone_id: int, pattern: str) -> Optional[PhoneInsight]:
        for insight in self._insights:
            if insight.phone_id == phone_id and insight.priority_pattern == pattern:
                return insight
        return None

    def find_any(self, phone_id: int) -> Optional[PhoneInsight]:
        for insight in self._insights:
            if insight.phone_id == phone_id:
                return insight
        return None


class InMemoryReviewStore:
    """Review content keyed by (source_type, external_id)."""

    def __init__(self, reviews: Optional[List[PhoneReview]] = None):
        self._reviews: Dict[tuple, PhoneReview] = {}
        self._next_id = 1
        for review in reviews or []:
            self.save(review)

    def save(self, review: PhoneReview) -> PhoneReview:
        if review.id is None:
            review = replace(review, id=self._next_id)
            self._next_id += 1
        self._reviews[(review.source_type, review.external_id)] = review
        return review

    def exists(self, source_type: str, external_id: str) -> bool:
        return (source_type, external_id) in self._reviews

    def pending_content(self, source_type: str) -> List[PhoneReview]:
        return [r for r in self._reviews.values()
                if r.source_type == source_type and not r.content]

    def pending_sentiment(self, source_type: str) -> List[PhoneReview]:
        return [r for r in self._reviews.values()
                if r.source_type == source_type and r.analysis_text and r.sentiment_score is None]

    def for_phone(self, phone_id: int, source_type: str) -> List[PhoneReview]:
        return [r for r in self._reviews.values()
                if r.phone_id == phone_id and r.source_type == source_type]
