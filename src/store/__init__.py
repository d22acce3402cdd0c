"""
Persistence module.
Record types plus PostgreSQL and in-memory stores sharing one interface.
"""

from .records import Phone, PhoneInsight, PhoneReview, PhoneNotFoundError
from .memory_store import InMemoryPhoneStore, InMemoryInsightStore, InMemoryReviewStore

__all__ = [
    'Phone', 'PhoneInsight', 'PhoneReview', 'PhoneNotFoundError',
    'InMemoryPhoneStore', 'InMemoryInsightStore', 'InMemoryReviewStore'
]
