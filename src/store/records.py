"""
Record types shared by the stores, scorers and ranker.
"""
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, Optional


class PhoneNotFoundError(LookupError):
    """Raised when a phone id does not exist in the store."""

    def __init__(self, phone_id: int):
        super().__init__(f"Phone not found: {phone_id}")
        self.phone_id = phone_id


# Column groups written independently of each other
SCORE_FIELDS = ('camera_score', 'battery_score', 'software_score', 'privacy_score', 'looks_score')
SENTIMENT_FIELDS = ('youtube_sentiment_score', 'reddit_sentiment_score')


def check_phone_columns(values: Dict, allowed) -> None:
    """Raise ValueError unless every key of values is in allowed."""
    unknown = sorted(set(values) - set(allowed))
    if unknown:
        raise ValueError(f"Cannot update phone columns here: {', '.join(unknown)}")


@dataclass
class Phone:
    """A phone listing with raw spec text and derived scores."""
    id: Optional[int]
    brand: str
    model: str
    price: int

    # Raw spec text from the CSV export (each may be missing)
    memory_and_storage: Optional[str] = None
    display_info: Optional[str] = None
    camera_info: Optional[str] = None
    processor: Optional[str] = None
    battery: Optional[str] = None

    image_url: Optional[str] = None

    # Derived feature scores (0-100)
    camera_score: Optional[int] = None
    battery_score: Optional[int] = None
    software_score: Optional[int] = None
    privacy_score: Optional[int] = None
    looks_score: Optional[int] = None

    affiliate_amazon: Optional[str] = None
    affiliate_flipkart: Optional[str] = None

    # Review aggregates (None = no signal yet)
    youtube_sentiment_score: Optional[int] = None
    reddit_sentiment_score: Optional[int] = None

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class PhoneInsight:
    """Editorial text shown next to a recommendation."""
    phone_id: int
    priority_pattern: Optional[str] = None  # e.g. "camera-performance-battery-privacy-looks"
    why_picked: Optional[str] = None
    why_love_it: Optional[str] = None
    what_to_know: Optional[str] = None
    id: Optional[int] = None


REVIEW_SOURCE_TYPES = ('youtube', 'reddit')


@dataclass
class PhoneReview:
    """A piece of external review content (video transcript or social post)."""
    phone_id: int
    source_type: str  # "youtube" or "reddit"
    external_id: str  # video id or post id
    title: Optional[str] = None
    url: Optional[str] = None
    author: Optional[str] = None  # channel name or subreddit
    content: Optional[str] = None
    sentiment_score: Optional[int] = None
    analyzed_at: Optional[datetime] = None
    id: Optional[int] = None

    def __post_init__(self):
        if self.source_type not in REVIEW_SOURCE_TYPES:
            raise ValueError(
                f"Unknown review source type: {self.source_type}. "
                f"Must be one of {', '.join(REVIEW_SOURCE_TYPES)}"
            )

    @property
    def analysis_text(self) -> str:
        """Text fed to sentiment analysis: transcript, or post title + body."""
        if self.source_type == 'reddit':
            combined = ''
            if self.title:
                combined += self.title + '. '
            if self.content:
                combined += self.content
            return combined.strip()
        return (self.content or '').strip()
