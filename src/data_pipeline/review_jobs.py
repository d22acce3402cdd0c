"""
Review Jobs - Batch jobs that keep review content and sentiment aggregates fresh.

Job chain:
1. fetch_missing_transcripts  - fill transcript text for known review videos
2. fetch_reddit_posts         - collect new Reddit posts for every phone
3. analyze_missing_sentiments - score review text with the global lexicon
4. update_phone_aggregate_scores - floor mean of review scores onto each phone

Each job works on a pre-fetched list and isolates failures per item, so a
partial run keeps everything it finished.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional

from src.config import BATCH_DELAY_SECONDS, BATCH_PROCESSING_ENABLED, TRANSCRIPT_BATCH_LIMIT
from src.data_pipeline.batch import BatchResult, run_batch
from src.scoring.sentiment_analyzer import SentimentAnalyzer

AGGREGATE_FIELDS = {
    'youtube': 'youtube_sentiment_score',
    'reddit': 'reddit_sentiment_score',
}


@dataclass
class PendingRunSummary:
    """Outcome of process_all_pending."""
    ran: bool
    transcripts: Optional[BatchResult] = None
    youtube_sentiment: Optional[BatchResult] = None
    reddit_sentiment: Optional[BatchResult] = None
    youtube_aggregates: Optional[BatchResult] = None
    reddit_aggregates: Optional[BatchResult] = None

    @property
    def message(self) -> str:
        if not self.ran:
            return "Batch processing is disabled"
        return "Batch processing complete"


class ReviewJobs:
    """Transcript, Reddit and sentiment batch jobs over the review store."""

    def __init__(
        self,
        phone_store,
        review_store,
        youtube_client=None,
        reddit_client=None,
        analyzer: Optional[SentimentAnalyzer] = None,
        delay: float = BATCH_DELAY_SECONDS,
        transcript_limit: int = TRANSCRIPT_BATCH_LIMIT,
        enabled: bool = BATCH_PROCESSING_ENABLED,
        verbose: bool = False
    ):
        self.phone_store = phone_store
        self.review_store = review_store
        self.youtube_client = youtube_client
        self.reddit_client = reddit_client
        self.analyzer = analyzer or SentimentAnalyzer()
        self.delay = delay
        self.transcript_limit = transcript_limit
        self.enabled = enabled
        self.verbose = verbose

    def fetch_missing_transcripts(self, limit: Optional[int] = None) -> BatchResult:
        """Fetch transcripts for YouTube reviews that have none (at most `limit` per run)."""
        limit = self.transcript_limit if limit is None else limit
        pending = self.review_store.pending_content('youtube')

        if not pending:
            if self.verbose:
                print("[*] No reviews need transcript fetching")
            return BatchResult()

        if self.youtube_client is None:
            print("[!] No YouTube client configured, skipping transcript fetch")
            return BatchResult(skipped=len(pending[:limit]))

        if self.verbose:
            print(f"[*] Found {len(pending)} reviews without transcripts, processing {min(limit, len(pending))}")

        result = run_batch(
            pending[:limit],
            self._fetch_transcript,
            label=lambda review: f"video {review.external_id}",
            delay=self.delay,
            verbose=self.verbose
        )

        if self.verbose:
            print(f"[+] Transcript fetch complete. Success: {result.succeeded}, "
                  f"Empty: {result.skipped}, Failed: {result.failed}")
        return result

    def _fetch_transcript(self, review) -> bool:
        transcript = self.youtube_client.fetch_transcript(review.external_id)
        if not transcript:
            if self.verbose:
                print(f"[!] Empty transcript for: {review.title or review.external_id}")
            return False
        self.review_store.save(replace(review, content=transcript))
        return True

    def fetch_reddit_posts(self, phones: Optional[List] = None) -> BatchResult:
        """Collect new Reddit posts for each phone; already-known post ids are skipped."""
        if self.reddit_client is None:
            print("[!] No Reddit client configured, skipping Reddit fetch")
            return BatchResult()

        phones = self.phone_store.all() if phones is None else phones
        if self.verbose:
            print(f"[*] Fetching Reddit posts for {len(phones)} phones...")

        result = run_batch(
            phones,
            self._fetch_posts_for_phone,
            label=lambda phone: phone.display_name,
            delay=self.delay,
            verbose=self.verbose
        )

        if self.verbose:
            print(f"[+] Reddit fetch complete. Phones with new posts: {result.succeeded}, "
                  f"none new: {result.skipped}, failed: {result.failed}")
        return result

    def _fetch_posts_for_phone(self, phone) -> bool:
        saved = 0
        for post in self.reddit_client.search_phone(phone):
            if self.review_store.exists(post.source_type, post.external_id):
                continue
            self.review_store.save(post)
            saved += 1

        if self.verbose:
            print(f"    - {phone.display_name}: {saved} new posts")
        return saved > 0

    def analyze_missing_sentiments(self, source_type: str = 'youtube') -> BatchResult:
        """Score every review of a source that has text but no sentiment yet."""
        pending = self.review_store.pending_sentiment(source_type)

        if not pending:
            if self.verbose:
                print(f"[*] No {source_type} reviews need sentiment analysis")
            return BatchResult()

        if self.verbose:
            print(f"[*] Analyzing sentiment for {len(pending)} {source_type} reviews...")

        result = run_batch(
            pending,
            self._analyze_review,
            label=lambda review: f"{review.source_type} {review.external_id}",
            verbose=self.verbose
        )

        if self.verbose:
            print(f"[+] Sentiment analysis complete. Analyzed: {result.succeeded}")
        return result

    def _analyze_review(self, review) -> bool:
        text = review.analysis_text
        if not text:
            return False
        score = self.analyzer.analyze_sentiment(text)
        self.review_store.save(replace(review, sentiment_score=score, analyzed_at=datetime.now()))
        return True

    def update_phone_aggregate_scores(self, source_type: str = 'youtube') -> BatchResult:
        """Write the floor mean of each phone's scored reviews to its aggregate for the source."""
        if source_type not in AGGREGATE_FIELDS:
            raise ValueError(f"Unknown review source type: {source_type}")

        if self.verbose:
            print(f"[*] Updating aggregate {source_type} sentiment scores...")

        result = run_batch(
            self.phone_store.all(),
            lambda phone: self._update_aggregate(phone, source_type),
            label=lambda phone: phone.display_name,
            verbose=self.verbose
        )

        if self.verbose:
            print(f"[+] Updated {result.succeeded} phones with aggregate {source_type} scores")
        return result

    def _update_aggregate(self, phone, source_type: str) -> bool:
        scores = [
            review.sentiment_score
            for review in self.review_store.for_phone(phone.id, source_type)
            if review.sentiment_score is not None
        ]
        if not scores:
            return False

        average = sum(scores) // len(scores)
        self.phone_store.update_sentiment(phone.id, AGGREGATE_FIELDS[source_type], average)

        if self.verbose:
            print(f"    - {phone.display_name}: {source_type} sentiment {average} (from {len(scores)} reviews)")
        return True

    def process_all_pending(self) -> PendingRunSummary:
        """Transcripts, then sentiment for both sources, then aggregates."""
        if not self.enabled:
            print("[!] Batch processing is disabled (set BATCH_PROCESSING_ENABLED=true)")
            return PendingRunSummary(ran=False)

        summary = PendingRunSummary(ran=True)
        summary.transcripts = self.fetch_missing_transcripts()
        summary.youtube_sentiment = self.analyze_missing_sentiments('youtube')
        summary.reddit_sentiment = self.analyze_missing_sentiments('reddit')
        summary.youtube_aggregates = self.update_phone_aggregate_scores('youtube')
        summary.reddit_aggregates = self.update_phone_aggregate_scores('reddit')
        return summary
