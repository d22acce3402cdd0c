"""
Phone Analysis - Feature-level video review analysis for one phone.

For each configured review channel, take the top matching video, score its
transcript per feature, and average the channel scores into the phone's
video sentiment aggregate.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from src.data_pipeline.batch import run_batch
from src.scoring.sentiment_analyzer import FeatureSentimentAnalyzer, NEUTRAL_SCORE
from src.scoring.unified_scorer import UnifiedScorer
from src.store.records import PhoneReview


@dataclass
class PhoneAnalysisResult:
    phone_id: int
    phone_model: str
    average_sentiment_score: int
    channel_scores: Dict[str, int] = field(default_factory=dict)
    channel_feature_scores: Dict[str, Dict[str, int]] = field(default_factory=dict)
    message: str = ""
    has_consensus: bool = False

    @property
    def average_feature_scores(self) -> Dict[str, int]:
        """Floor mean of each feature across the channels that mention it."""
        totals: Dict[str, int] = {}
        counts: Dict[str, int] = {}
        for features in self.channel_feature_scores.values():
            for feature, score in features.items():
                totals[feature] = totals.get(feature, 0) + score
                counts[feature] = counts.get(feature, 0) + 1
        return {feature: totals[feature] // counts[feature] for feature in totals}

    def to_dict(self) -> Dict:
        return {
            'phone_id': self.phone_id,
            'phone_model': self.phone_model,
            'average_sentiment_score': self.average_sentiment_score,
            'channel_scores': self.channel_scores,
            'channel_feature_scores': self.channel_feature_scores,
            'average_feature_scores': self.average_feature_scores,
            'message': self.message,
            'has_consensus': self.has_consensus,
        }


class PhoneAnalysisService:
    """Run feature-based YouTube analysis and store the video aggregate."""

    def __init__(
        self,
        phone_store,
        youtube_client,
        review_store=None,
        analyzer: Optional[FeatureSentimentAnalyzer] = None,
        unified_scorer: Optional[UnifiedScorer] = None,
        delay: float = 2.0,
        verbose: bool = False
    ):
        self.phone_store = phone_store
        self.youtube_client = youtube_client
        self.review_store = review_store
        self.analyzer = analyzer or FeatureSentimentAnalyzer()
        self.unified_scorer = unified_scorer or UnifiedScorer()
        self.delay = delay
        self.verbose = verbose

    def analyze_phone(self, phone_id: int) -> PhoneAnalysisResult:
        """
        Analyze one phone's review videos.

        The phone's video aggregate is only updated when at least one
        transcript was analyzed.

        Raises:
            PhoneNotFoundError: unknown phone id
        """
        phone = self.phone_store.require(phone_id)
        phone_model = phone.display_name

        if self.verbose:
            print(f"[*] Starting feature-based analysis for: {phone_model}")

        videos = self.youtube_client.find_videos_for_phone(phone_model)
        if not videos:
            if self.verbose:
                print(f"[!] No videos found for: {phone_model}")
            return PhoneAnalysisResult(
                phone_id, phone_model, NEUTRAL_SCORE,
                message="No YouTube videos found for analysis"
            )

        channel_scores = {}
        channel_feature_scores = {}

        for channel_name, video in videos.items():
            transcript = self.youtube_client.fetch_transcript(video.video_id)
            self._record_review(phone.id, channel_name, video, transcript)

            if not transcript:
                if self.verbose:
                    print(f"[!] Could not fetch transcript from {channel_name}")
                continue

            feature_scores = self.analyzer.analyze_feature_sentiments(transcript)
            channel_feature_scores[channel_name] = feature_scores
            channel_scores[channel_name] = self.analyzer.calculate_overall_sentiment(feature_scores)

            if self.verbose:
                print(f"    - {channel_name}: overall={channel_scores[channel_name]}, features={feature_scores}")

        if not channel_scores:
            return PhoneAnalysisResult(
                phone_id, phone_model, NEUTRAL_SCORE,
                message="Transcripts could not be fetched"
            )

        average_score = sum(channel_scores.values()) // len(channel_scores)
        has_consensus = self.unified_scorer.has_consensus(channel_scores)

        self.phone_store.update_sentiment(phone.id, 'youtube_sentiment_score', average_score)

        if self.verbose:
            print(f"[+] Analysis complete for {phone_model}. Average sentiment: {average_score}, "
                  f"Channels: {len(channel_scores)}, Consensus: {has_consensus}")

        return PhoneAnalysisResult(
            phone_id=phone_id,
            phone_model=phone_model,
            average_sentiment_score=average_score,
            channel_scores=channel_scores,
            channel_feature_scores=channel_feature_scores,
            message=f"Analyzed {len(channel_scores)} video(s) with feature-based sentiment",
            has_consensus=has_consensus
        )

    def _record_review(self, phone_id: int, channel_name: str, video, transcript: Optional[str]) -> None:
        """Keep the video as a review row; a missing transcript is retried by the transcript job."""
        if self.review_store is None:
            return
        if not transcript and self.review_store.exists('youtube', video.video_id):
            return
        self.review_store.save(PhoneReview(
            phone_id=phone_id,
            source_type='youtube',
            external_id=video.video_id,
            title=video.title,
            url=video.url,
            author=channel_name,
            content=transcript or None
        ))

    def analyze_phones(self, phone_ids: Iterable[int]) -> Dict[int, PhoneAnalysisResult]:
        """Analyze several phones; a failing id is left out of the result."""
        results = {}

        def analyze(phone_id):
            results[phone_id] = self.analyze_phone(phone_id)

        batch = run_batch(
            list(phone_ids),
            analyze,
            label=lambda phone_id: f"phone {phone_id}",
            delay=self.delay,
            verbose=self.verbose
        )
        if self.verbose:
            print(f"[+] Analyzed {batch.succeeded} phones, {batch.failed} failed")
        return results
