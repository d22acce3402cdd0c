"""
Unified Scorer - Blend spec scores with review sentiment into one 0-100 score.

Sources and weights:
- Spec analysis (always present): 0.50
- Video review aggregate: 0.35
- Social post aggregate: 0.15

Missing review sources drop out of the blend and the remaining weight is
renormalized, so a phone with no reviews scores exactly its spec score.
"""
import math
from dataclasses import dataclass, field, asdict
from typing import Dict, Optional

from src.scoring.spec_scorer import PhoneSpecScorer

SPEC_WEIGHT = 0.50
VIDEO_WEIGHT = 0.35
SOCIAL_WEIGHT = 0.15

CONSENSUS_BONUS = 3
MIN_REVIEWERS_FOR_BONUS = 3
CONSENSUS_THRESHOLD = 70

FEATURE_SPEC_WEIGHT = 0.6
FEATURE_VIDEO_WEIGHT = 0.4


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: int) -> int:
    return max(0, min(100, value))


@dataclass
class ScoringBreakdown:
    """Unified score and the inputs that produced it."""
    unified_score: int
    spec_score: int
    youtube_score: Optional[int]
    reddit_score: Optional[int]
    has_consensus_bonus: bool
    spec_scores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return asdict(self)


class UnifiedScorer:
    """
    Combine spec, video-review and social-review signals per phone.

    Stored aggregates of None (or 0) mean "no signal" and are left out of
    the weighted blend instead of counting as a zero score.
    """

    def __init__(self, spec_scorer: Optional[PhoneSpecScorer] = None, verbose: bool = False):
        self.spec_scorer = spec_scorer or PhoneSpecScorer()
        self.verbose = verbose

    def calculate_spec_score(self, phone) -> int:
        """Mean of the five spec scores (floored)."""
        scores = self.spec_scorer.score_all(phone)
        return sum(scores.values()) // len(scores)

    def has_consensus(self, review_scores: Optional[Dict[str, int]]) -> bool:
        """
        True when enough independent reviewers score the phone as positive.

        Needs at least 3 reviewers at or above 70. With 5+ reviewers half of
        them must be positive; with fewer, three quarters.
        """
        if not review_scores or len(review_scores) < MIN_REVIEWERS_FOR_BONUS:
            return False

        positive_count = sum(1 for score in review_scores.values() if score >= CONSENSUS_THRESHOLD)
        if positive_count < MIN_REVIEWERS_FOR_BONUS:
            return False

        total = len(review_scores)
        positive_ratio = positive_count / total
        if total >= 5:
            consensus = positive_ratio >= 0.50
        else:
            consensus = positive_ratio >= 0.75

        if consensus and self.verbose:
            print(f"[+] Reviewer consensus: {positive_count}/{total} positive ({int(positive_ratio * 100)}%)")

        return consensus

    def score_breakdown(
        self,
        phone,
        review_scores: Optional[Dict[str, int]] = None
    ) -> ScoringBreakdown:
        """
        Full unified scoring pass for one phone.

        Args:
            phone: Phone record (raw spec fields + stored aggregates)
            review_scores: Optional per-source video scores (e.g. channel -> score),
                only used for the consensus bonus

        Returns:
            ScoringBreakdown with the unified score and its inputs
        """
        spec_scores = self.spec_scorer.score_all(phone)
        spec_score = sum(spec_scores.values()) // len(spec_scores)

        youtube_score = phone.youtube_sentiment_score
        reddit_score = phone.reddit_sentiment_score

        weighted_sum = spec_score * SPEC_WEIGHT
        tracked_weight = SPEC_WEIGHT

        if youtube_score is not None and youtube_score > 0:
            weighted_sum += youtube_score * VIDEO_WEIGHT
            tracked_weight += VIDEO_WEIGHT

        consensus = self.has_consensus(review_scores)
        if consensus:
            weighted_sum += CONSENSUS_BONUS

        if reddit_score is not None and reddit_score > 0:
            weighted_sum += reddit_score * SOCIAL_WEIGHT
            tracked_weight += SOCIAL_WEIGHT

        if tracked_weight < 1.0:
            weighted_sum = weighted_sum / tracked_weight

        unified = clamp_score(round_half_up(weighted_sum))

        if self.verbose:
            print(f"[*] Unified score for {phone.model}: spec={spec_score}, "
                  f"youtube={youtube_score}, reddit={reddit_score}, final={unified}")

        return ScoringBreakdown(
            unified_score=unified,
            spec_score=spec_score,
            youtube_score=youtube_score,
            reddit_score=reddit_score,
            has_consensus_bonus=consensus,
            spec_scores=spec_scores
        )

    def calculate_unified_score(
        self,
        phone,
        review_scores: Optional[Dict[str, int]] = None
    ) -> int:
        return self.score_breakdown(phone, review_scores).unified_score

    def calculate_feature_scores(
        self,
        phone,
        channel_feature_scores: Optional[Dict[str, Dict[str, int]]] = None
    ) -> Dict[str, int]:
        """
        Per-feature blend of spec scores with averaged video feature scores.

        Args:
            phone: Phone record
            channel_feature_scores: channel -> {feature -> score}

        Returns:
            {camera, battery, performance, display, design} -> 0-100
        """
        spec_by_feature = {
            'camera': self.spec_scorer.score_camera_spec(phone.camera_info),
            'battery': self.spec_scorer.score_battery_spec(phone.battery),
            'performance': self.spec_scorer.score_processor(phone.processor),
            'display': self.spec_scorer.score_display(phone.display_info),
            'design': phone.looks_score if phone.looks_score is not None else 50,
        }

        return {
            feature: self._combine_feature(
                spec_score,
                _average_feature_score(channel_feature_scores, feature),
                phone.youtube_sentiment_score
            )
            for feature, spec_score in spec_by_feature.items()
        }

    @staticmethod
    def _combine_feature(spec_score: int, video_score: int, overall_video: Optional[int]) -> int:
        if video_score == 0 and not overall_video:
            return spec_score
        combined = spec_score * FEATURE_SPEC_WEIGHT + video_score * FEATURE_VIDEO_WEIGHT
        return clamp_score(round_half_up(combined))


def _average_feature_score(
    channel_feature_scores: Optional[Dict[str, Dict[str, int]]],
    feature: str
) -> int:
    """Floored mean of one feature's score across channels; 0 when no channel has it."""
    if not channel_feature_scores:
        return 0
    scores = [scores[feature] for scores in channel_feature_scores.values() if feature in scores]
    return sum(scores) // len(scores) if scores else 0
