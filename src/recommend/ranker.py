"""
Phone Ranker - Rank phones in a budget against the user's feature priorities.

Pipeline:
1. Resolve the budget label to a price range and load phones in it
2. Score each phone: priority match (70%) + unified score (30%)
3. Attach editorial insights
4. Keep the best variant per brand + model, return the top 5
5. Explain why the top pick beats the next two
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

from src.recommend.budget import resolve_budget_range
from src.recommend.comparison import ComparisonExplainer, FEATURE_ALIASES, feature_score
from src.scoring.unified_scorer import UnifiedScorer, round_half_up

MATCH_FEATURES = ('camera', 'battery', 'performance', 'privacy', 'looks')
DEFAULT_PRIORITY_WEIGHT = 50

PRIORITY_MATCH_WEIGHT = 0.70
UNIFIED_SCORE_WEIGHT = 0.30

MAX_RECOMMENDATIONS = 5

DEFAULT_IMAGE = "https://images.unsplash.com/photo-1511707171634-5f897ff02aa9?w=400&h=800&fit=crop"


@dataclass
class AlternativeComparison:
    brand: str
    model: str
    reason: str


@dataclass
class PhoneRecommendation:
    """One ranked phone as returned to the client."""
    id: int
    brand: str
    model: str
    price: int
    match_score: int
    youtube_sentiment_score: Optional[int]
    reddit_sentiment_score: Optional[int]

    specs: Dict[str, str]
    scores: Dict[str, Optional[int]]
    affiliate_links: Dict[str, str]
    image: str

    why_picked: Optional[str] = None
    why_love_it: Optional[str] = None
    what_to_know: Optional[str] = None

    beats_alternatives: List[AlternativeComparison] = field(default_factory=list)

    @property
    def dedup_key(self) -> str:
        return f"{self.brand}::{self.model}"

    @classmethod
    def from_phone(cls, phone, match_score: int) -> 'PhoneRecommendation':
        return cls(
            id=phone.id,
            brand=phone.brand,
            model=phone.model,
            price=phone.price,
            match_score=match_score,
            youtube_sentiment_score=phone.youtube_sentiment_score,
            reddit_sentiment_score=phone.reddit_sentiment_score,
            specs={
                'display': phone.display_info or 'N/A',
                'processor': phone.processor or 'N/A',
                'memory': phone.memory_and_storage or 'N/A',
                'battery': phone.battery or 'N/A',
                'camera': phone.camera_info or 'N/A',
            },
            scores={
                'camera': phone.camera_score,
                'battery': phone.battery_score,
                'software': phone.software_score,
                'privacy': phone.privacy_score,
                'looks': phone.looks_score,
            },
            affiliate_links={
                'amazon': phone.affiliate_amazon or '#',
                'flipkart': phone.affiliate_flipkart or '#',
            },
            image=phone.image_url or DEFAULT_IMAGE
        )

    def add_insight(self, insight) -> None:
        if insight is not None:
            self.why_picked = insight.why_picked
            self.why_love_it = insight.why_love_it
            self.what_to_know = insight.what_to_know

    def to_dict(self) -> Dict:
        return asdict(self)


def canonical_priorities(priorities: Dict[str, int]) -> Dict[str, int]:
    """
    Rename alias priorities ("software", "design") to their match feature.

    When a request carries both an alias and its canonical name, the
    canonical weight is kept. Insertion order is preserved.
    """
    canonical = {}
    for name, weight in priorities.items():
        key = FEATURE_ALIASES.get(name, name)
        if key != name and key in priorities:
            continue
        canonical[key] = weight
    return canonical


def build_priority_pattern(priorities: Dict[str, int]) -> str:
    """Feature names by weight, highest first: "camera-battery-performance-privacy-looks"."""
    ordered = sorted(priorities.items(), key=lambda item: item[1], reverse=True)
    return '-'.join(name for name, _ in ordered)


def top_priorities(priorities: Dict[str, int], count: int = 2) -> List[str]:
    ordered = sorted(priorities.items(), key=lambda item: item[1], reverse=True)
    return [name for name, _ in ordered[:count]]


def calculate_match_score(phone, priorities: Dict[str, int]) -> int:
    """
    Priority-weighted feature score.

    Each feature contributes score * weight / 100 on its own (weights need not
    sum to 100), and the five contributions are divided by 5.
    """
    priorities = canonical_priorities(priorities)
    total = 0
    for feature in MATCH_FEATURES:
        weight = priorities.get(feature, DEFAULT_PRIORITY_WEIGHT)
        total += feature_score(phone, feature) * weight // 100
    return round_half_up(total / len(MATCH_FEATURES))


class PhoneRanker:
    """
    Rank phones for a budget bucket and a set of feature priorities.

    Reads only; never writes scores back to the store.
    """

    def __init__(
        self,
        phone_store,
        insight_store,
        unified_scorer: Optional[UnifiedScorer] = None,
        explainer: Optional[ComparisonExplainer] = None,
        verbose: bool = False
    ):
        self.phone_store = phone_store
        self.insight_store = insight_store
        self.unified_scorer = unified_scorer or UnifiedScorer()
        self.explainer = explainer or ComparisonExplainer(verbose=verbose)
        self.verbose = verbose

    def get_recommendations(
        self,
        budget_label: str,
        priorities: Optional[Dict[str, int]] = None
    ) -> List[PhoneRecommendation]:
        """
        Top phones for the budget, best match first.

        Args:
            budget_label: Budget bucket, e.g. "20-25" (unknown labels use the full range)
            priorities: feature -> weight (0-100); missing features weigh 50,
                "software" and "design" count as "performance" and "looks"

        Returns:
            Up to 5 recommendations; empty when nothing is in budget
        """
        priorities = canonical_priorities(priorities or {})
        budget = resolve_budget_range(budget_label)

        phones = self.phone_store.find_by_price_range(budget.min, budget.max)
        if self.verbose:
            print(f"[*] Found {len(phones)} phones in budget range: ₹{budget.min} - ₹{budget.max}")

        # Unique by id, first one wins
        phones_by_id = {}
        for phone in phones:
            phones_by_id.setdefault(phone.id, phone)

        priority_pattern = build_priority_pattern(priorities)
        if self.verbose:
            print(f"[*] Priority pattern: {priority_pattern}")

        scored = []
        for phone in phones_by_id.values():
            base_score = calculate_match_score(phone, priorities)
            unified_score = self.unified_scorer.calculate_unified_score(phone)
            final_score = round_half_up(
                base_score * PRIORITY_MATCH_WEIGHT + unified_score * UNIFIED_SCORE_WEIGHT
            )

            recommendation = PhoneRecommendation.from_phone(phone, final_score)
            self._attach_insight(recommendation, priority_pattern)
            scored.append(recommendation)

        scored.sort(key=lambda rec: rec.match_score, reverse=True)

        # Best-scored variant per brand + model
        best_by_model = {}
        for recommendation in scored:
            best_by_model.setdefault(recommendation.dedup_key, recommendation)

        recommendations = sorted(best_by_model.values(), key=lambda rec: rec.match_score, reverse=True)
        recommendations = recommendations[:MAX_RECOMMENDATIONS]

        if len(recommendations) > 1:
            self._attach_comparisons(recommendations, phones_by_id, top_priorities(priorities))

        if self.verbose:
            print(f"[+] Returning {len(recommendations)} recommendations")

        return recommendations

    def _attach_insight(self, recommendation: PhoneRecommendation, priority_pattern: str) -> None:
        """Exact pattern insight, else any insight for the phone. Lookup errors are not fatal."""
        try:
            insight = self.insight_store.find_exact(recommendation.id, priority_pattern)
            if insight is None:
                insight = self.insight_store.find_any(recommendation.id)
            if insight is None and self.verbose:
                print(f"[!] No insights found for phone {recommendation.id}")
            recommendation.add_insight(insight)
        except Exception as e:
            print(f"[-] Error fetching insights for phone {recommendation.id}: {e}")

    def _attach_comparisons(
        self,
        recommendations: List[PhoneRecommendation],
        phones_by_id: Dict,
        priorities: List[str]
    ) -> None:
        top_pick = recommendations[0]
        top_phone = phones_by_id[top_pick.id]
        alternatives = [phones_by_id[rec.id] for rec in recommendations[1:3]]

        for brand, model, reason in self.explainer.explain(top_phone, alternatives, priorities):
            top_pick.beats_alternatives.append(AlternativeComparison(brand, model, reason))

    def count_in_budget(self, budget_label: str) -> int:
        budget = resolve_budget_range(budget_label)
        return self.phone_store.count_by_price_range(budget.min, budget.max)
