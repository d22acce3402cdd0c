"""
Comparison Explainer - Short text on why the top pick beats its runners-up.

Only the user's top two priorities are compared. A feature advantage has to
be at least 5 points to be mentioned; 10+ points gets the stronger phrase.
"""
from typing import Dict, List, Optional, Tuple

MIN_MENTIONABLE_DIFF = 5
STRONG_DIFF = 10

FALLBACK_REASON = "Better overall balance for your priorities"

# feature -> (strong phrase, soft phrase)
ADVANTAGE_PHRASES: Dict[str, Tuple[str, str]] = {
    'camera': ("significantly better camera", "better camera quality"),
    'battery': ("much longer battery life", "better battery life"),
    'performance': ("noticeably faster performance", "smoother performance"),
    'privacy': ("stronger privacy protection", "better privacy features"),
    'looks': ("premium design and build", "better design"),
}

# Request feature name -> Phone score attribute
FEATURE_SCORE_FIELDS = {
    'camera': 'camera_score',
    'battery': 'battery_score',
    'performance': 'software_score',
    'software': 'software_score',
    'privacy': 'privacy_score',
    'looks': 'looks_score',
    'design': 'looks_score',
}

FEATURE_ALIASES = {'software': 'performance', 'design': 'looks'}

NEUTRAL_FEATURE_SCORE = 50


def feature_score(phone, feature: str) -> int:
    """Stored score for a request feature name. Unknown features score 0, unscored ones 50."""
    field_name = FEATURE_SCORE_FIELDS.get(feature.lower())
    if field_name is None:
        return 0
    score = getattr(phone, field_name)
    return NEUTRAL_FEATURE_SCORE if score is None else score


def advantage_text(feature: str, diff: int) -> Optional[str]:
    key = feature.lower()
    phrases = ADVANTAGE_PHRASES.get(FEATURE_ALIASES.get(key, key))
    if phrases is None:
        return None
    strong, soft = phrases
    return strong if diff >= STRONG_DIFF else soft


def join_advantages(advantages: List[str]) -> str:
    if not advantages:
        return FALLBACK_REASON
    if len(advantages) == 1:
        return advantages[0]
    if len(advantages) == 2:
        return f"{advantages[0]} and {advantages[1]}"
    return f"{advantages[0]}, {advantages[1]}, and more"


class ComparisonExplainer:
    """Build the "beats alternatives" reasons for a top pick."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def comparison_reason(self, top_phone, alternative, top_priorities: List[str]) -> str:
        """
        One reason string for top_phone vs. alternative.

        Args:
            top_phone: Phone ranked first
            alternative: A lower-ranked phone
            top_priorities: Up to two feature names, highest weight first

        Returns:
            e.g. "significantly better camera and ₹3,000 cheaper"
        """
        advantages = []

        for priority in top_priorities:
            diff = feature_score(top_phone, priority) - feature_score(alternative, priority)
            if diff >= MIN_MENTIONABLE_DIFF:
                text = advantage_text(priority, diff)
                if text:
                    advantages.append(text)

        if top_phone.price < alternative.price:
            savings = alternative.price - top_phone.price
            advantages.append(f"₹{savings:,} cheaper")

        return join_advantages(advantages)

    def explain(self, top_phone, alternatives, top_priorities: List[str]) -> List[Tuple[str, str, str]]:
        """
        Reasons against the next (at most two) ranked phones.

        Returns:
            [(brand, model, reason)] in rank order
        """
        comparisons = []
        for alternative in list(alternatives)[:2]:
            reason = self.comparison_reason(top_phone, alternative, top_priorities)
            if self.verbose:
                print(f"    - vs {alternative.brand} {alternative.model}: {reason}")
            comparisons.append((alternative.brand, alternative.model, reason))
        return comparisons
