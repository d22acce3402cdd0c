"""
Score Updater - Recompute and persist a phone's derived feature scores.

Runs at CSV import and from rescoring jobs. All five scores are computed
first and written back in a single update, so readers never see a mix of
old and new scores for one phone. The update touches only the score
columns; review aggregates are written by the sentiment jobs.
"""
from dataclasses import dataclass, replace
from typing import Dict, Optional

from src.scoring.spec_scorer import PhoneSpecScorer
from src.data_pipeline.batch import run_batch, BatchResult

# Brand substring -> privacy score, checked in order
BRAND_PRIVACY_SCORES = [
    (('apple',), 85),
    (('google',), 75),
    (('samsung',), 70),
    (('xiaomi', 'oppo', 'vivo', 'realme', 'oneplus'), 55),
    (('motorola', 'nokia'), 70),
    (('asus', 'sony'), 72),
]
DEFAULT_PRIVACY_SCORE = 60

PRICE_BUILD_BONUSES = [
    (80000, 15), (60000, 12), (40000, 8), (25000, 5), (15000, 2)
]


@dataclass
class UpdateResult:
    updated: int
    failed: int

    @property
    def total(self) -> int:
        return self.updated + self.failed

    def __str__(self) -> str:
        return f"Updated: {self.updated}, Failed: {self.failed}, Total: {self.total}"


def privacy_score_for_brand(brand: Optional[str]) -> int:
    lower = (brand or '').lower()
    for names, score in BRAND_PRIVACY_SCORES:
        if any(name in lower for name in names):
            return score
    return DEFAULT_PRIVACY_SCORE


def build_quality_score(brand: Optional[str], price: int) -> int:
    """Build quality estimate from brand reputation and price bracket."""
    lower = (brand or '').lower()
    score = 50

    if 'apple' in lower or ('samsung' in lower and price > 50000):
        score = 75
    elif any(name in lower for name in ('oneplus', 'google', 'motorola')):
        score = 65
    elif any(name in lower for name in ('xiaomi', 'realme', 'oppo', 'vivo')):
        score = 55

    for threshold, bonus in PRICE_BUILD_BONUSES:
        if price > threshold:
            score += bonus
            break

    return min(100, score)


class PhoneScoreUpdater:
    """Recompute derived scores for phones in a store."""

    def __init__(self, phone_store, spec_scorer: Optional[PhoneSpecScorer] = None, verbose: bool = False):
        self.phone_store = phone_store
        self.spec_scorer = spec_scorer or PhoneSpecScorer()
        self.verbose = verbose

    def derived_scores(self, phone) -> Dict[str, int]:
        """The five derived score columns for a phone's raw fields."""
        display_score = self.spec_scorer.score_display(phone.display_info)
        looks_score = (display_score + build_quality_score(phone.brand, phone.price)) // 2

        privacy_score = phone.privacy_score
        if not privacy_score:
            privacy_score = privacy_score_for_brand(phone.brand)

        return {
            'camera_score': self.spec_scorer.score_camera_spec(phone.camera_info),
            'battery_score': self.spec_scorer.score_battery_spec(phone.battery),
            'software_score': self.spec_scorer.score_processor(phone.processor),
            'privacy_score': privacy_score,
            'looks_score': looks_score,
        }

    def compute_scores(self, phone):
        """Return a copy of phone with all derived scores recomputed (not saved)."""
        return replace(phone, **self.derived_scores(phone))

    def update_phone_scores(self, phone):
        """Write the derived scores only; review aggregates stored meanwhile are kept."""
        scores = self.derived_scores(phone)
        if self.verbose:
            print(f"[*] Scores for {phone.display_name}: camera={scores['camera_score']}, "
                  f"battery={scores['battery_score']}, perf={scores['software_score']}, "
                  f"looks={scores['looks_score']}, privacy={scores['privacy_score']}")
        return self.phone_store.update_scores(phone.id, scores)

    def update_phone_by_id(self, phone_id: int):
        """Rescore one phone. Raises PhoneNotFoundError for unknown ids."""
        return self.update_phone_scores(self.phone_store.require(phone_id))

    def update_all_phone_scores(self) -> UpdateResult:
        if self.verbose:
            print("[*] Rescoring all phones...")
        return self._update_many(self.phone_store.all())

    def update_phones_by_price_range(self, min_price: int, max_price: int) -> UpdateResult:
        if self.verbose:
            print(f"[*] Rescoring phones priced {min_price} - {max_price}...")
        return self._update_many(self.phone_store.find_by_price_range(min_price, max_price))

    def _update_many(self, phones) -> UpdateResult:
        result: BatchResult = run_batch(
            phones,
            self.update_phone_scores,
            label=lambda phone: f"phone {phone.id}",
            verbose=self.verbose
        )
        update_result = UpdateResult(updated=result.succeeded, failed=result.failed)
        if self.verbose:
            print(f"[+] Rescoring complete. {update_result}")
        return update_result
