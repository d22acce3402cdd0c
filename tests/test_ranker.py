"""
Test budget filtering, priority ranking, insights and alternative comparisons.
"""
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.recommend.budget import resolve_budget_range, BUDGET_RANGES
from src.recommend.ranker import (
    PhoneRanker,
    build_priority_pattern,
    calculate_match_score,
    canonical_priorities,
    DEFAULT_IMAGE,
)
from src.store.memory_store import InMemoryPhoneStore, InMemoryInsightStore
from src.store.records import Phone, PhoneInsight


CAMERA_ONLY = {'camera': 100, 'battery': 0, 'performance': 0, 'privacy': 0, 'looks': 0}


def make_phone(brand, model, price, camera=50, battery=50, software=50, privacy=50, looks=50, **extra):
    return Phone(
        id=None,
        brand=brand,
        model=model,
        price=price,
        camera_score=camera,
        battery_score=battery,
        software_score=software,
        privacy_score=privacy,
        looks_score=looks,
        **extra
    )


def make_ranker(phones, insights=None):
    return PhoneRanker(InMemoryPhoneStore(phones), InMemoryInsightStore(insights))


def test_budget_table():
    assert resolve_budget_range('20-25').min == 20000
    assert resolve_budget_range('20-25').max == 25000
    assert resolve_budget_range('New Gen').min == 95000
    assert resolve_budget_range('not-a-bucket').min == 0
    assert resolve_budget_range('not-a-bucket').max == 200000
    assert len(BUDGET_RANGES) == 12


def test_budget_bounds_are_inclusive():
    ranker = make_ranker([
        make_phone("Poco", "X6", 25000),
        make_phone("Poco", "X6 Pro", 25001),
        make_phone("Redmi", "Note 13", 20000),
        make_phone("Redmi", "13C", 19999),
    ])
    results = ranker.get_recommendations('20-25', {})
    names = {rec.model for rec in results}
    assert names == {"X6", "Note 13"}
    assert all(20000 <= rec.price <= 25000 for rec in results)


def test_empty_budget_returns_empty_list():
    ranker = make_ranker([make_phone("Apple", "iPhone 15", 79900)])
    assert ranker.get_recommendations('under-10', CAMERA_ONLY) == []


def test_unknown_budget_uses_default_range():
    ranker = make_ranker([
        make_phone("Nokia", "G42", 12000),
        make_phone("Vertu", "Signature", 250000),
    ])
    results = ranker.get_recommendations('whatever', {})
    assert [rec.model for rec in results] == ["G42"]


def test_match_score_is_weighted_average_over_five():
    phone = make_phone("Acme", "One", 10000, camera=90)
    assert calculate_match_score(phone, CAMERA_ONLY) == 18
    # missing priorities weigh 50: 5 * (50 * 50 // 100) / 5
    assert calculate_match_score(make_phone("Acme", "Two", 10000), {}) == 25


def test_alias_priorities_weigh_like_match_features():
    fast = make_phone("Acme", "Fast", 10000, software=95)
    aliased = {'software': 100, 'camera': 0, 'battery': 0, 'privacy': 0, 'design': 0}
    canonical = {'performance': 100, 'camera': 0, 'battery': 0, 'privacy': 0, 'looks': 0}

    assert canonical_priorities(aliased) == canonical
    assert calculate_match_score(fast, aliased) == 19
    assert calculate_match_score(fast, canonical) == 19
    # canonical name wins over its alias
    assert canonical_priorities({'looks': 10, 'design': 90}) == {'looks': 10}


def test_alias_priorities_rank_like_match_features():
    phones = [
        make_phone("Acme", "Fast", 22000, software=95),
        make_phone("Acme", "Pretty", 23000, looks=95),
    ]
    aliased = make_ranker(phones).get_recommendations('20-25', {'software': 100, 'design': 0})
    canonical = make_ranker(phones).get_recommendations('20-25', {'performance': 100, 'looks': 0})

    assert [rec.to_dict() for rec in aliased] == [rec.to_dict() for rec in canonical]
    assert aliased[0].model == "Fast"


def test_camera_priority_ranks_better_camera_first():
    ranker = make_ranker([
        make_phone("Acme", "Sixty", 22000, camera=60),
        make_phone("Acme", "Ninety", 22000, camera=90),
    ])
    results = ranker.get_recommendations('20-25', CAMERA_ONLY)
    assert [rec.model for rec in results] == ["Ninety", "Sixty"]
    assert results[0].match_score > results[1].match_score
    # base 18, unified 50 -> round(12.6 + 15)
    assert results[0].match_score == 28


def test_duplicate_models_keep_highest_score():
    ranker = make_ranker([
        make_phone("Samsung", "Galaxy M35", 21000, camera=60),
        make_phone("Samsung", "Galaxy M35", 21500, camera=90),
        make_phone("Realme", "Narzo 70", 22000, camera=70),
    ])
    results = ranker.get_recommendations('20-25', CAMERA_ONLY)
    galaxies = [rec for rec in results if rec.model == "Galaxy M35"]
    assert len(galaxies) == 1
    assert galaxies[0].price == 21500
    assert galaxies[0].id == 2


def test_results_are_capped_at_five():
    phones = [make_phone("Brand", f"Model {i}", 30000 + i, camera=40 + i) for i in range(8)]
    results = make_ranker(phones).get_recommendations('30-35', CAMERA_ONLY)
    assert len(results) == 5
    scores = [rec.match_score for rec in results]
    assert scores == sorted(scores, reverse=True)


def test_ranking_is_deterministic():
    phones = [make_phone("Brand", f"Model {i}", 30000 + i, camera=50 + (i % 3)) for i in range(7)]
    ranker = make_ranker(phones)
    first = [rec.to_dict() for rec in ranker.get_recommendations('30-35', CAMERA_ONLY)]
    second = [rec.to_dict() for rec in ranker.get_recommendations('30-35', CAMERA_ONLY)]
    assert first == second


def test_recommendation_defaults():
    ranker = make_ranker([make_phone("Acme", "Bare", 15000)])
    rec = ranker.get_recommendations('15-20', {})[0]
    assert rec.specs['display'] == 'N/A'
    assert rec.affiliate_links == {'amazon': '#', 'flipkart': '#'}
    assert rec.image == DEFAULT_IMAGE
    assert rec.beats_alternatives == []


def test_priority_pattern():
    priorities = {'battery': 40, 'camera': 100, 'looks': 10, 'performance': 70, 'privacy': 20}
    assert build_priority_pattern(priorities) == "camera-performance-battery-privacy-looks"


def test_exact_insight_preferred_over_fallback():
    priorities = {'camera': 100, 'battery': 80, 'performance': 60, 'privacy': 40, 'looks': 20}
    insights = [
        PhoneInsight(phone_id=1, priority_pattern="battery-camera-performance-privacy-looks",
                     why_picked="Fallback pick"),
        PhoneInsight(phone_id=1, priority_pattern="camera-battery-performance-privacy-looks",
                     why_picked="Camera pick", why_love_it="Great night shots"),
    ]
    ranker = make_ranker([make_phone("Google", "Pixel 8a", 39999)], insights)
    rec = ranker.get_recommendations('35-40', priorities)[0]
    assert rec.why_picked == "Camera pick"
    assert rec.why_love_it == "Great night shots"


def test_fallback_insight_used_when_no_exact_match():
    insights = [PhoneInsight(phone_id=1, priority_pattern="looks-camera", why_picked="Any pick")]
    ranker = make_ranker([make_phone("Google", "Pixel 8a", 39999)], insights)
    rec = ranker.get_recommendations('35-40', CAMERA_ONLY)[0]
    assert rec.why_picked == "Any pick"


def test_missing_or_failing_insights_do_not_fail_request():
    ranker = make_ranker([make_phone("Google", "Pixel 8a", 39999)])
    rec = ranker.get_recommendations('35-40', CAMERA_ONLY)[0]
    assert rec.why_picked is None

    broken_insights = Mock()
    broken_insights.find_exact.side_effect = RuntimeError("connection refused")
    ranker = PhoneRanker(InMemoryPhoneStore([make_phone("Google", "Pixel 8a", 39999)]), broken_insights)
    results = ranker.get_recommendations('35-40', CAMERA_ONLY)
    assert len(results) == 1
    assert results[0].why_picked is None


def test_top_pick_comparisons():
    """Equal scores keep store order, so the cheaper first phone is the top pick."""
    results = make_ranker([
        make_phone("Acme", "Top", 20000),
        make_phone("Acme", "Second", 23000),
        make_phone("Acme", "Third", 24000),
        make_phone("Acme", "Fourth", 24500),
    ]).get_recommendations('20-25', {})

    top = results[0]
    assert top.model == "Top"
    assert [(alt.model, alt.reason) for alt in top.beats_alternatives] == [
        ("Second", "₹3,000 cheaper"),
        ("Third", "₹4,000 cheaper"),
    ]
    assert all(rec.beats_alternatives == [] for rec in results[1:])


def test_single_result_has_no_comparisons():
    results = make_ranker([make_phone("Acme", "Only", 20000)]).get_recommendations('20-25', {})
    assert results[0].beats_alternatives == []


def test_count_in_budget():
    ranker = make_ranker([
        make_phone("A", "1", 10000),
        make_phone("B", "2", 12000),
        make_phone("C", "3", 16000),
    ])
    assert ranker.count_in_budget('10-15') == 2
    assert ranker.count_in_budget('under-10') == 1
