"""
Test unified score blending and consensus detection.
"""
import sys
from pathlib import Path
from dataclasses import replace

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.scoring.unified_scorer import UnifiedScorer, round_half_up
from src.store.records import Phone


def make_phone(**overrides):
    phone = Phone(
        id=1,
        brand="Samsung",
        model="Galaxy A55",
        price=38000,
        memory_and_storage="8 GB RAM | 256 GB ROM",
        display_info="6.6 inch Full HD+ Super AMOLED 120Hz",
        camera_info="50MP + 12MP + 5MP OIS",
        processor="Exynos 1480 4nm",
        battery="5000 mAh 25W"
    )
    return replace(phone, **overrides)


def test_round_half_up():
    assert round_half_up(62.5) == 63
    assert round_half_up(62.49) == 62
    assert round_half_up(0.5) == 1


def test_no_review_signal_equals_spec_score():
    scorer = UnifiedScorer()
    phone = make_phone()
    assert scorer.calculate_unified_score(phone) == scorer.calculate_spec_score(phone)

    empty = Phone(id=2, brand="Acme", model="Blank", price=5000)
    assert scorer.calculate_spec_score(empty) == 50
    assert scorer.calculate_unified_score(empty) == 50


def test_video_signal_is_renormalized():
    scorer = UnifiedScorer()
    empty = Phone(id=2, brand="Acme", model="Blank", price=5000, youtube_sentiment_score=80)
    # (50 * 0.5 + 80 * 0.35) / 0.85 = 62.35
    assert scorer.calculate_unified_score(empty) == 62


def test_social_signal_is_renormalized():
    scorer = UnifiedScorer()
    empty = Phone(id=2, brand="Acme", model="Blank", price=5000, reddit_sentiment_score=90)
    # (50 * 0.5 + 90 * 0.15) / 0.65 = 59.2
    assert scorer.calculate_unified_score(empty) == 59


def test_zero_aggregate_counts_as_missing():
    scorer = UnifiedScorer()
    phone = make_phone(youtube_sentiment_score=0, reddit_sentiment_score=0)
    assert scorer.calculate_unified_score(phone) == scorer.calculate_spec_score(phone)


def test_unified_score_is_monotonic_in_video_score():
    scorer = UnifiedScorer()
    previous = -1
    for video_score in range(1, 101):
        score = scorer.calculate_unified_score(make_phone(youtube_sentiment_score=video_score))
        assert score >= previous
        assert 0 <= score <= 100
        previous = score


def test_consensus_rules():
    scorer = UnifiedScorer()
    assert not scorer.has_consensus(None)
    assert not scorer.has_consensus({'a': 90, 'b': 95})
    assert scorer.has_consensus({'a': 80, 'b': 75, 'c': 90})
    assert not scorer.has_consensus({'a': 80, 'b': 75, 'c': 60})
    # four reviewers need 75% positive
    assert scorer.has_consensus({'a': 80, 'b': 75, 'c': 90, 'd': 10})
    # five or more need 50%
    assert scorer.has_consensus({'a': 80, 'b': 75, 'c': 90, 'd': 10, 'e': 20})
    assert not scorer.has_consensus({'a': 80, 'b': 75, 'c': 10, 'd': 10, 'e': 20})


def test_consensus_bonus_in_breakdown():
    scorer = UnifiedScorer()
    empty = Phone(id=2, brand="Acme", model="Blank", price=5000)

    breakdown = scorer.score_breakdown(empty, {'a': 80, 'b': 75, 'c': 90})
    assert breakdown.has_consensus_bonus
    # (50 * 0.5 + 3) / 0.5
    assert breakdown.unified_score == 56
    assert breakdown.spec_score == 50
    assert breakdown.youtube_score is None

    assert not scorer.score_breakdown(empty).has_consensus_bonus


def test_feature_scores_without_video_are_spec_scores():
    scorer = UnifiedScorer()
    phone = make_phone(looks_score=70)
    features = scorer.calculate_feature_scores(phone)

    assert features['camera'] == scorer.spec_scorer.score_camera_spec(phone.camera_info)
    assert features['battery'] == scorer.spec_scorer.score_battery_spec(phone.battery)
    assert features['design'] == 70


def test_feature_scores_blend_channel_averages():
    scorer = UnifiedScorer()
    phone = make_phone()
    camera_spec = scorer.spec_scorer.score_camera_spec(phone.camera_info)

    features = scorer.calculate_feature_scores(phone, {
        'ChannelA': {'camera': 80},
        'ChannelB': {'camera': 61, 'battery': 40},
    })

    # camera video average is floor(141 / 2) = 70
    assert features['camera'] == round_half_up(camera_spec * 0.6 + 70 * 0.4)
    battery_spec = scorer.spec_scorer.score_battery_spec(phone.battery)
    assert features['battery'] == round_half_up(battery_spec * 0.6 + 40 * 0.4)
    # no channel scored design and there is no video aggregate
    assert features['design'] == 50
