"""
Test spec text scoring heuristics.
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from src.scoring.spec_scorer import PhoneSpecScorer
from src.store.records import Phone


SAMPLE_TEXTS = [
    "108MP + 8MP + 2MP Night Mode",
    "200MP + 50MP + 12MP + 10MP OIS Periscope Telephoto Ultra Wide Macro Night Sight",
    "5000 mAh, 67W Fast Charging",
    "6000 mAh 120W wireless reverse charging",
    "16 GB RAM | 1 TB ROM UFS 4.0",
    "Snapdragon 8 Gen 3 4nm",
    "6.8 inch Quad HD+ Dynamic AMOLED 2X 120Hz LTPO HDR10+ Dolby Vision Gorilla Glass Victus",
    "random words with no specs",
]


@pytest.fixture
def scorer():
    return PhoneSpecScorer()


def test_camera_scenario(scorer):
    """108MP tier + three lenses + night mode."""
    assert scorer.score_camera_spec("108MP + 8MP + 2MP Night Mode") == 75


def test_battery_scenario(scorer):
    """5000mAh tier + 67W charging."""
    assert scorer.score_battery_spec("5000 mAh, 67W Fast Charging") == 72


def test_battery_uses_largest_capacity(scorer):
    assert scorer.score_battery_spec("4500 mAh + 500 mAh") == scorer.score_battery_spec("4500 mAh")


def test_missing_text_is_neutral(scorer):
    for method in (
        scorer.score_camera_spec,
        scorer.score_battery_spec,
        scorer.score_storage_and_ram,
        scorer.score_processor,
        scorer.score_display,
    ):
        assert method(None) == 50
        assert method("") == 50


def test_storage_below_128_is_penalized(scorer):
    assert scorer.score_storage_and_ram("12 GB RAM | 64 GB ROM UFS 4.0") == 25
    assert scorer.score_storage_and_ram("4 GB RAM | 32 GB ROM") == 25


def test_expandable_storage_avoids_penalty(scorer):
    score = scorer.score_storage_and_ram("4 GB RAM | 64 GB ROM | Expandable Upto 1 TB")
    # 30 base + 6 RAM + 64GB expandable 12 + expandable 5
    assert score == 53


def test_storage_tiers(scorer):
    assert scorer.score_storage_and_ram("8 GB RAM | 128 GB ROM") == 30 + 14 + 15
    assert scorer.score_storage_and_ram("8 GB RAM | 256 GB ROM UFS 3.1") == 30 + 14 + 20 + 6


def test_processor_first_chipset_match_wins(scorer):
    assert scorer.score_processor("Qualcomm Snapdragon 8 Gen 3") == 70
    assert scorer.score_processor("Qualcomm Snapdragon 8 Gen 1") == 64
    assert scorer.score_processor("Snapdragon 8 Gen 2 4nm") == 40 + 28 + 8
    assert scorer.score_processor("Unknown Octa Core") == 40


def test_display_panel_and_extras(scorer):
    # 35 + oled 15 + 120hz 12 + fhd+ 8 + 6.7 size 8
    assert scorer.score_display("6.7 inch Full HD+ AMOLED 120Hz") == 78
    # 35 + lcd 8 + 90hz 8 + hd+ 4 + 6.5 size 6
    assert scorer.score_display("6.5 inch HD+ IPS LCD 90Hz") == 61


def test_scores_stay_in_bounds(scorer):
    for text in SAMPLE_TEXTS:
        for method in (
            scorer.score_camera_spec,
            scorer.score_battery_spec,
            scorer.score_storage_and_ram,
            scorer.score_processor,
            scorer.score_display,
        ):
            assert 0 <= method(text) <= 100


def test_scoring_is_idempotent(scorer):
    for text in SAMPLE_TEXTS:
        assert scorer.score_camera_spec(text) == scorer.score_camera_spec(text)
        assert scorer.score_display(text) == scorer.score_display(text)


def test_flagship_camera_collects_every_bonus(scorer):
    # 40 + 200MP 30 + four lenses 10 + ois 5 + periscope 5 + ultra wide 3 + macro 2 + night 3
    assert scorer.score_camera_spec(SAMPLE_TEXTS[1]) == 98


def test_score_all_on_empty_phone(scorer):
    phone = Phone(id=1, brand="Acme", model="Blank", price=10000)
    assert scorer.score_all(phone) == {
        'camera': 50, 'battery': 50, 'storage': 50, 'processor': 50, 'display': 50
    }
