"""
Spec Scorer - Turn free-text phone specification fields into 0-100 scores.

Each field (camera, battery, memory/storage, processor, display) is parsed
with regex patterns and keyword checks, then mapped through tiered bonus
tables. Missing text always scores a neutral 50.
"""
import re
from typing import Optional, List, Tuple

NEUTRAL_SCORE = 50

MP_PATTERN = re.compile(r'(\d+)\s*mp')
MAH_PATTERN = re.compile(r'(\d+)\s*mah')
WATTAGE_PATTERN = re.compile(r'(\d+)\s*w')
RAM_PATTERN = re.compile(r'(\d+)\s*gb\s*ram')
STORAGE_PATTERN = re.compile(r'(\d+)\s*gb(?!\s*ram)')
SCREEN_SIZE_PATTERN = re.compile(r'(\d+\.\d+)')

# (minimum, bonus) pairs, checked top-down
MEGAPIXEL_TIERS: List[Tuple[int, int]] = [
    (200, 30), (108, 25), (64, 20), (50, 15), (48, 12), (32, 10), (16, 5)
]

BATTERY_CAPACITY_TIERS: List[Tuple[int, int]] = [
    (6000, 40), (5750, 38), (5500, 36), (5250, 34), (5000, 32), (4750, 28),
    (4500, 24), (4250, 20), (4000, 16), (3750, 12), (3500, 8), (3250, 4)
]

CHARGING_WATTAGE_TIERS: List[Tuple[int, int]] = [
    (120, 15), (80, 12), (65, 10), (45, 7), (30, 5), (18, 3)
]

RAM_TIERS: List[Tuple[int, int]] = [
    (16, 20), (12, 17), (8, 14), (6, 10), (4, 6), (3, 3)
]

UFS_BONUSES: List[Tuple[str, int]] = [
    ('ufs 4.0', 8), ('ufs 3.1', 6), ('ufs 3.0', 4)
]

# Chipsets, highest tier first. Names overlap ("snapdragon 8 gen 1" is a
# prefix-neighbor of "snapdragon 8 gen 3"), so the first match wins.
CHIPSET_TIERS: List[Tuple[Tuple[str, ...], int]] = [
    # Flagship
    (('snapdragon 8 gen 3', 'sd 8 gen 3'), 30),
    (('snapdragon 8 gen 2', 'sd 8 gen 2'), 28),
    (('snapdragon 8+ gen 1', 'sd 8+ gen 1'), 26),
    (('snapdragon 8 gen 1', 'sd 8 gen 1'), 24),
    (('snapdragon 888',), 22),
    (('dimensity 9200', 'dimensity 9300'), 28),
    (('dimensity 9000',), 26),
    (('exynos 2400',), 25),
    (('exynos 2200',), 23),
    # Mid-range
    (('snapdragon 7+ gen 3', 'snapdragon 7s gen 3'), 20),
    (('snapdragon 7+ gen 2', 'snapdragon 7s gen 2'), 18),
    (('snapdragon 778', 'snapdragon 780'), 16),
    (('dimensity 8200', 'dimensity 8300'), 18),
    (('dimensity 7200',), 15),
    # Budget
    (('snapdragon 6', 'snapdragon 4'), 10),
    (('dimensity 6',), 10),
    (('helio g',), 8),
]

PROCESS_NODE_BONUSES: List[Tuple[Tuple[str, ...], int]] = [
    (('3nm', '3 nm'), 10),
    (('4nm', '4 nm'), 8),
    (('5nm', '5 nm'), 6),
    (('6nm', '6 nm'), 4),
]

REFRESH_RATE_BONUSES: List[Tuple[Tuple[str, ...], int]] = [
    (('144hz', '144 hz'), 15),
    (('120hz', '120 hz'), 12),
    (('90hz', '90 hz'), 8),
    (('60hz', '60 hz'), 3),
]

RESOLUTION_BONUSES: List[Tuple[Tuple[str, ...], int]] = [
    (('2k', '1440p', 'quad hd'), 12),
    (('fhd+', '1080p', 'full hd'), 8),
    (('hd+',), 4),
]

SCREEN_SIZE_TIERS: List[Tuple[float, int]] = [
    (6.7, 8), (6.5, 6), (6.0, 4)
]


def _tier_bonus(value, tiers) -> int:
    """Bonus of the first (minimum, bonus) tier the value reaches."""
    for minimum, bonus in tiers:
        if value >= minimum:
            return bonus
    return 0


def _keyword_bonus(text: str, table) -> int:
    """Bonus of the first table row with any keyword present in text."""
    for keywords, bonus in table:
        if any(keyword in text for keyword in keywords):
            return bonus
    return 0


def _contains_any(text: str, *keywords: str) -> bool:
    return any(keyword in text for keyword in keywords)


def _count_camera_segments(text: str) -> int:
    """Number of '+'-separated segments, ignoring trailing empty ones."""
    segments = text.split('+')
    while segments and segments[-1] == '':
        segments.pop()
    return len(segments)


class PhoneSpecScorer:
    """
    Heuristic scorer for phone specification strings.

    Every method is a pure function of its text argument: the same text
    always yields the same score, and missing text yields 50.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def score_camera_spec(self, camera_info: Optional[str]) -> int:
        """Megapixels, lens count, and camera feature keywords."""
        if not camera_info:
            return NEUTRAL_SCORE

        score = 40
        lower = camera_info.lower()

        megapixels = [int(mp) for mp in MP_PATTERN.findall(lower)]
        max_mp = max(megapixels) if megapixels else 0
        score += _tier_bonus(max_mp, MEGAPIXEL_TIERS)

        camera_count = _count_camera_segments(lower)
        if camera_count >= 4:
            score += 10
        elif camera_count >= 3:
            score += 7
        elif camera_count >= 2:
            score += 4

        if _contains_any(lower, 'ois', 'optical stabilization'):
            score += 5
        if _contains_any(lower, 'telephoto', 'periscope'):
            score += 5
        if _contains_any(lower, 'ultra wide', 'ultrawide'):
            score += 3
        if 'macro' in lower:
            score += 2
        if _contains_any(lower, 'night mode', 'night sight'):
            score += 3

        return min(100, score)

    def score_battery_spec(self, battery_info: Optional[str]) -> int:
        """Capacity in 250mAh steps plus charging speed and extras."""
        if not battery_info:
            return NEUTRAL_SCORE

        score = 30
        lower = battery_info.lower()

        capacities = [int(mah) for mah in MAH_PATTERN.findall(lower)]
        if capacities:
            score += _tier_bonus(max(capacities), BATTERY_CAPACITY_TIERS)

        wattage_match = WATTAGE_PATTERN.search(lower)
        if wattage_match:
            score += _tier_bonus(int(wattage_match.group(1)), CHARGING_WATTAGE_TIERS)

        if 'wireless' in lower:
            score += 5
        if 'reverse charging' in lower:
            score += 3

        return min(100, score)

    def score_storage_and_ram(self, memory_info: Optional[str]) -> int:
        """
        RAM, storage size, expandability and UFS generation.

        Fixed storage below 128GB is a hard floor: it returns 25 no matter
        how much RAM or how fast the storage is.
        """
        if not memory_info:
            return NEUTRAL_SCORE

        score = 30
        lower = memory_info.lower()

        ram_match = RAM_PATTERN.search(lower)
        if ram_match:
            score += _tier_bonus(int(ram_match.group(1)), RAM_TIERS)

        storages = [int(gb) for gb in STORAGE_PATTERN.findall(lower)]
        max_storage = max(storages) if storages else 0

        expandable = _contains_any(lower, 'expandable', 'card slot', 'microsd')

        if not expandable and max_storage < 128:
            if self.verbose:
                print(f"[!] Storage penalty: {max_storage}GB non-expandable < 128GB")
            return 25

        if max_storage >= 1024:
            score += 30
        elif max_storage >= 512:
            score += 25
        elif max_storage >= 256:
            score += 20
        elif max_storage >= 128:
            score += 17 if expandable else 15
        elif max_storage >= 64 and expandable:
            score += 12
        elif max_storage >= 32 and expandable:
            score += 8

        if expandable:
            score += 5

        for marker, bonus in UFS_BONUSES:
            if marker in lower:
                score += bonus
                break

        return min(100, score)

    def score_processor(self, processor_info: Optional[str]) -> int:
        """Chipset tier lookup plus fabrication process node."""
        if not processor_info:
            return NEUTRAL_SCORE

        score = 40
        lower = processor_info.lower()

        score += _keyword_bonus(lower, CHIPSET_TIERS)
        score += _keyword_bonus(lower, PROCESS_NODE_BONUSES)

        return min(100, score)

    def score_display(self, display_info: Optional[str]) -> int:
        """Panel, refresh rate, resolution, size and display extras."""
        if not display_info:
            return NEUTRAL_SCORE

        score = 35
        lower = display_info.lower()

        if 'oled' in lower:  # covers amoled / super amoled
            score += 15
        elif 'lcd' in lower or 'ips' in lower:
            score += 8

        score += _keyword_bonus(lower, REFRESH_RATE_BONUSES)
        score += _keyword_bonus(lower, RESOLUTION_BONUSES)

        size_match = SCREEN_SIZE_PATTERN.search(lower)
        if size_match:
            score += _tier_bonus(float(size_match.group(1)), SCREEN_SIZE_TIERS)

        if _contains_any(lower, 'ltpo', 'adaptive refresh'):
            score += 5
        if 'hdr10' in lower:  # covers hdr10+
            score += 5
        if 'dolby vision' in lower:
            score += 5
        if _contains_any(lower, 'gorilla glass', 'victus'):
            score += 3

        return min(100, score)

    def score_all(self, phone) -> dict:
        """All five spec scores for a phone's current raw fields."""
        return {
            'camera': self.score_camera_spec(phone.camera_info),
            'battery': self.score_battery_spec(phone.battery),
            'storage': self.score_storage_and_ram(phone.memory_and_storage),
            'processor': self.score_processor(phone.processor),
            'display': self.score_display(phone.display_info)
        }
