"""
Sentiment Analyzer - Lexicon-based sentiment scoring of review text.

Two analyzers share the same 0-100 scale (50 = neutral):

- SentimentAnalyzer: one global positive/negative lexicon. Used for raw
  review posts and transcripts.
- FeatureSentimentAnalyzer: per-feature keyword gates and per-feature
  lexicons. Used for per-video feature breakdowns.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, FrozenSet

NEUTRAL_SCORE = 50

SENTENCE_SPLIT = re.compile(r'[.!?]+')

POSITIVE_WORDS: FrozenSet[str] = frozenset({
    "excellent", "amazing", "great", "good", "best", "fantastic", "outstanding",
    "impressive", "solid", "reliable", "recommend", "love", "perfect", "brilliant",
    "exceptional", "superb", "wonderful", "quality", "premium", "top", "superior",
    "awesome", "powerful", "smooth", "fast", "long", "clear", "bright", "sharp",
    "night photo", "depth of field"
})

NEGATIVE_WORDS: FrozenSet[str] = frozenset({
    "bad", "poor", "worst", "terrible", "awful", "disappointing", "mediocre",
    "issue", "problem", "flaw", "weak", "slow", "lag", "buggy", "worse",
    "overpriced", "expensive", "cheap", "plasticky", "fragile", "heating",
    "battery drain", "camera issue", "not good", "don't recommend", "avoid"
})

FEATURE_KEYWORDS: Dict[str, str] = {
    "camera": "camera|photo|picture|video recording|portrait|night mode|lens",
    "battery": "battery|charge|charging|power|mah|backup",
    "performance": "performance|speed|processor|gaming|multitask|ram|lag",
    "display": "display|screen|brightness|refresh rate|amoled|lcd",
    "design": "design|build|premium|glass|metal|plastic|weight|feel",
}


def ratio_score(positive_count: int, negative_count: int) -> int:
    """50 + (positive share - 0.5) * 100, rounded half up and clamped to 0-100."""
    total = positive_count + negative_count
    if total == 0:
        return NEUTRAL_SCORE
    positive_ratio = positive_count / total
    score = int(50 + (positive_ratio - 0.5) * 100 + 0.5)
    return max(0, min(100, score))


def extract_feature_sentences(text: str, keyword_pattern: str) -> List[str]:
    """Sentences (split on . ! ?) that mention any keyword as a whole word."""
    pattern = re.compile(r'\b(' + keyword_pattern + r')\b', re.IGNORECASE)
    sentences = []
    for sentence in SENTENCE_SPLIT.split(text):
        if pattern.search(sentence):
            sentences.append(sentence.strip())
    return sentences


@dataclass
class SentimentSummary:
    """Overall score plus the per-feature breakdown."""
    overall_score: int
    feature_scores: Dict[str, int] = field(default_factory=dict)


class SentimentAnalyzer:
    """
    Global-lexicon sentiment scoring.

    Counts whole-word occurrences of each lexicon term in the lowercased
    text and maps the positive share onto 0-100.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._patterns = {
            word: re.compile(r'\b' + re.escape(word) + r'\b')
            for word in POSITIVE_WORDS | NEGATIVE_WORDS
        }

    def _count(self, text: str, words) -> int:
        return sum(len(self._patterns[word].findall(text)) for word in words)

    def analyze_sentiment(self, text: str) -> int:
        """
        Score text from 0 (negative) to 100 (positive).

        Args:
            text: Review post or transcript

        Returns:
            Sentiment score; 50 when text is empty or has no lexicon words
        """
        if not text:
            if self.verbose:
                print("[!] Empty text provided for sentiment analysis")
            return NEUTRAL_SCORE

        lower = text.lower()
        positive_count = self._count(lower, POSITIVE_WORDS)
        negative_count = self._count(lower, NEGATIVE_WORDS)

        score = ratio_score(positive_count, negative_count)

        if self.verbose:
            print(f"[+] Sentiment: {positive_count} positive, {negative_count} negative, score={score}")

        return score

    def analyze_feature_sentiments(self, text: str) -> Dict[str, int]:
        """
        Per-feature sentiment over the sentences that mention each feature.

        Features with no matching sentence are left out of the result.
        """
        feature_scores = {}
        if not text:
            return feature_scores

        lower = text.lower()
        for feature, keyword_pattern in FEATURE_KEYWORDS.items():
            sentences = extract_feature_sentences(lower, keyword_pattern)
            if sentences:
                feature_scores[feature] = self.analyze_sentiment(' '.join(sentences))

        return feature_scores

    def generate_summary(self, text: str) -> SentimentSummary:
        return SentimentSummary(
            overall_score=self.analyze_sentiment(text),
            feature_scores=self.analyze_feature_sentiments(text)
        )


@dataclass(frozen=True)
class FeatureLexicon:
    """Keyword gate and sentiment phrases for one phone feature."""
    keywords: str
    positive: FrozenSet[str]
    negative: FrozenSet[str]


FEATURE_LEXICONS: Dict[str, FeatureLexicon] = {
    "camera": FeatureLexicon(
        keywords="camera|photo|picture|video recording|portrait|night mode|lens|zoom|megapixel"
                 "|mp camera|image quality|low light|selfie",
        positive=frozenset({
            "excellent photo", "amazing camera", "great photos", "sharp images", "clear pictures",
            "night mode", "good zoom", "detailed shots", "vibrant colors", "accurate colors",
            "fast focus", "good portrait", "excellent video", "stable video", "4k video",
            "optical zoom", "wide angle", "macro shots", "crisp", "clarity"
        }),
        negative=frozenset({
            "poor camera", "bad photos", "blurry", "grainy", "noise", "washed out",
            "soft focus", "slow shutter", "bad low light", "overexposed", "underexposed",
            "camera issue", "photo quality", "disappointing camera", "mediocre camera"
        })
    ),
    "battery": FeatureLexicon(
        keywords="battery|charge|charging|power|mah|backup|battery life|screen on time|sot"
                 "|all day battery",
        positive=frozenset({
            "long battery", "excellent battery", "all day battery", "great battery life",
            "fast charging", "quick charge", "good backup", "lasts all day", "impressive battery",
            "battery champ", "hours of use", "full day", "two days", "wireless charging",
            "reverse charging", "battery saver", "efficient"
        }),
        negative=frozenset({
            "poor battery", "bad battery", "battery drain", "heating", "overheating",
            "short battery", "dies quickly", "needs frequent charging", "battery issue",
            "disappointing battery", "average battery", "not enough battery"
        })
    ),
    "performance": FeatureLexicon(
        keywords="performance|speed|processor|gaming|multitask|ram|lag|chipset|snapdragon"
                 "|mediatek|exynos|smooth|responsive|fps",
        positive=frozenset({
            "fast", "smooth", "powerful", "no lag", "snappy", "responsive", "excellent performance",
            "handles multitasking", "gaming beast", "high fps", "good processor",
            "flagship performance", "quick", "seamless", "fluid", "benchmark",
            "handles everything", "zero lag"
        }),
        negative=frozenset({
            "slow", "lag", "laggy", "stuttering", "frame drops", "heating", "thermal throttling",
            "poor performance", "struggles with", "app crashes", "freezes", "sluggish",
            "disappointing performance", "not smooth", "choppy"
        })
    ),
    "display": FeatureLexicon(
        keywords="display|screen|brightness|refresh rate|amoled|oled|lcd|panel|viewing angles"
                 "|sunlight|outdoor visibility|colors",
        positive=frozenset({
            "bright", "vibrant display", "excellent screen", "good brightness", "smooth display",
            "120hz", "90hz", "high refresh", "amoled", "oled", "punchy colors", "great viewing",
            "sharp screen", "beautiful display", "immersive", "excellent panel", "good colors"
        }),
        negative=frozenset({
            "dim", "poor brightness", "washed out", "dull colors", "low brightness",
            "pwm flickering", "bad viewing angles", "screen issue", "touch response",
            "ghost touch", "display problem", "disappointing screen", "average display",
            "not bright enough"
        })
    ),
    "design": FeatureLexicon(
        keywords="design|build|premium|glass|metal|plastic|weight|feel|in hand|aesthetics|look"
                 "|style|finish|compact|slim",
        positive=frozenset({
            "premium", "solid build", "great design", "beautiful", "premium feel", "well built",
            "glass back", "metal frame", "good in hand", "lightweight", "comfortable", "sleek",
            "elegant", "modern design", "compact", "good grip", "quality materials",
            "flagship feel"
        }),
        negative=frozenset({
            "cheap", "plasticky", "fragile", "heavy", "bulky", "poor build", "creaky",
            "feels cheap", "bad design", "fingerprint magnet", "slippery", "weak build",
            "disappointing design", "average build", "not premium"
        })
    ),
}


class FeatureSentimentAnalyzer:
    """
    Feature-scoped sentiment scoring.

    Each feature has its own keyword gate and its own positive/negative
    phrases, so "fast" counts for performance but not for camera.
    Phrase occurrences are plain (non-overlapping) substring counts.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def analyze_feature_sentiments(self, text: str) -> Dict[str, int]:
        """Feature -> 0-100 score, for features mentioned in the text."""
        feature_scores = {}

        if not text:
            if self.verbose:
                print("[!] Empty transcript provided")
            return feature_scores

        lower = text.lower()
        for feature, lexicon in FEATURE_LEXICONS.items():
            sentences = extract_feature_sentences(lower, lexicon.keywords)
            if sentences:
                feature_scores[feature] = self._feature_score(sentences, lexicon)
                if self.verbose:
                    print(f"    - {feature}: score={feature_scores[feature]}, sentences={len(sentences)}")

        return feature_scores

    def _feature_score(self, sentences: List[str], lexicon: FeatureLexicon) -> int:
        combined = ' '.join(sentences).lower()
        positive_count = sum(combined.count(phrase) for phrase in lexicon.positive)
        negative_count = sum(combined.count(phrase) for phrase in lexicon.negative)
        return ratio_score(positive_count, negative_count)

    @staticmethod
    def calculate_overall_sentiment(feature_scores: Dict[str, int]) -> int:
        """Unweighted mean of feature scores (floored); 50 when there are none."""
        if not feature_scores:
            return NEUTRAL_SCORE
        return sum(feature_scores.values()) // len(feature_scores)

    def analyze_with_details(self, text: str) -> SentimentSummary:
        feature_scores = self.analyze_feature_sentiments(text)
        return SentimentSummary(
            overall_score=self.calculate_overall_sentiment(feature_scores),
            feature_scores=feature_scores
        )
