"""
Scoring module.
Spec text heuristics, review sentiment and the unified phone score.
"""

from .spec_scorer import PhoneSpecScorer
from .sentiment_analyzer import SentimentAnalyzer, FeatureSentimentAnalyzer, SentimentSummary
from .unified_scorer import UnifiedScorer, ScoringBreakdown

__all__ = [
    'PhoneSpecScorer',
    'SentimentAnalyzer', 'FeatureSentimentAnalyzer', 'SentimentSummary',
    'UnifiedScorer', 'ScoringBreakdown'
]
