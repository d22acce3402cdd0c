"""
Recommendation module.
Budget resolution, priority-based ranking and alternative comparisons.
"""

from .budget import BudgetRange, BUDGET_RANGES, resolve_budget_range
from .comparison import ComparisonExplainer
from .ranker import PhoneRanker, PhoneRecommendation, AlternativeComparison

__all__ = [
    'BudgetRange', 'BUDGET_RANGES', 'resolve_budget_range',
    'ComparisonExplainer',
    'PhoneRanker', 'PhoneRecommendation', 'AlternativeComparison'
]
