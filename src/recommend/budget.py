"""
Budget buckets - Fixed mapping from budget labels to inclusive price ranges.
"""
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class BudgetRange:
    min: int
    max: int


# "New Gen" overlaps "75-plus"; both ranges are kept as labeled.
BUDGET_RANGES = MappingProxyType({
    'under-10': BudgetRange(0, 10000),
    '10-15': BudgetRange(10000, 15000),
    '15-20': BudgetRange(15000, 20000),
    '20-25': BudgetRange(20000, 25000),
    '25-30': BudgetRange(25000, 30000),
    '30-35': BudgetRange(30000, 35000),
    '35-40': BudgetRange(35000, 40000),
    '40-50': BudgetRange(40000, 50000),
    '50-60': BudgetRange(50000, 60000),
    '60-75': BudgetRange(60000, 75000),
    '75-plus': BudgetRange(75000, 200000),
    'New Gen': BudgetRange(95000, 300000),
})

DEFAULT_BUDGET_RANGE = BudgetRange(0, 200000)


def resolve_budget_range(label: str) -> BudgetRange:
    """Price range for a budget label; unknown labels get the full default range."""
    return BUDGET_RANGES.get(label, DEFAULT_BUDGET_RANGE)
