"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from fin_health.utils.decimal_utils import to_decimal

INCOME = "income"
EXPENSE = "expense"

CRITICAL = "Critical"
ATTENTION = "Attention"
HEALTHY = "Healthy"
EXCELLENT = "Excellent"


@dataclass(frozen=True)
class Transaction:
    """Income or expense record owned by the transaction storage API"""

    transaction_id: str
    type: str  # "income" or "expense"
    category: str
    amount: Decimal
    date: date
    description: Optional[str] = None

    def __post_init__(self):
        # Money stays exact so ratios land on their breakpoints
        object.__setattr__(self, "amount", to_decimal(self.amount))


@dataclass(frozen=True)
class MonthlyAggregate:
    """Income/expense totals for a single month"""

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    savings_rate: Decimal  # fraction of income kept, 0 when there is no income


@dataclass(frozen=True)
class MonthFacts:
    """Per-month figures the pillar scorers work from"""

    month: str
    transaction_count: int
    aggregate: MonthlyAggregate
    impulse_total: Decimal
    impulse_percent: Decimal
    unique_days: int

    @property
    def has_data(self) -> bool:
        return self.transaction_count > 0


@dataclass(frozen=True)
class TrendComparison:
    """Month-over-month comparison feeding the Growth pillar"""

    impulse_improved: bool
    consistency_improved: bool
    reserve_healthy: bool
    risk_improved: bool
    previous_has_data: bool

    @property
    def improved_count(self) -> int:
        return sum(
            [
                self.impulse_improved,
                self.consistency_improved,
                self.reserve_healthy,
                self.risk_improved,
            ]
        )


@dataclass(frozen=True)
class PillarDetails:
    """Explanatory copy shown next to a pillar"""

    how: str
    improve: str
    impact: str


@dataclass(frozen=True)
class PillarScore:
    """One weighted dimension of the financial score"""

    id: str
    name: str
    score: int
    status: str
    weight: int  # percentage of the overall score
    phrase: str
    details: PillarDetails


@dataclass(frozen=True)
class FinancialScore:
    """Output of the scoring engine"""

    overall: int
    status: str
    phrase: str
    pillars: Tuple[PillarScore, ...]
    has_data: bool


@dataclass(frozen=True)
class MonthlyTrendPoint:
    """Monthly totals for the trend view"""

    month: str
    label: str
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    savings_rate: Decimal


@dataclass(frozen=True)
class Insight:
    """Short observation about recent spending"""

    kind: str  # "warning", "success" or "info"
    message: str


@dataclass(frozen=True)
class CategoryChange:
    """Expense movement of one category between two months"""

    category: str
    amount_a: Decimal
    amount_b: Decimal
    diff: Decimal
    percent: Decimal


@dataclass(frozen=True)
class CategoryComparison:
    """Per-category expenses of a base month against a compared month"""

    month_a: str
    month_b: str
    rows: Tuple[CategoryChange, ...]
    total_a: Decimal
    total_b: Decimal
    total_diff: Decimal
    total_percent: Decimal

    @property
    def has_data(self) -> bool:
        return len(self.rows) > 0
