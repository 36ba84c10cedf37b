"""Transaction aggregation - monthly, daily and per-category rollups"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from fin_health.domain.impulse import ImpulsePolicy, default_impulse_policy
from fin_health.domain.models import EXPENSE, INCOME, MonthFacts, MonthlyAggregate, Transaction
from fin_health.utils.date_utils import month_key
from fin_health.utils.decimal_utils import ZERO, to_decimal

# getMonthlyStats collaborator: month key -> aggregate
MonthlyStatsProvider = Callable[[str], MonthlyAggregate]


def sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), ZERO)


def transactions_for_month(transactions: Iterable[Transaction], month: str) -> List[Transaction]:
    return [t for t in transactions if month_key(t.date) == month]


def filter_transactions(
    transactions: Iterable[Transaction],
    month: Optional[str] = None,
    type: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    predicate: Optional[Callable[[Transaction], bool]] = None,
) -> List[Transaction]:
    """
    Select transactions matching every given filter.

    - month: YYYY-MM bucket
    - type: "income" or "expense"
    - category: exact category name
    - search: case-insensitive substring of the description
    - predicate: arbitrary extra condition
    """
    search_lower = search.lower() if search else None
    result = []
    for t in transactions:
        if month is not None and month_key(t.date) != month:
            continue
        if type is not None and t.type != type:
            continue
        if category is not None and t.category != category:
            continue
        if search_lower and search_lower not in (t.description or "").lower():
            continue
        if predicate is not None and not predicate(t):
            continue
        result.append(t)
    return result


def monthly_stats(transactions: Iterable[Transaction], month: str) -> MonthlyAggregate:
    """Income, expense, balance and savings rate for one month"""
    month_txns = transactions_for_month(transactions, month)

    total_income = sum_amounts(t for t in month_txns if t.type == INCOME)
    total_expense = sum_amounts(t for t in month_txns if t.type == EXPENSE)
    balance = total_income - total_expense

    # Savings rate as a fraction (avoid division by zero)
    savings_rate = balance / total_income if total_income > 0 else ZERO

    return MonthlyAggregate(
        total_income=total_income,
        total_expense=total_expense,
        balance=balance,
        savings_rate=savings_rate,
    )


def monthly_stats_provider(transactions: Iterable[Transaction]) -> MonthlyStatsProvider:
    """Default getMonthlyStats bound to a transaction snapshot"""
    snapshot = list(transactions)

    def get_monthly_stats(month: str) -> MonthlyAggregate:
        return monthly_stats(snapshot, month)

    return get_monthly_stats


def all_time_balance(transactions: Iterable[Transaction]) -> Decimal:
    """All-time income minus all-time expense"""
    income = ZERO
    expense = ZERO
    for t in transactions:
        if t.type == INCOME:
            income += t.amount
        elif t.type == EXPENSE:
            expense += t.amount
    return income - expense


def category_breakdown(transactions: Iterable[Transaction], month: str) -> Dict[str, Decimal]:
    """Expense totals per category for a month, in first-seen order"""
    breakdown: Dict[str, Decimal] = defaultdict(Decimal)
    for t in filter_transactions(transactions, month=month, type=EXPENSE):
        breakdown[t.category] += t.amount
    return dict(breakdown)


def daily_expense_totals(transactions: Iterable[Transaction]) -> Dict[date, Decimal]:
    totals: Dict[date, Decimal] = defaultdict(Decimal)
    for t in transactions:
        if t.type == EXPENSE:
            totals[t.date] += t.amount
    return dict(totals)


def unique_days(transactions: Iterable[Transaction]) -> int:
    """Number of distinct calendar dates with at least one transaction"""
    return len({t.date for t in transactions})


def has_expense_spike(transactions: Iterable[Transaction], factor: int = 3) -> bool:
    """
    True when any day's expense total exceeds `factor` times the mean daily total.

    The mean is taken over days that had expenses, so a single expense day
    never counts as a spike.
    """
    totals = list(daily_expense_totals(transactions).values())
    if not totals:
        return False
    mean = sum(totals) / len(totals)
    return any(value > mean * factor for value in totals)


def summarize_month(
    transactions: Iterable[Transaction],
    month: str,
    stats_provider: MonthlyStatsProvider,
    impulse_policy: ImpulsePolicy = default_impulse_policy,
) -> MonthFacts:
    """Collect the figures the pillar scorers need for one month"""
    month_txns = transactions_for_month(transactions, month)
    aggregate = stats_provider(month)

    impulse_total = sum_amounts(
        t for t in month_txns if t.type == EXPENSE and impulse_policy.is_impulse(t.category)
    )
    total_expense = to_decimal(aggregate.total_expense)
    impulse_percent = impulse_total / total_expense if total_expense > 0 else ZERO

    return MonthFacts(
        month=month,
        transaction_count=len(month_txns),
        aggregate=aggregate,
        impulse_total=impulse_total,
        impulse_percent=impulse_percent,
        unique_days=unique_days(month_txns),
    )
