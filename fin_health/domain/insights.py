"""Monthly trend and spending insights shown alongside the score"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from fin_health.domain.aggregation import category_breakdown, monthly_stats_provider
from fin_health.domain.models import CategoryChange, CategoryComparison, Insight, MonthlyTrendPoint, Transaction
from fin_health.utils.date_utils import month_key, parse_month_key, recent_month_keys
from fin_health.utils.decimal_utils import ZERO, round_half_up

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

EXPENSE_CHANGE_THRESHOLD = 10
GROWTH_STREAK_MONTHS = 3


def monthly_trend(
    transactions: Iterable[Transaction],
    reference_date: date,
    window: int = 6,
) -> List[MonthlyTrendPoint]:
    """Totals for the last `window` months, oldest first"""
    stats = monthly_stats_provider(transactions)
    points = []
    for month in recent_month_keys(window, reference_date):
        aggregate = stats(month)
        points.append(
            MonthlyTrendPoint(
                month=month,
                label=MONTH_LABELS[parse_month_key(month).month - 1],
                total_income=aggregate.total_income,
                total_expense=aggregate.total_expense,
                balance=aggregate.balance,
                savings_rate=aggregate.savings_rate,
            )
        )
    return points


def expense_change_percent(trend: Sequence[MonthlyTrendPoint], month: str) -> Decimal:
    """Expense change versus the previous trend point, in percent (0 when there is no base)"""
    index = next((i for i, point in enumerate(trend) if point.month == month), None)
    if index is None or index == 0:
        return ZERO

    previous = trend[index - 1]
    if previous.total_expense <= 0:
        return ZERO
    return (trend[index].total_expense - previous.total_expense) / previous.total_expense * 100


def top_expense_category(transactions: Iterable[Transaction], month: str) -> Optional[Tuple[str, Decimal]]:
    """Largest expense category of the month, first seen wins ties"""
    best = None
    for category, amount in category_breakdown(transactions, month).items():
        if best is None or amount > best[1]:
            best = (category, amount)
    return best


def _change_percent(base: Decimal, compared: Decimal) -> Decimal:
    """Relative change in percent; 100 when spending appears from nothing"""
    if base > 0:
        return (compared - base) / base * 100
    return Decimal(100) if compared > 0 else ZERO


def compare_categories(transactions: Iterable[Transaction], month_a: str, month_b: str) -> CategoryComparison:
    """
    Compare expenses per category between a base month (a) and another month (b).

    Rows cover every category spent in either month, largest absolute
    change first. The total percent is 0 when the base month has no expenses.
    """
    snapshot = list(transactions)
    breakdown_a = category_breakdown(snapshot, month_a)
    breakdown_b = category_breakdown(snapshot, month_b)

    categories = list(breakdown_a) + [c for c in breakdown_b if c not in breakdown_a]
    rows = []
    for category in categories:
        amount_a = breakdown_a.get(category, ZERO)
        amount_b = breakdown_b.get(category, ZERO)
        rows.append(
            CategoryChange(
                category=category,
                amount_a=amount_a,
                amount_b=amount_b,
                diff=amount_b - amount_a,
                percent=_change_percent(amount_a, amount_b),
            )
        )
    rows.sort(key=lambda row: abs(row.diff), reverse=True)

    total_a = sum(breakdown_a.values(), ZERO)
    total_b = sum(breakdown_b.values(), ZERO)
    total_diff = total_b - total_a

    return CategoryComparison(
        month_a=month_a,
        month_b=month_b,
        rows=tuple(rows),
        total_a=total_a,
        total_b=total_b,
        total_diff=total_diff,
        total_percent=total_diff / total_a * 100 if total_a > 0 else ZERO,
    )


def consecutive_growth(trend: Sequence[MonthlyTrendPoint]) -> int:
    """Number of trend points whose balance beats the point before"""
    return sum(1 for prev, point in zip(trend, trend[1:]) if point.balance > prev.balance)


def generate_insights(
    transactions: Sequence[Transaction],
    reference_date: Optional[date] = None,
    window: int = 6,
) -> List[Insight]:
    """
    Build short observations about the reference month.

    - expenses rose or fell more than 10% versus last month
    - the highest expense category
    - balance growing for 3+ months
    Falls back to a nudge to keep recording when nothing stands out.
    """
    if reference_date is None:
        reference_date = date.today()

    current_month = month_key(reference_date)
    trend = monthly_trend(transactions, reference_date, window)
    insights = []

    change = expense_change_percent(trend, current_month)
    if change > EXPENSE_CHANGE_THRESHOLD:
        insights.append(
            Insight("warning", f"Your expenses rose {round_half_up(change)}% compared with last month.")
        )
    elif change < -EXPENSE_CHANGE_THRESHOLD:
        insights.append(
            Insight("success", f"Well done! You cut your expenses by {round_half_up(abs(change))}% this month.")
        )

    top = top_expense_category(transactions, current_month)
    if top is not None and top[1] > 0:
        insights.append(
            Insight("info", f"Your largest expense category is {top[0]} ({top[1]:,.2f}).")
        )

    streak = consecutive_growth(trend)
    if streak >= GROWTH_STREAK_MONTHS:
        insights.append(
            Insight("success", f"Your balance has grown for {streak} consecutive months!")
        )

    if not insights:
        insights.append(
            Insight("info", "Keep recording your transactions to receive personalised insights.")
        )

    return insights
