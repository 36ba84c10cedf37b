"""Financial health scoring engine - core business logic for the overall score"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from fin_health.domain.aggregation import (
    MonthlyStatsProvider,
    all_time_balance,
    has_expense_spike,
    monthly_stats_provider,
    summarize_month,
    transactions_for_month,
)
from fin_health.domain.impulse import ImpulsePolicy, default_impulse_policy
from fin_health.domain.models import CRITICAL, FinancialScore, PillarDetails, PillarScore, Transaction
from fin_health.domain.pillars import (
    CONSISTENCY_WEIGHT,
    GROWTH_WEIGHT,
    IMPULSE_WEIGHT,
    RESERVE_WEIGHT,
    RISK_WEIGHT,
    get_status,
    score_consistency,
    score_growth,
    score_impulse,
    score_reserve,
    score_risk,
)
from fin_health.domain.trends import compare_months, previous_month_facts
from fin_health.utils.date_utils import days_in_month, month_key, recent_month_keys
from fin_health.utils.decimal_utils import ZERO, to_decimal

RESERVE_WINDOW_MONTHS = 3

NO_DATA_PHRASE = "Record your transactions to unlock your full score."
NO_DATA_PILLAR_PHRASE = "Record transactions to calculate."

# (id, name, weight) in display order
PILLARS = [
    ("impulse", "Impulse Control", IMPULSE_WEIGHT),
    ("consistency", "Consistency", CONSISTENCY_WEIGHT),
    ("reserve", "Reserve", RESERVE_WEIGHT),
    ("risk", "Financial Risk", RISK_WEIGHT),
    ("growth", "Growth", GROWTH_WEIGHT),
]


def compose_overall(pillars: Sequence[PillarScore]) -> int:
    """
    Weighted sum of pillar scores, rounded half up.

    Weights are percentages summing to 100, so the sum is kept in
    integer hundredths to round exactly.
    """
    total = sum(p.score * p.weight for p in pillars)
    return (total + 50) // 100


def overall_phrase(overall: int) -> str:
    if overall >= 80:
        return "Your financial health is excellent! Keep it up."
    elif overall >= 60:
        return "You are on the right track. Small adjustments will make a big difference."
    elif overall >= 40:
        return "Attention needed. Review your financial habits."
    else:
        return "Critical situation. Acting now can change your outlook quickly."


def build_empty_score() -> FinancialScore:
    """Report for a month without transactions: every pillar at 0"""
    pillars = tuple(
        PillarScore(
            id=pillar_id,
            name=name,
            score=0,
            status=CRITICAL,
            weight=weight,
            phrase=NO_DATA_PILLAR_PHRASE,
            details=PillarDetails(how="", improve="", impact=""),
        )
        for pillar_id, name, weight in PILLARS
    )
    return FinancialScore(
        overall=0,
        status=CRITICAL,
        phrase=NO_DATA_PHRASE,
        pillars=pillars,
        has_data=False,
    )


def average_monthly_expense(reference_date: date, stats_provider: MonthlyStatsProvider) -> Decimal:
    """Mean expense of the reference month and the two before it; empty months count as 0"""
    months = recent_month_keys(RESERVE_WINDOW_MONTHS, reference_date)
    total = sum((to_decimal(stats_provider(m).total_expense) for m in months), ZERO)
    return total / RESERVE_WINDOW_MONTHS


def calculate_financial_score(
    transactions: Sequence[Transaction],
    reference_date: Optional[date] = None,
    monthly_stats: Optional[MonthlyStatsProvider] = None,
    impulse_policy: Optional[ImpulsePolicy] = None,
) -> FinancialScore:
    """
    Main entry point: reduce a transaction snapshot into the financial score report.

    Args:
        transactions: every transaction of the user (read-only)
        reference_date: "today"; defaults to the current date
        monthly_stats: getMonthlyStats collaborator; defaults to aggregating `transactions`
        impulse_policy: impulse category classifier; defaults to keyword matching

    Returns FinancialScore with the five pillars in display order.
    """
    if reference_date is None:
        reference_date = date.today()
    if monthly_stats is None:
        monthly_stats = monthly_stats_provider(transactions)
    if impulse_policy is None:
        impulse_policy = default_impulse_policy

    current_month = month_key(reference_date)
    current = summarize_month(transactions, current_month, monthly_stats, impulse_policy)
    if not current.has_data:
        return build_empty_score()

    previous = previous_month_facts(transactions, reference_date, monthly_stats, impulse_policy)

    impulse = score_impulse(current.impulse_percent, previous.impulse_percent)

    days_elapsed = min(reference_date.day, days_in_month(reference_date))
    current_txns = transactions_for_month(transactions, current_month)
    consistency = score_consistency(current.unique_days, days_elapsed, has_expense_spike(current_txns))

    reserve = score_reserve(
        all_time_balance(transactions),
        average_monthly_expense(reference_date, monthly_stats),
    )

    risk = score_risk(current.aggregate.total_income, current.aggregate.total_expense)

    comparison = compare_months(
        previous,
        impulse_score=impulse.score,
        consistency_ratio=current.unique_days / days_elapsed,
        reserve_score=reserve.score,
        risk_score=risk.score,
    )
    growth = score_growth(comparison)

    pillars = (impulse, consistency, reserve, risk, growth)
    overall = compose_overall(pillars)

    return FinancialScore(
        overall=overall,
        status=get_status(overall),
        phrase=overall_phrase(overall),
        pillars=pillars,
        has_data=True,
    )
