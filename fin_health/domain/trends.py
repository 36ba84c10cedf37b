"""Month-over-month comparison used by the Growth pillar and the impulse bonus"""

from datetime import date
from typing import Iterable

from fin_health.domain.aggregation import MonthlyStatsProvider, summarize_month
from fin_health.domain.impulse import ImpulsePolicy, default_impulse_policy
from fin_health.domain.models import MonthFacts, Transaction, TrendComparison
from fin_health.domain.pillars import commitment_ratio, impulse_band, risk_band
from fin_health.utils.date_utils import previous_month_key

# Previous month's record days are compared against a flat 28-day month,
# whatever its real length.
REFERENCE_MONTH_DAYS = 28

HEALTHY_RESERVE_SCORE = 70


def previous_month_facts(
    transactions: Iterable[Transaction],
    reference_date: date,
    stats_provider: MonthlyStatsProvider,
    impulse_policy: ImpulsePolicy = default_impulse_policy,
) -> MonthFacts:
    """Facts for the calendar month before the reference month"""
    return summarize_month(transactions, previous_month_key(reference_date), stats_provider, impulse_policy)


def previous_impulse_score(previous: MonthFacts) -> int:
    """Previous month's impulse score, without the improvement bonus"""
    return impulse_band(previous.impulse_percent)


def previous_risk_score(previous: MonthFacts) -> int:
    aggregate = previous.aggregate
    return risk_band(commitment_ratio(aggregate.total_income, aggregate.total_expense))


def consistency_reference_ratio(previous: MonthFacts) -> float:
    return previous.unique_days / REFERENCE_MONTH_DAYS


def compare_months(
    previous: MonthFacts,
    impulse_score: int,
    consistency_ratio: float,
    reserve_score: int,
    risk_score: int,
) -> TrendComparison:
    """
    Compare the current month's pillars against the previous month.

    Args:
        previous: facts for the previous calendar month
        impulse_score: current impulse score, bonus included
        consistency_ratio: current unique record days / days elapsed
        reserve_score: current reserve score
        risk_score: current risk score
    """
    return TrendComparison(
        impulse_improved=impulse_score > previous_impulse_score(previous),
        consistency_improved=consistency_ratio > consistency_reference_ratio(previous),
        reserve_healthy=reserve_score >= HEALTHY_RESERVE_SCORE,
        risk_improved=risk_score > previous_risk_score(previous),
        previous_has_data=previous.has_data,
    )
