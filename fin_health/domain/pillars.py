"""Pillar scorers - five independent heuristics mapping monthly facts to 0-100 sub-scores"""

from decimal import Decimal

from fin_health.domain.models import (
    ATTENTION,
    CRITICAL,
    EXCELLENT,
    HEALTHY,
    PillarDetails,
    PillarScore,
    TrendComparison,
)
from fin_health.utils.decimal_utils import Number, ZERO, round_half_up, to_decimal, whole_percent

IMPULSE_WEIGHT = 25
CONSISTENCY_WEIGHT = 20
RESERVE_WEIGHT = 20
RISK_WEIGHT = 20
GROWTH_WEIGHT = 15

IMPULSE_IMPROVEMENT_BONUS = 5
SPIKE_PENALTY = 10
FIRST_MONTH_GROWTH_SCORE = 75


def get_status(score: float) -> str:
    """Map a 0-100 score to its status band"""
    if score >= 80:
        return EXCELLENT
    elif score >= 60:
        return HEALTHY
    elif score >= 40:
        return ATTENTION
    else:
        return CRITICAL


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return min(high, max(low, value))


def impulse_band(impulse_percent: Number) -> int:
    """
    Score the share of expenses spent in impulse categories.

    Bands (upper bound exclusive, so exactly 0.4 scores 40):
    - > 40%: 20
    - > 30%: 40
    - > 20%: 60
    - > 10%: 80
    - otherwise: 100
    """
    impulse_percent = to_decimal(impulse_percent)
    if impulse_percent > Decimal("0.4"):
        return 20
    elif impulse_percent > Decimal("0.3"):
        return 40
    elif impulse_percent > Decimal("0.2"):
        return 60
    elif impulse_percent > Decimal("0.1"):
        return 80
    else:
        return 100


def reserve_band(reserve_months: Number) -> int:
    """
    Score reserve runway in months of average expense.

    - < 0.5 months: 20
    - < 1 month: 40
    - < 2 months: 70
    - < 3 months: 90
    - 3+ months: 100
    """
    reserve_months = to_decimal(reserve_months)
    if reserve_months < Decimal("0.5"):
        return 20
    elif reserve_months < 1:
        return 40
    elif reserve_months < 2:
        return 70
    elif reserve_months < 3:
        return 90
    else:
        return 100


def risk_band(commitment: Number) -> int:
    """
    Score the fraction of income consumed by expenses.

    - > 100%: 20 (spending more than earned)
    - > 90%: 40
    - > 70%: 60
    - > 50%: 80
    - otherwise: 100
    """
    commitment = to_decimal(commitment)
    if commitment > 1:
        return 20
    elif commitment > Decimal("0.9"):
        return 40
    elif commitment > Decimal("0.7"):
        return 60
    elif commitment > Decimal("0.5"):
        return 80
    else:
        return 100


def growth_band(improved: int) -> int:
    if improved >= 3:
        return 90
    elif improved >= 1:
        return 75
    elif improved == 0:
        return 65
    else:
        return 40


def commitment_ratio(total_income: Number, total_expense: Number) -> Decimal:
    """Expense over income; worst case 1.0 when there is no income"""
    total_income = to_decimal(total_income)
    return to_decimal(total_expense) / total_income if total_income > 0 else Decimal(1)


def reserve_months(reserve_balance: Number, avg_monthly_expense: Number) -> Decimal:
    avg_monthly_expense = to_decimal(avg_monthly_expense)
    return to_decimal(reserve_balance) / avg_monthly_expense if avg_monthly_expense > 0 else ZERO


def _phrase(score: int, high: str, mid: str, low: str, mid_threshold: int = 60) -> str:
    if score >= 80:
        return high
    elif score >= mid_threshold:
        return mid
    return low


def score_impulse(impulse_percent: Number, previous_impulse_percent: Number) -> PillarScore:
    """Impulse Control: lower discretionary share scores higher, +5 for improving on last month"""
    impulse_percent = to_decimal(impulse_percent)
    score = impulse_band(impulse_percent)
    if impulse_percent < to_decimal(previous_impulse_percent):
        score = int(clamp(score + IMPULSE_IMPROVEMENT_BONUS))

    status = get_status(score)
    return PillarScore(
        id="impulse",
        name="Impulse Control",
        score=score,
        status=status,
        weight=IMPULSE_WEIGHT,
        phrase=_phrase(
            score,
            "You are keeping your impulses under control.",
            "Your impulse spending is moderate.",
            "Your impulse spending is high.",
        ),
        details=PillarDetails(
            how=(
                "Based on the share of this month's expenses spent in impulse categories "
                "(leisure, shopping, miscellaneous). The lower that share, the higher the score. "
                f"Your current rate is {whole_percent(impulse_percent)}%."
            ),
            improve=(
                "Avoid impulse purchases. Wait 24 hours before any unplanned purchase "
                "and cut back on leisure and entertainment spending."
            ),
            impact=(
                f"This pillar is {IMPULSE_WEIGHT}% of your overall score. Moving from "
                f'"{status}" to "{HEALTHY}" would add up to 10 points to your final score.'
            ),
        ),
    )


def score_consistency(unique_days: int, days_elapsed: int, has_spike: bool) -> PillarScore:
    """Consistency: share of elapsed days with a record, minus 10 on a spending spike"""
    ratio = Decimal(unique_days) / days_elapsed if days_elapsed > 0 else ZERO
    base = int(clamp(whole_percent(ratio)))
    score = int(clamp(base - SPIKE_PENALTY)) if has_spike else base

    return PillarScore(
        id="consistency",
        name="Consistency",
        score=score,
        status=get_status(score),
        weight=CONSISTENCY_WEIGHT,
        phrase=_phrase(
            score,
            "You keep a disciplined record.",
            "Your record keeping is regular but could improve.",
            "Recording daily makes your finances more accurate.",
        ),
        details=PillarDetails(
            how=(
                "Based on the days with records out of the days elapsed this month. "
                f"You recorded transactions on {unique_days} of {days_elapsed} days ({whole_percent(ratio)}%). "
                "Extreme spending spikes lower the score."
            ),
            improve="Record your transactions every day, even the small ones, right after each payment.",
            impact=(
                f"This pillar is {CONSISTENCY_WEIGHT}% of your overall score. "
                f'Recording daily can lift it to "{EXCELLENT}".'
            ),
        ),
    )


def score_reserve(reserve_balance: Number, avg_monthly_expense: Number) -> PillarScore:
    """Reserve: all-time balance as months of recent average expense"""
    months = reserve_months(reserve_balance, avg_monthly_expense)
    score = reserve_band(months)

    return PillarScore(
        id="reserve",
        name="Reserve",
        score=score,
        status=get_status(score),
        weight=RESERVE_WEIGHT,
        phrase=_phrase(
            score,
            "You have solid financial protection.",
            "Your reserve is growing.",
            "Your reserve is vulnerable.",
        ),
        details=PillarDetails(
            how=(
                "Your accumulated balance divided by your average monthly expenses over the last 3 months. "
                f"You have about {round_half_up(months, 1)} month(s) of reserve. The goal is at least 3 months."
            ),
            improve=(
                "Set aside at least 10% of your income every month for an emergency fund, "
                "ideally in a separate account."
            ),
            impact=(
                f"This pillar is {RESERVE_WEIGHT}% of your overall score. "
                "Reaching 3 months of reserve would score 100 here."
            ),
        ),
    )


def score_risk(total_income: Number, total_expense: Number) -> PillarScore:
    """Risk: how much of this month's income the expenses commit"""
    commitment = commitment_ratio(total_income, total_expense)
    score = risk_band(commitment)

    return PillarScore(
        id="risk",
        name="Financial Risk",
        score=score,
        status=get_status(score),
        weight=RISK_WEIGHT,
        phrase=_phrase(
            score,
            "Your finances are well balanced.",
            "Your income commitment is moderate.",
            "Your income commitment is high.",
        ),
        details=PillarDetails(
            how=(
                "The ratio between this month's expenses and income. "
                f"You committed {whole_percent(commitment)}% of your income. Below 50% is ideal."
            ),
            improve=(
                "Reduce fixed and variable costs, look for extra income "
                "and avoid instalment plans that raise your monthly commitment."
            ),
            impact=(
                f"This pillar is {RISK_WEIGHT}% of your overall score. "
                f'Keeping commitment under 50% would lift it to "{EXCELLENT}".'
            ),
        ),
    )


def score_growth(comparison: TrendComparison) -> PillarScore:
    """Growth: how many pillars improved on last month; 75 for a first month"""
    improved = comparison.improved_count
    if comparison.previous_has_data:
        score = growth_band(improved)
    else:
        score = FIRST_MONTH_GROWTH_SCORE

    return PillarScore(
        id="growth",
        name="Growth",
        score=score,
        status=get_status(score),
        weight=GROWTH_WEIGHT,
        phrase=_phrase(
            score,
            "You improved significantly since last month.",
            "Your performance is steady.",
            "Your performance dropped this month.",
            mid_threshold=65,
        ),
        details=PillarDetails(
            how=(
                "Compares your progress on the other pillars against last month. "
                f"You improved on {improved} pillar(s) compared with last month."
            ),
            improve=(
                "Aim to improve at least 3 pillars every month. Review your habits monthly "
                "and set small, reachable goals."
            ),
            impact=(
                f"This pillar is {GROWTH_WEIGHT}% of your overall score. "
                "Improving 3 or more pillars in a row gives the top score here."
            ),
        ),
    )
