"""Unit tests for the financial score engine"""

import random
import pytest
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from fin_health.domain.impulse import KeywordImpulsePolicy
from fin_health.domain.models import EXPENSE, INCOME, MonthlyAggregate, PillarDetails, PillarScore
from fin_health.domain.scoring import (
    build_empty_score,
    calculate_financial_score,
    compose_overall,
    overall_phrase,
)

WEIGHTS = [25, 20, 20, 20, 15]


def _pillars(scores, weights=WEIGHTS):
    return [
        PillarScore(f"p{i}", f"Pillar {i}", score, "", weight, "", PillarDetails("", "", ""))
        for i, (score, weight) in enumerate(zip(scores, weights))
    ]


def _expected_overall(scores, weights):
    total = sum(Decimal(s) * Decimal(w) / 100 for s, w in zip(scores, weights))
    return int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _random_weights(rng, parts):
    cuts = sorted(rng.sample(range(1, 100), parts - 1))
    return [b - a for a, b in zip([0] + cuts, cuts + [100])]


@pytest.mark.parametrize("seed", range(25))
def test_compose_overall_is_rounded_weighted_sum(seed):
    rng = random.Random(seed)
    scores = [rng.randint(0, 100) for _ in WEIGHTS]

    assert compose_overall(_pillars(scores)) == _expected_overall(scores, WEIGHTS)


@pytest.mark.parametrize("seed", range(25))
def test_compose_overall_any_weight_split(seed):
    rng = random.Random(seed)
    weights = _random_weights(rng, 5)
    scores = [rng.randint(0, 100) for _ in weights]

    assert sum(weights) == 100
    assert compose_overall(_pillars(scores, weights)) == _expected_overall(scores, weights)


def test_compose_overall_rounds_half_up():
    assert compose_overall(_pillars([62, 63], [50, 50])) == 63


@pytest.mark.parametrize(
    "overall, start",
    [(80, "Your financial health is excellent"), (60, "You are on the right track"),
     (40, "Attention needed"), (39, "Critical situation")],
)
def test_overall_phrase_bands(overall, start):
    assert overall_phrase(overall).startswith(start)


def test_no_transactions_this_month(txn, reference_date):
    """Older history alone does not produce a score"""
    transactions = [txn(INCOME, 1000, date(2025, 2, 1), "Salary")]
    score = calculate_financial_score(transactions, reference_date=reference_date)

    assert score.has_data is False
    assert score.overall == 0
    assert score.status == "Critical"
    assert isinstance(score.pillars, tuple)
    assert [p.id for p in score.pillars] == ["impulse", "consistency", "reserve", "risk", "growth"]
    for pillar in score.pillars:
        assert pillar.score == 0
        assert pillar.status == "Critical"
        assert pillar.details.how == ""
        assert pillar.details.improve == ""
        assert pillar.details.impact == ""
    assert score == build_empty_score()


def test_empty_snapshot(reference_date):
    assert calculate_financial_score([], reference_date=reference_date).has_data is False


def test_single_leisure_expense(txn, reference_date):
    """100 spent on 'Lazer' and nothing else"""
    transactions = [txn(EXPENSE, 100, reference_date, "Lazer")]
    score = calculate_financial_score(transactions, reference_date=reference_date)
    pillars = {p.id: p for p in score.pillars}

    assert score.has_data is True
    assert pillars["impulse"].score == 20  # 100% impulse
    assert pillars["consistency"].score == 10  # 1 of 10 days
    assert pillars["reserve"].score == 20  # negative balance
    assert pillars["risk"].score == 40  # no income
    assert pillars["growth"].score == 75  # first month
    # 20*.25 + 10*.2 + 20*.2 + 40*.2 + 75*.15 = 30.25
    assert score.overall == 30
    assert score.status == "Critical"


def test_improving_month(improving_transactions, reference_date):
    score = calculate_financial_score(improving_transactions, reference_date=reference_date)
    pillars = {p.id: p for p in score.pillars}

    assert pillars["impulse"].score == 100  # 10% impulse, bonus capped
    assert pillars["consistency"].score == 30  # 3 of 10 days
    assert pillars["reserve"].score == 100  # 2050 over 650 average
    assert pillars["risk"].score == 100  # 33% committed
    assert pillars["growth"].score == 90  # 4 pillars improved
    assert score.overall == 85
    assert score.status == "Excellent"
    assert "improved on 4 pillar(s)" in pillars["growth"].details.how


def test_impulse_share_on_exact_breakpoint(txn, reference_date):
    """0.10 + 0.20 of 1.00 spent is exactly 30% impulse"""
    transactions = [
        txn(EXPENSE, 0.10, reference_date, "Leisure"),
        txn(EXPENSE, 0.20, reference_date, "Shopping"),
        txn(EXPENSE, 0.70, reference_date, "Rent"),
    ]
    score = calculate_financial_score(transactions, reference_date=reference_date)
    impulse = score.pillars[0]

    assert impulse.id == "impulse"
    assert impulse.score == 60
    assert "Your current rate is 30%." in impulse.details.how


def test_commitment_on_exact_breakpoint(txn, reference_date):
    """Spending 0.10 + 0.20 of 0.30 income commits exactly 100%"""
    transactions = [
        txn(INCOME, 0.30, reference_date, "Salary"),
        txn(EXPENSE, 0.10, reference_date, "Groceries"),
        txn(EXPENSE, 0.20, reference_date, "Transport"),
    ]
    score = calculate_financial_score(transactions, reference_date=reference_date)
    risk = {p.id: p for p in score.pillars}["risk"]

    assert risk.score == 40
    assert "You committed 100% of your income." in risk.details.how


def test_populated_report_pillars_are_immutable(improving_transactions, reference_date):
    score = calculate_financial_score(improving_transactions, reference_date=reference_date)

    assert isinstance(score.pillars, tuple)
    assert len(score.pillars) == 5


def test_declining_month(txn):
    """Nothing improves on a fully recorded, cheaper February"""
    transactions = [txn(INCOME, 300, date(2025, 2, 1), "Salary")]
    transactions += [txn(EXPENSE, 10, date(2025, 2, day), "Rent") for day in range(1, 29)]
    transactions += [
        txn(INCOME, 100, date(2025, 3, 1), "Salary"),
        txn(EXPENSE, 95, date(2025, 3, 1), "Rent"),
    ]

    score = calculate_financial_score(transactions, reference_date=date(2025, 3, 10))
    pillars = {p.id: p for p in score.pillars}

    assert pillars["impulse"].score == 100
    assert pillars["consistency"].score == 10
    assert pillars["reserve"].score == 20
    assert pillars["risk"].score == 40
    assert pillars["growth"].score == 65
    assert score.overall == 49
    assert score.status == "Attention"


def test_growth_forced_for_first_month(txn, reference_date):
    """Without last month's data growth is 75 whatever else happens"""
    transactions = [
        txn(INCOME, 10000, date(2025, 3, 1), "Salary"),
        txn(EXPENSE, 100, date(2025, 3, 2), "Groceries"),
    ]
    score = calculate_financial_score(transactions, reference_date=reference_date)

    assert score.pillars[4].id == "growth"
    assert score.pillars[4].score == 75


def test_daily_records_without_spike(txn):
    """A transaction on each of the first 10 days of a 30-day month"""
    transactions = [txn(EXPENSE, 20, date(2025, 4, day), "Groceries") for day in range(1, 11)]
    score = calculate_financial_score(transactions, reference_date=date(2025, 4, 10))

    assert score.pillars[1].id == "consistency"
    assert score.pillars[1].score == 100


def test_spike_lowers_consistency(txn):
    transactions = [txn(EXPENSE, 20, date(2025, 4, day), "Groceries") for day in range(1, 10)]
    transactions.append(txn(EXPENSE, 900, date(2025, 4, 10), "Electronics"))
    score = calculate_financial_score(transactions, reference_date=date(2025, 4, 10))

    assert score.pillars[1].score == 90


def test_reserve_averages_three_months(txn):
    """January and February expenses count even though March is quiet"""
    transactions = [
        txn(INCOME, 4000, date(2025, 1, 1), "Salary"),
        txn(EXPENSE, 1500, date(2025, 1, 5), "Rent"),
        txn(EXPENSE, 1500, date(2025, 2, 5), "Rent"),
        txn(INCOME, 2000, date(2025, 3, 1), "Salary"),
    ]
    score = calculate_financial_score(transactions, reference_date=date(2025, 3, 10))

    # balance 3000, average (1500 + 1500 + 0) / 3 = 1000 -> 3 months
    assert score.pillars[2].score == 100


def test_injected_monthly_stats_provider(txn, reference_date):
    transactions = [txn(EXPENSE, 100, reference_date, "Rent")]

    def get_monthly_stats(month):
        return MonthlyAggregate(total_income=1000, total_expense=400, balance=600, savings_rate=0.6)

    score = calculate_financial_score(transactions, reference_date=reference_date, monthly_stats=get_monthly_stats)

    assert score.pillars[3].score == 100  # 40% committed per provider


def test_injected_impulse_policy(txn, reference_date):
    transactions = [txn(EXPENSE, 100, reference_date, "Coffee")]

    default = calculate_financial_score(transactions, reference_date=reference_date)
    custom = calculate_financial_score(
        transactions, reference_date=reference_date, impulse_policy=KeywordImpulsePolicy(["coffee"])
    )

    assert default.pillars[0].score == 100
    assert custom.pillars[0].score == 20


def test_identical_snapshot_gives_identical_report(improving_transactions, reference_date):
    first = calculate_financial_score(improving_transactions, reference_date=reference_date)
    second = calculate_financial_score(improving_transactions, reference_date=reference_date)

    assert first == second


def test_scores_stay_in_range(txn):
    rng = random.Random(7)
    start = date(2024, 10, 1)
    transactions = [
        txn(
            rng.choice([INCOME, EXPENSE]),
            rng.randint(1, 5000),
            start + timedelta(days=rng.randint(0, 160)),
            rng.choice(["Salary", "Rent", "Leisure", "Shopping", "Groceries"]),
        )
        for _ in range(200)
    ]
    score = calculate_financial_score(transactions, reference_date=date(2025, 3, 10))

    assert 0 <= score.overall <= 100
    assert all(0 <= p.score <= 100 for p in score.pillars)
    assert sum(p.weight for p in score.pillars) == 100


def test_defaults_to_today(txn):
    transactions = [txn(EXPENSE, 50, date.today(), "Groceries")]
    assert calculate_financial_score(transactions).has_data is True
