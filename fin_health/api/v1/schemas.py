"""Pydantic schemas for API response validation"""

from pydantic import BaseModel
from typing import List

from fin_health.domain.models import CategoryComparison, FinancialScore, Insight, MonthlyAggregate, MonthlyTrendPoint


class PillarDetailsSchema(BaseModel):
    """Explanatory copy for a pillar"""

    how: str
    improve: str
    impact: str


class PillarSchema(BaseModel):
    """Single pillar in a score response"""

    id: str
    name: str
    score: int
    status: str
    weight: int
    phrase: str
    details: PillarDetailsSchema


class ScoreResponse(BaseModel):
    """Response for GET /v1/score"""

    user_id: str
    reference_date: str
    overall: int
    status: str
    phrase: str
    has_data: bool
    pillars: List[PillarSchema]

    @classmethod
    def from_domain(cls, user_id: str, reference_date: str, score: FinancialScore) -> "ScoreResponse":
        return cls(
            user_id=user_id,
            reference_date=reference_date,
            overall=score.overall,
            status=score.status,
            phrase=score.phrase,
            has_data=score.has_data,
            pillars=[
                PillarSchema(
                    id=p.id,
                    name=p.name,
                    score=p.score,
                    status=p.status,
                    weight=p.weight,
                    phrase=p.phrase,
                    details=PillarDetailsSchema(
                        how=p.details.how,
                        improve=p.details.improve,
                        impact=p.details.impact,
                    ),
                )
                for p in score.pillars
            ],
        )


class MonthlyStatsResponse(BaseModel):
    """Response for GET /v1/stats/{month}"""

    user_id: str
    month: str
    total_income: float
    total_expense: float
    balance: float
    savings_rate: float

    @classmethod
    def from_domain(cls, user_id: str, month: str, aggregate: MonthlyAggregate) -> "MonthlyStatsResponse":
        return cls(
            user_id=user_id,
            month=month,
            total_income=float(aggregate.total_income),
            total_expense=float(aggregate.total_expense),
            balance=float(aggregate.balance),
            savings_rate=float(aggregate.savings_rate),
        )


class TrendPointSchema(BaseModel):
    """Single month in the trend"""

    month: str
    label: str
    total_income: float
    total_expense: float
    balance: float
    savings_rate: float


class InsightSchema(BaseModel):
    kind: str
    message: str


class InsightsResponse(BaseModel):
    """Response for GET /v1/insights"""

    user_id: str
    reference_date: str
    trend: List[TrendPointSchema]
    insights: List[InsightSchema]

    @classmethod
    def from_domain(
        cls,
        user_id: str,
        reference_date: str,
        trend: List[MonthlyTrendPoint],
        insights: List[Insight],
    ) -> "InsightsResponse":
        return cls(
            user_id=user_id,
            reference_date=reference_date,
            trend=[
                TrendPointSchema(
                    month=t.month,
                    label=t.label,
                    total_income=float(t.total_income),
                    total_expense=float(t.total_expense),
                    balance=float(t.balance),
                    savings_rate=float(t.savings_rate),
                )
                for t in trend
            ],
            insights=[InsightSchema(kind=i.kind, message=i.message) for i in insights],
        )


class CategoryChangeSchema(BaseModel):
    category: str
    amount_a: float
    amount_b: float
    diff: float
    percent: float


class CategoryComparisonResponse(BaseModel):
    """Response for GET /v1/categories/compare"""

    user_id: str
    month_a: str
    month_b: str
    has_data: bool
    rows: List[CategoryChangeSchema]
    total_a: float
    total_b: float
    total_diff: float
    total_percent: float

    @classmethod
    def from_domain(cls, user_id: str, comparison: CategoryComparison) -> "CategoryComparisonResponse":
        return cls(
            user_id=user_id,
            month_a=comparison.month_a,
            month_b=comparison.month_b,
            has_data=comparison.has_data,
            rows=[
                CategoryChangeSchema(
                    category=row.category,
                    amount_a=float(row.amount_a),
                    amount_b=float(row.amount_b),
                    diff=float(row.diff),
                    percent=float(row.percent),
                )
                for row in comparison.rows
            ],
            total_a=float(comparison.total_a),
            total_b=float(comparison.total_b),
            total_diff=float(comparison.total_diff),
            total_percent=float(comparison.total_percent),
        )
