"""GET /v1/insights - Monthly trend and spending insights"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from fin_health.api.v1.schemas import InsightsResponse
from fin_health.api.dependencies import get_request_id, get_transaction_client, load_transactions
from fin_health.infrastructure.clients.transactions import TransactionClient
from fin_health.domain.insights import generate_insights, monthly_trend
from fin_health.config import settings

router = APIRouter()


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    reference_date: Optional[date] = Query(None, description="Date to treat as 'today' (defaults to now)"),
    client: TransactionClient = Depends(get_transaction_client),
):
    """
    Retrieve the recent monthly trend with short observations.

    Returns:
        Last months' totals (oldest first) and insights for the reference month
    """
    if reference_date is None:
        reference_date = date.today()

    transactions = await load_transactions(client, user_id, get_request_id(request))
    window = settings.trend_window_months

    return InsightsResponse.from_domain(
        user_id,
        reference_date.isoformat(),
        monthly_trend(transactions, reference_date, window),
        generate_insights(transactions, reference_date, window),
    )
