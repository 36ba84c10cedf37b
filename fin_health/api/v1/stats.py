"""GET /v1/stats/{month} - Monthly income/expense totals"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fin_health.api.v1.schemas import MonthlyStatsResponse
from fin_health.api.dependencies import get_request_id, get_transaction_client, load_transactions
from fin_health.infrastructure.clients.transactions import TransactionClient
from fin_health.domain.aggregation import monthly_stats
from fin_health.domain.exceptions import InvalidMonthKeyError
from fin_health.utils.date_utils import parse_month_key

router = APIRouter()


@router.get("/stats/{month}", response_model=MonthlyStatsResponse)
async def get_monthly_stats(
    month: str,
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    client: TransactionClient = Depends(get_transaction_client),
):
    """
    Retrieve income, expense, balance and savings rate for a month.

    Returns:
        Totals for the YYYY-MM month (all zero when it has no transactions)
    """
    try:
        parse_month_key(month)
    except InvalidMonthKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))

    transactions = await load_transactions(client, user_id, get_request_id(request))

    return MonthlyStatsResponse.from_domain(user_id, month, monthly_stats(transactions, month))
