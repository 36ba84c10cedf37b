"""GET /v1/categories/compare - Per-category expenses of two months side by side"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fin_health.api.v1.schemas import CategoryComparisonResponse
from fin_health.api.dependencies import get_request_id, get_transaction_client, load_transactions
from fin_health.infrastructure.clients.transactions import TransactionClient
from fin_health.domain.insights import compare_categories
from fin_health.domain.exceptions import InvalidMonthKeyError
from fin_health.utils.date_utils import parse_month_key

router = APIRouter()


@router.get("/categories/compare", response_model=CategoryComparisonResponse)
async def get_category_comparison(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    month_a: str = Query(..., description="Base month (YYYY-MM)"),
    month_b: str = Query(..., description="Compared month (YYYY-MM)"),
    client: TransactionClient = Depends(get_transaction_client),
):
    """
    Compare expenses per category between two months.

    Rows are ordered by absolute change. Percentages are relative to
    month_a; a category with no spending in month_a reports 100%.
    """
    try:
        parse_month_key(month_a)
        parse_month_key(month_b)
    except InvalidMonthKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))

    transactions = await load_transactions(client, user_id, get_request_id(request))

    return CategoryComparisonResponse.from_domain(user_id, compare_categories(transactions, month_a, month_b))
