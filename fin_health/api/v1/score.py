"""GET /v1/score - Financial health score endpoint"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fin_health.api.v1.schemas import ScoreResponse
from fin_health.api.dependencies import get_request_id, get_transaction_client, load_transactions
from fin_health.infrastructure.clients.transactions import TransactionClient
from fin_health.domain.scoring import calculate_financial_score
from fin_health.infrastructure.observability.metrics import record_score
from fin_health.infrastructure.observability.logging import log_score

router = APIRouter()


@router.get("/score", response_model=ScoreResponse)
async def get_score(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    reference_date: Optional[date] = Query(None, description="Date to score as 'today' (defaults to now)"),
    client: TransactionClient = Depends(get_transaction_client),
):
    """
    Compute the financial health score for a user.

    Flow:
    1. Fetch the user's transaction snapshot from the storage API
    2. Score the reference month across the five pillars
    3. Record metrics and logs
    4. Return the score report
    """
    start_time = time.time()
    request_id = get_request_id(request)
    if reference_date is None:
        reference_date = date.today()

    transactions = await load_transactions(client, user_id, request_id)

    try:
        score = calculate_financial_score(transactions, reference_date=reference_date)
    except Exception as e:
        logging.error(f"Unexpected scoring error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_score(score)
    log_score(request_id, user_id, score.overall, score.status, score.has_data, duration_ms)

    return ScoreResponse.from_domain(user_id, reference_date.isoformat(), score)
