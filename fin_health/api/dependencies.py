"""Dependency injection for FastAPI endpoints"""

import logging
from typing import List
from fastapi import HTTPException, Request
from fin_health.domain.exceptions import TransactionSourceError
from fin_health.domain.models import Transaction
from fin_health.infrastructure.clients.transactions import TransactionClient
from fin_health.infrastructure.observability.metrics import transaction_fetch_failures_counter


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_transaction_client() -> TransactionClient:
    """Provide transaction storage API client instance"""
    return TransactionClient()


async def load_transactions(client: TransactionClient, user_id: str, request_id: str) -> List[Transaction]:
    """Fetch a user's snapshot, mapping source failures to 503"""
    try:
        return await client.get_transactions(user_id)
    except TransactionSourceError as e:
        transaction_fetch_failures_counter.inc()
        logging.error(f"Transaction API error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=503, detail="Transaction service unavailable")
