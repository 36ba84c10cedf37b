"""Transaction storage HTTP client for fetching a user's transaction snapshot"""

import httpx
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List
from fin_health.domain.models import EXPENSE, INCOME, Transaction
from fin_health.domain.exceptions import TransactionSourceError
from fin_health.config import settings


def parse_transaction(txn: Dict[str, Any]) -> Transaction:
    """Convert one API record into a Transaction, rejecting unknown types and non-positive amounts"""
    txn_type = txn["type"]
    if txn_type not in (INCOME, EXPENSE):
        raise ValueError(f"unknown transaction type {txn_type!r}")

    try:
        amount = Decimal(str(txn["amount"]))
    except InvalidOperation:
        raise ValueError(f"invalid amount {txn['amount']!r}")
    if not amount.is_finite():
        raise ValueError(f"invalid amount {amount}")
    if amount <= 0:
        raise ValueError(f"non-positive amount {amount}")

    return Transaction(
        transaction_id=str(txn["transaction_id"] if "transaction_id" in txn else txn["id"]),
        type=txn_type,
        category=txn["category"],
        amount=amount,
        date=date.fromisoformat(txn["date"][:10]),
        description=txn.get("description"),
    )


class TransactionClient:
    """Client for the external transaction storage API"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.transactions_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def get_transactions(self, user_id: str) -> List[Transaction]:
        """
        Fetch every transaction recorded by a user.

        Raises:
            TransactionSourceError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/transactions",
                    params={"user_id": user_id},
                )
                response.raise_for_status()
                data = response.json()

                return [parse_transaction(txn) for txn in data.get("transactions", [])]

            except httpx.TimeoutException as e:
                raise TransactionSourceError(f"Transaction API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise TransactionSourceError(f"Transaction API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise TransactionSourceError(f"Transaction API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise TransactionSourceError(f"Invalid transaction data: {e}") from e
