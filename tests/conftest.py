"""Pytest fixtures for testing"""

import itertools
import pytest
from datetime import date
from typing import Callable, List, Optional
from fastapi.testclient import TestClient
from fin_health.api.main import create_app
from fin_health.domain.models import EXPENSE, INCOME, Transaction

TransactionFactory = Callable[..., Transaction]


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def txn() -> TransactionFactory:
    """Build transactions with sequential IDs"""
    ids = itertools.count(1)

    def build(
        type: str,
        amount: float,
        day: date,
        category: str = "General",
        description: Optional[str] = None,
    ) -> Transaction:
        return Transaction(
            transaction_id=f"tx_{next(ids)}",
            type=type,
            category=category,
            amount=amount,
            date=day,
            description=description,
        )

    return build


@pytest.fixture
def reference_date() -> date:
    return date(2025, 3, 10)


@pytest.fixture
def improving_transactions(txn: TransactionFactory) -> List[Transaction]:
    """
    February overspends on shopping, March earns more and spends less.

    February: income 1000, expenses 950 (500 shopping) over 3 days
    March (to the 10th): income 3000, expenses 1000 (100 shopping) over 3 days
    """
    return [
        txn(INCOME, 1000, date(2025, 2, 1), "Salary"),
        txn(EXPENSE, 500, date(2025, 2, 2), "Shopping"),
        txn(EXPENSE, 450, date(2025, 2, 3), "Rent"),
        txn(INCOME, 3000, date(2025, 3, 1), "Salary"),
        txn(EXPENSE, 100, date(2025, 3, 2), "Shopping"),
        txn(EXPENSE, 900, date(2025, 3, 3), "Rent"),
    ]
