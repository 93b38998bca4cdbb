import pytest
import pandas as pd

from typing import Callable
from unittest.mock import MagicMock
from streamlit.connections import SQLConnection

from expense_tracker.app.data_access import DataGateway, Success, Failure, GatewayError
from expense_tracker.app.naming_conventions import (
    CategorySummaryFields,
    RecentTransactionsFields,
    SpendingSummaryFields,
    TransactionTypes,
)


class ConnFixtures:
    @pytest.fixture(scope='function')
    def db_conn(self, tmp_path) -> SQLConnection:
        """return a connection to an empty sqlite database in a temporary directory"""
        conn = SQLConnection('test_data', url=f"sqlite:///{tmp_path / 'test.db'}")
        yield conn
        conn._instance.dispose()

    @pytest.fixture(scope='function')
    def gateway(self, db_conn) -> DataGateway:
        """return a gateway over an empty database seeded with the default categories"""
        return DataGateway(db_conn)

    @pytest.fixture(scope='function')
    def bare_gateway(self, db_conn) -> DataGateway:
        """return a gateway over an empty database without any category"""
        return DataGateway(db_conn, seed_categories=False)


class MockFixtures:
    @pytest.fixture(scope='function')
    def notifier(self) -> MagicMock:
        """a notifier that records the messages instead of showing them"""
        return MagicMock()

    @pytest.fixture(scope='function')
    def mock_gateway(self, summary_rows_maker, recent_rows_maker, category_rows_maker) -> MagicMock:
        """a gateway double whose aggregate calls all succeed with small fake data"""
        gateway = MagicMock()
        gateway.functions.get_spending_summary.return_value = Success(summary_rows_maker(1000.0, 700.0, 6))
        gateway.views.recent_transactions_detailed.return_value = Success(recent_rows_maker(5))
        gateway.views.expense_summary_by_category.return_value = Success(
            category_rows_maker([('Food & Dining', 400.0, 3), ('Bills & Utilities', 300.0, 1)])
        )
        gateway.expenses.create.side_effect = lambda data: Success({**data, 'id': 'new-expense-id'})
        gateway.income.create.side_effect = lambda data: Success({**data, 'id': 'new-income-id'})
        return gateway

    @pytest.fixture(scope='function')
    def gateway_failure(self) -> Callable:
        """return a function that builds a failed gateway result"""
        def failure(message: str = 'database is locked') -> Failure:
            return Failure(GatewayError(message))
        return failure


class DataFixtures:
    @pytest.fixture(scope='function')
    def summary_rows_maker(self) -> Callable:
        """return a function that creates the single row of the spending summary procedure"""
        def make(total_income: float = 0.0, total_expenses: float = 0.0, transaction_count: int = 0) -> pd.DataFrame:
            f = SpendingSummaryFields
            return pd.DataFrame({
                f.TOTAL_EXPENSES.value: [total_expenses],
                f.TOTAL_INCOME.value: [total_income],
                f.NET_AMOUNT.value: [total_income - total_expenses],
                f.TRANSACTION_COUNT.value: [transaction_count],
            })
        return make

    @pytest.fixture(scope='function')
    def category_rows_maker(self, faker) -> Callable:
        """return a function that creates rows of the expense summary by category view"""
        def make(categories: list[tuple[str, float, int]]) -> pd.DataFrame:
            f = CategorySummaryFields
            return pd.DataFrame({
                f.CATEGORY_ID.value: [faker.uuid4() for _ in categories],
                f.CATEGORY_NAME.value: [name for name, _, _ in categories],
                f.TOTAL_AMOUNT.value: [amount for _, amount, _ in categories],
                f.EXPENSE_COUNT.value: [count for _, _, count in categories],
            }, columns=[f.CATEGORY_ID.value, f.CATEGORY_NAME.value, f.TOTAL_AMOUNT.value, f.EXPENSE_COUNT.value])
        return make

    @pytest.fixture(scope='function')
    def recent_rows_maker(self, faker) -> Callable:
        """return a function that creates fake rows of the recent transactions view, alternating debits and credits"""
        def make(length: int = 5) -> pd.DataFrame:
            f = RecentTransactionsFields
            types = [TransactionTypes.DEBIT.value if i % 2 == 0 else TransactionTypes.CREDIT.value
                     for i in range(length)]
            return pd.DataFrame({
                f.ID.value: [faker.uuid4() for _ in range(length)],
                f.ITEM_NAME.value: [faker.word() for _ in range(length)],
                f.CATEGORY_NAME.value: [faker.word() for _ in range(length)],
                f.AMOUNT.value: [round(faker.pyfloat(min_value=1, max_value=500), 2) for _ in range(length)],
                f.TRANSACTION_TYPE.value: types,
                f.TRANS_DATE.value: [faker.date_this_year().isoformat() for _ in range(length)],
            })
        return make
