"""
The data access gateway. Every operation of the repositories is exposed here with a discriminated result, a
``Success`` carrying the data or a ``Failure`` carrying a ``GatewayError``, so callers never inspect a nullable
error field.
"""
import logging
import pandas as pd
from typing import Callable, Literal, Optional
from sqlalchemy.exc import SQLAlchemyError
from streamlit.connections import SQLConnection

from expense_tracker.app.data_access.result import Result, Success, Failure, GatewayError
from expense_tracker.app.data_access.schema import assure_schema, seed_default_categories
from expense_tracker.app.data_access.resource_repository import (
    ResourceRepository,
    ExpenseCategoriesRepository,
    ExpensesRepository,
    IncomeRepository,
    TransactionsRepository,
)
from expense_tracker.app.data_access.views_repository import ViewsRepository, FunctionsRepository


logger = logging.getLogger(__name__)


def _execute(operation: str, func: Callable, *args, not_found: Optional[str] = None, **kwargs) -> Result:
    """
    Run a repository call and wrap its outcome.

    Parameters
    ----------
    operation : str
        A short description of the operation, used in the log and error messages.
    func : Callable
        The repository method to call.
    not_found : str | None
        If given, a None return value is turned into a failure with this message.
    """
    try:
        data = func(*args, **kwargs)
    except SQLAlchemyError as exc:
        logger.exception("Gateway operation '%s' failed", operation)
        message = str(getattr(exc, 'orig', None) or exc)
        return Failure(GatewayError(message))

    if data is None and not_found is not None:
        logger.warning("Gateway operation '%s': %s", operation, not_found)
        return Failure(GatewayError(not_found))
    return Success(data)


class ResourceGateway:
    """CRUD operations of a single stored resource"""
    def __init__(self, repository: ResourceRepository):
        self.repository = repository
        self.name = repository.table

    def get_all(self) -> Result:
        return _execute(f'{self.name}.get_all', self.repository.get_all)

    def get_by_id(self, id_: str) -> Result:
        return _execute(f'{self.name}.get_by_id', self.repository.get_by_id, id_,
                        not_found=f"No row with id '{id_}' in {self.name}")

    def create(self, data: dict) -> Result:
        return _execute(f'{self.name}.create', self.repository.create, data)

    def update(self, id_: str, data: dict) -> Result:
        return _execute(f'{self.name}.update', self.repository.update, id_, data,
                        not_found=f"No row with id '{id_}' in {self.name}")

    def delete(self, id_: str) -> Result:
        return _execute(f'{self.name}.delete', self.repository.delete, id_)


class ExpensesGateway(ResourceGateway):
    repository: ExpensesRepository

    def get_by_category(self, category_id: str) -> Result:
        return _execute(f'{self.name}.get_by_category', self.repository.get_by_category, category_id)


class TransactionsGateway(ResourceGateway):
    repository: TransactionsRepository

    def get_by_type(self, transaction_type: Literal['debit', 'credit']) -> Result:
        return _execute(f'{self.name}.get_by_type', self.repository.get_by_type, transaction_type)

    def get_by_date_range(self, start_date: str, end_date: str) -> Result:
        return _execute(f'{self.name}.get_by_date_range', self.repository.get_by_date_range, start_date, end_date)


class ViewsGateway:
    def __init__(self, repository: ViewsRepository):
        self.repository = repository

    def expense_summary_by_category(self) -> Result:
        return _execute('expense_summary_by_category', self.repository.expense_summary_by_category)

    def monthly_financial_summary(self) -> Result:
        return _execute('monthly_financial_summary', self.repository.monthly_financial_summary)

    def recent_transactions_detailed(self, limit: int = 10) -> Result:
        return _execute('recent_transactions_detailed', self.repository.recent_transactions_detailed, limit)


class FunctionsGateway:
    def __init__(self, repository: FunctionsRepository):
        self.repository = repository

    def get_spending_summary(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> Result:
        return _execute('get_spending_summary', self.repository.get_spending_summary, start_date, end_date)


class DataGateway:
    """
    Entry point to all the data of the app.

    Attributes
    ----------
    expense_categories : ResourceGateway
        CRUD operations of the expense categories.
    expenses : ExpensesGateway
        CRUD operations of the expenses, every read joins the category name.
    income : ResourceGateway
        CRUD operations of the income records.
    transactions : TransactionsGateway
        CRUD operations of the transactions ledger.
    views : ViewsGateway
        The read only aggregate views.
    functions : FunctionsGateway
        The aggregate procedures.
    """
    def __init__(self, conn: SQLConnection, seed_categories: bool = True):
        self.conn = conn
        assure_schema(conn)
        if seed_categories:
            seed_default_categories(conn)

        self.expense_categories = ResourceGateway(ExpenseCategoriesRepository(conn))
        self.expenses = ExpensesGateway(ExpensesRepository(conn))
        self.income = ResourceGateway(IncomeRepository(conn))
        self.transactions = TransactionsGateway(TransactionsRepository(conn))
        self.views = ViewsGateway(ViewsRepository(conn))
        self.functions = FunctionsGateway(FunctionsRepository(conn))


def rows(result: Result) -> pd.DataFrame:
    """unwrap a successful tabular result, raising the GatewayError of a failure"""
    data = result.unwrap()
    return data if data is not None else pd.DataFrame()
