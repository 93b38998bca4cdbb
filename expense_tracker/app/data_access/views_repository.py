import pandas as pd
from typing import Optional
from streamlit.connections import SQLConnection

from expense_tracker.app.naming_conventions import (
    Tables,
    Views,
    ExpensesTableFields,
    IncomeTableFields,
    CategorySummaryFields,
    RecentTransactionsFields,
    MonthlySummaryFields,
    SpendingSummaryFields,
)


class ViewsRepository:
    """Read only access to the aggregate views"""
    category_summary_view = Views.EXPENSE_SUMMARY_BY_CATEGORY.value
    monthly_summary_view = Views.MONTHLY_FINANCIAL_SUMMARY.value
    recent_transactions_view = Views.RECENT_TRANSACTIONS_DETAILED.value

    def __init__(self, conn: SQLConnection):
        self.conn = conn

    def expense_summary_by_category(self) -> pd.DataFrame:
        """total amount and number of expenses of every category"""
        query = (f'SELECT * FROM {self.category_summary_view} '
                 f'ORDER BY {CategorySummaryFields.CATEGORY_NAME.value};')
        return self.conn.query(query, ttl=0)

    def monthly_financial_summary(self) -> pd.DataFrame:
        """income, expenses and net amount of every month, oldest month first"""
        query = f'SELECT * FROM {self.monthly_summary_view} ORDER BY {MonthlySummaryFields.MONTH.value};'
        return self.conn.query(query, ttl=0)

    def recent_transactions_detailed(self, limit: int = 10) -> pd.DataFrame:
        """
        Get the most recent expenses and incomes.

        Parameters
        ----------
        limit : int
            The maximal number of rows to return.

        Returns
        -------
        pd.DataFrame
            The latest transactions, newest first.
        """
        query = (f'SELECT * FROM {self.recent_transactions_view} '
                 f'ORDER BY {RecentTransactionsFields.TRANS_DATE.value} DESC, created_at DESC LIMIT :limit;')
        return self.conn.query(query, params={'limit': int(limit)}, ttl=0)


class FunctionsRepository:
    """Aggregate procedures computed by the database"""

    def __init__(self, conn: SQLConnection):
        self.conn = conn

    def get_spending_summary(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> pd.DataFrame:
        """
        Summarize the spending between two optional dates, both inclusive.

        Parameters
        ----------
        start_date : str | None
            The first date to include, formatted as YYYY-MM-DD. If None there is no lower bound.
        end_date : str | None
            The last date to include, formatted as YYYY-MM-DD. If None there is no upper bound.

        Returns
        -------
        pd.DataFrame
            A single row with the columns total_expenses, total_income, net_amount and transaction_count.
        """
        expenses_where, params = _date_bounds(ExpensesTableFields.EXPENSE_DATE.value, start_date, end_date)
        income_where, _ = _date_bounds(IncomeTableFields.INCOME_DATE.value, start_date, end_date)
        f = SpendingSummaryFields
        query = f"""
            SELECT e.total AS {f.TOTAL_EXPENSES.value},
                   i.total AS {f.TOTAL_INCOME.value},
                   i.total - e.total AS {f.NET_AMOUNT.value},
                   e.items + i.items AS {f.TRANSACTION_COUNT.value}
            FROM (
                SELECT COALESCE(SUM({ExpensesTableFields.PRICE.value}), 0) AS total, COUNT(*) AS items
                FROM {Tables.EXPENSES.value} {expenses_where}
            ) e
            CROSS JOIN (
                SELECT COALESCE(SUM({IncomeTableFields.PRICE.value}), 0) AS total, COUNT(*) AS items
                FROM {Tables.INCOME.value} {income_where}
            ) i;
        """
        return self.conn.query(query, params=params, ttl=0)


def _date_bounds(date_col: str, start_date: Optional[str], end_date: Optional[str]) -> tuple[str, dict]:
    conditions = []
    params = {}
    if start_date is not None:
        conditions.append(f'{date_col} >= :start_date')
        params['start_date'] = start_date
    if end_date is not None:
        conditions.append(f'{date_col} <= :end_date')
        params['end_date'] = end_date
    where = f'WHERE {" AND ".join(conditions)}' if conditions else ''
    return where, params
