import uuid
import pandas as pd
from datetime import datetime
from typing import Literal, Optional
from sqlalchemy.sql import text
from streamlit.connections import SQLConnection

from expense_tracker.app.naming_conventions import (
    Tables,
    ExpenseCategoriesTableFields,
    ExpensesTableFields,
    IncomeTableFields,
    TransactionsTableFields,
    TransactionTypes,
)


class ResourceRepository:
    """
    Base class for repositories of the stored resources. Each subclass declares its table and columns, and
    inherits the basic CRUD operations.
    """
    table: str
    id_col: str
    created_at_col: str
    columns: list[str]

    def __init__(self, conn: SQLConnection):
        """
        Initializes the repository with a database connection.

        Parameters
        ----------
        conn : SQLConnection
            The database connection to use for executing queries.
        """
        self.conn = conn

    def select_query(self) -> str:
        """the query used by every read of this resource"""
        return f'SELECT * FROM {self.table}'

    def get_all(self) -> pd.DataFrame:
        """
        Get all the rows of the resource as a DataFrame.
        """
        return self.conn.query(f'{self.select_query()};', ttl=0)

    def get_by_id(self, id_: str) -> Optional[dict]:
        """
        Get a single row of the resource by its id.

        Parameters
        ----------
        id_ : str
            The id of the row.

        Returns
        -------
        dict | None
            The row as a dictionary, None if no row with the given id exists.
        """
        query = f'{self.select_query()} WHERE {self._qualified(self.id_col)} = :id;'
        rows = self.conn.query(query, params={'id': id_}, ttl=0)
        return _first_row(rows)

    def create(self, data: dict) -> dict:
        """
        Insert a new row. The id and creation time are assigned here.

        Parameters
        ----------
        data : dict
            The values of the new row, keyed by column name.

        Returns
        -------
        dict
            The stored row.
        """
        self._validate_columns(data)
        values = dict(data)
        values[self.id_col] = str(uuid.uuid4())
        values[self.created_at_col] = datetime.now().isoformat()

        cols = ", ".join(values.keys())
        params = ", ".join(f":{col}" for col in values.keys())
        with self.conn.session as s:
            s.execute(text(f'INSERT INTO {self.table} ({cols}) VALUES ({params})'), values)
            s.commit()
        return self.get_by_id(values[self.id_col])

    def update(self, id_: str, data: dict) -> Optional[dict]:
        """
        Update the given columns of a row.

        Parameters
        ----------
        id_ : str
            The id of the row to update.
        data : dict
            The new values, keyed by column name.

        Returns
        -------
        dict | None
            The updated row, None if no row with the given id exists.
        """
        self._validate_columns(data)
        if not data:
            return self.get_by_id(id_)

        set_clause = ", ".join(f"{col} = :{col}" for col in data.keys())
        params = dict(data)
        params['id_val'] = id_
        with self.conn.session as s:
            result = s.execute(
                text(f'UPDATE {self.table} SET {set_clause} WHERE {self.id_col} = :id_val'), params
            )
            s.commit()
        if result.rowcount == 0:
            return None
        return self.get_by_id(id_)

    def delete(self, id_: str) -> int:
        """
        Delete a row by its id.

        Returns
        -------
        int
            The number of deleted rows.
        """
        with self.conn.session as s:
            result = s.execute(text(f'DELETE FROM {self.table} WHERE {self.id_col} = :id_val'), {'id_val': id_})
            s.commit()
        return result.rowcount

    def _qualified(self, column: str) -> str:
        return column

    def _validate_columns(self, data: dict) -> None:
        invalid = [col for col in data if col not in self.columns or col in (self.id_col, self.created_at_col)]
        if invalid:
            raise ValueError(f"Invalid columns for table {self.table}: {invalid}")


class ExpenseCategoriesRepository(ResourceRepository):
    table = Tables.EXPENSE_CATEGORIES.value
    id_col = ExpenseCategoriesTableFields.ID.value
    name_col = ExpenseCategoriesTableFields.NAME.value
    description_col = ExpenseCategoriesTableFields.DESCRIPTION.value
    created_at_col = ExpenseCategoriesTableFields.CREATED_AT.value
    columns = [field.value for field in ExpenseCategoriesTableFields]

    def get_all(self) -> pd.DataFrame:
        return self.conn.query(f'{self.select_query()} ORDER BY {self.name_col};', ttl=0)


class ExpensesRepository(ResourceRepository):
    table = Tables.EXPENSES.value
    id_col = ExpensesTableFields.ID.value
    name_col = ExpensesTableFields.NAME.value
    price_col = ExpensesTableFields.PRICE.value
    description_col = ExpensesTableFields.DESCRIPTION.value
    date_col = ExpensesTableFields.EXPENSE_DATE.value
    category_id_col = ExpensesTableFields.CATEGORY_ID.value
    category_name_col = ExpensesTableFields.CATEGORY_NAME.value
    created_at_col = ExpensesTableFields.CREATED_AT.value
    columns = [field.value for field in ExpensesTableFields if field != ExpensesTableFields.CATEGORY_NAME]

    def select_query(self) -> str:
        categories = Tables.EXPENSE_CATEGORIES.value
        return (f'SELECT e.*, c.{ExpenseCategoriesTableFields.NAME.value} AS {self.category_name_col} '
                f'FROM {self.table} e LEFT JOIN {categories} c '
                f'ON c.{ExpenseCategoriesTableFields.ID.value} = e.{self.category_id_col}')

    def _qualified(self, column: str) -> str:
        return f'e.{column}'

    def get_all(self) -> pd.DataFrame:
        query = f'{self.select_query()} ORDER BY e.{self.date_col} DESC, e.{self.created_at_col} DESC;'
        return self.conn.query(query, ttl=0)

    def get_by_category(self, category_id: str) -> pd.DataFrame:
        """
        Get all the expenses of a single category.

        Parameters
        ----------
        category_id : str
            The id of the expense category.

        Returns
        -------
        pd.DataFrame
            The expenses of the category, newest first.
        """
        query = (f'{self.select_query()} WHERE e.{self.category_id_col} = :category_id '
                 f'ORDER BY e.{self.date_col} DESC;')
        return self.conn.query(query, params={'category_id': category_id}, ttl=0)


class IncomeRepository(ResourceRepository):
    table = Tables.INCOME.value
    id_col = IncomeTableFields.ID.value
    name_col = IncomeTableFields.NAME.value
    price_col = IncomeTableFields.PRICE.value
    date_col = IncomeTableFields.INCOME_DATE.value
    created_at_col = IncomeTableFields.CREATED_AT.value
    columns = [field.value for field in IncomeTableFields]

    def get_all(self) -> pd.DataFrame:
        query = f'{self.select_query()} ORDER BY {self.date_col} DESC, {self.created_at_col} DESC;'
        return self.conn.query(query, ttl=0)


class TransactionsRepository(ResourceRepository):
    table = Tables.TRANSACTIONS.value
    id_col = TransactionsTableFields.ID.value
    amount_col = TransactionsTableFields.AMOUNT.value
    type_col = TransactionsTableFields.TRANSACTION_TYPE.value
    date_col = TransactionsTableFields.TRANS_DATE.value
    created_at_col = TransactionsTableFields.CREATED_AT.value
    columns = [field.value for field in TransactionsTableFields]

    def get_all(self) -> pd.DataFrame:
        query = f'{self.select_query()} ORDER BY {self.date_col} DESC, {self.created_at_col} DESC;'
        return self.conn.query(query, ttl=0)

    def get_by_type(self, transaction_type: Literal['debit', 'credit']) -> pd.DataFrame:
        """
        Get all the transactions of the given type.

        Parameters
        ----------
        transaction_type : Literal['debit', 'credit']
            The type of the transactions to fetch.

        Returns
        -------
        pd.DataFrame
            The matching transactions, newest first.
        """
        valid_types = [t.value for t in TransactionTypes]
        assert transaction_type in valid_types, \
            f"transaction_type must be one of {valid_types}. Got '{transaction_type}'"

        query = f'{self.select_query()} WHERE {self.type_col} = :type ORDER BY {self.date_col} DESC;'
        return self.conn.query(query, params={'type': transaction_type}, ttl=0)

    def get_by_date_range(self, start_date: str, end_date: str) -> pd.DataFrame:
        """
        Get all the transactions between two dates, both inclusive.

        Parameters
        ----------
        start_date : str
            The first date of the range, formatted as YYYY-MM-DD.
        end_date : str
            The last date of the range, formatted as YYYY-MM-DD.
        """
        query = (f'{self.select_query()} WHERE {self.date_col} >= :start_date AND {self.date_col} <= :end_date '
                 f'ORDER BY {self.date_col} DESC;')
        return self.conn.query(query, params={'start_date': start_date, 'end_date': end_date}, ttl=0)


def _first_row(rows: pd.DataFrame) -> Optional[dict]:
    if rows.empty:
        return None
    rows = rows.astype(object).where(pd.notnull(rows), None)
    return rows.iloc[0].to_dict()
