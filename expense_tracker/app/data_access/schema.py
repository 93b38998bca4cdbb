import logging
import uuid
from datetime import datetime

import yaml
from sqlalchemy.sql import text
from streamlit.connections import SQLConnection

from expense_tracker import DEFAULT_CATEGORIES_PATH
from expense_tracker.app.naming_conventions import (
    Tables,
    Views,
    ExpenseCategoriesTableFields,
    ExpensesTableFields,
    IncomeTableFields,
    TransactionsTableFields,
    CategorySummaryFields,
    RecentTransactionsFields,
    MonthlySummaryFields,
    TransactionTypes,
    UNCATEGORIZED,
    INCOME_CATEGORY,
)


logger = logging.getLogger(__name__)

categories_table = Tables.EXPENSE_CATEGORIES.value
expenses_table = Tables.EXPENSES.value
income_table = Tables.INCOME.value
transactions_table = Tables.TRANSACTIONS.value


def assure_schema(conn: SQLConnection) -> None:
    """create every table and view the gateway reads from if they don't exist"""
    assure_expense_categories_table(conn)
    assure_expenses_table(conn)
    assure_income_table(conn)
    assure_transactions_table(conn)
    assure_views(conn)


def assure_expense_categories_table(conn: SQLConnection) -> None:
    """create the expense categories table if it doesn't exist"""
    f = ExpenseCategoriesTableFields
    with conn.session as s:
        s.execute(
            text(f'CREATE TABLE IF NOT EXISTS {categories_table} ({f.ID.value} TEXT PRIMARY KEY, '
                 f'{f.NAME.value} TEXT NOT NULL, {f.DESCRIPTION.value} TEXT, {f.CREATED_AT.value} TEXT);'))
        s.commit()


def assure_expenses_table(conn: SQLConnection) -> None:
    """create the expenses table if it doesn't exist"""
    f = ExpensesTableFields
    with conn.session as s:
        s.execute(
            text(f'CREATE TABLE IF NOT EXISTS {expenses_table} ({f.ID.value} TEXT PRIMARY KEY, '
                 f'{f.NAME.value} TEXT NOT NULL, {f.PRICE.value} REAL NOT NULL, {f.DESCRIPTION.value} TEXT, '
                 f'{f.EXPENSE_DATE.value} TEXT, {f.CATEGORY_ID.value} TEXT REFERENCES {categories_table}(id), '
                 f'{f.CREATED_AT.value} TEXT);'))
        s.commit()


def assure_income_table(conn: SQLConnection) -> None:
    """create the income table if it doesn't exist"""
    f = IncomeTableFields
    with conn.session as s:
        s.execute(
            text(f'CREATE TABLE IF NOT EXISTS {income_table} ({f.ID.value} TEXT PRIMARY KEY, '
                 f'{f.NAME.value} TEXT NOT NULL, {f.PRICE.value} REAL NOT NULL, {f.DESCRIPTION.value} TEXT, '
                 f'{f.INCOME_DATE.value} TEXT, {f.CREATED_AT.value} TEXT);'))
        s.commit()


def assure_transactions_table(conn: SQLConnection) -> None:
    """create the transactions table if it doesn't exist"""
    f = TransactionsTableFields
    with conn.session as s:
        s.execute(
            text(f'CREATE TABLE IF NOT EXISTS {transactions_table} ({f.ID.value} TEXT PRIMARY KEY, '
                 f'{f.DESCRIPTION.value} TEXT, {f.AMOUNT.value} REAL NOT NULL, '
                 f'{f.TRANSACTION_TYPE.value} TEXT NOT NULL, {f.TRANS_DATE.value} TEXT, '
                 f'{f.CREATED_AT.value} TEXT);'))
        s.commit()


def assure_views(conn: SQLConnection) -> None:
    """create the read only aggregate views if they don't exist"""
    views = {
        Views.EXPENSE_SUMMARY_BY_CATEGORY.value: _expense_summary_by_category_query(),
        Views.RECENT_TRANSACTIONS_DETAILED.value: _recent_transactions_detailed_query(),
        Views.MONTHLY_FINANCIAL_SUMMARY.value: _monthly_financial_summary_query(),
    }
    with conn.session as s:
        dialect = s.get_bind().dialect.name
        for name, query in views.items():
            if dialect == 'sqlite':
                s.execute(text(f'CREATE VIEW IF NOT EXISTS {name} AS {query}'))
            else:
                s.execute(text(f'CREATE OR REPLACE VIEW {name} AS {query}'))
        s.commit()


def seed_default_categories(conn: SQLConnection, path: str = DEFAULT_CATEGORIES_PATH) -> int:
    """
    Insert the default expense categories if the categories table is empty.

    Parameters
    ----------
    conn : SQLConnection
        The connection to the database
    path : str
        The path to the yaml file listing the default categories

    Returns
    -------
    int
        The number of categories inserted
    """
    f = ExpenseCategoriesTableFields
    with conn.session as s:
        count = s.execute(text(f'SELECT COUNT(*) FROM {categories_table}')).scalar()
        if count:
            return 0

        with open(path, 'r', encoding='utf-8') as file:
            defaults = yaml.safe_load(file) or []

        now = datetime.now().isoformat()
        for category in defaults:
            s.execute(
                text(f'INSERT INTO {categories_table} ({f.ID.value}, {f.NAME.value}, {f.DESCRIPTION.value}, '
                     f'{f.CREATED_AT.value}) VALUES (:id, :name, :description, :created_at)'),
                {'id': str(uuid.uuid4()), 'name': category['name'],
                 'description': category.get('description'), 'created_at': now}
            )
        s.commit()
    logger.info("Seeded %d default expense categories", len(defaults))
    return len(defaults)


def _expense_summary_by_category_query() -> str:
    c = ExpenseCategoriesTableFields
    e = ExpensesTableFields
    v = CategorySummaryFields
    return f"""
        SELECT c.{c.ID.value} AS {v.CATEGORY_ID.value},
               c.{c.NAME.value} AS {v.CATEGORY_NAME.value},
               COALESCE(SUM(e.{e.PRICE.value}), 0) AS {v.TOTAL_AMOUNT.value},
               COUNT(e.{e.ID.value}) AS {v.EXPENSE_COUNT.value}
        FROM {categories_table} c
        LEFT JOIN {expenses_table} e ON e.{e.CATEGORY_ID.value} = c.{c.ID.value}
        GROUP BY c.{c.ID.value}, c.{c.NAME.value}
    """


def _recent_transactions_detailed_query() -> str:
    c = ExpenseCategoriesTableFields
    e = ExpensesTableFields
    i = IncomeTableFields
    v = RecentTransactionsFields
    return f"""
        SELECT e.{e.ID.value} AS {v.ID.value},
               e.{e.NAME.value} AS {v.ITEM_NAME.value},
               COALESCE(c.{c.NAME.value}, '{UNCATEGORIZED}') AS {v.CATEGORY_NAME.value},
               e.{e.PRICE.value} AS {v.AMOUNT.value},
               '{TransactionTypes.DEBIT.value}' AS {v.TRANSACTION_TYPE.value},
               e.{e.EXPENSE_DATE.value} AS {v.TRANS_DATE.value},
               e.{e.CREATED_AT.value} AS created_at
        FROM {expenses_table} e
        LEFT JOIN {categories_table} c ON c.{c.ID.value} = e.{e.CATEGORY_ID.value}
        UNION ALL
        SELECT i.{i.ID.value},
               i.{i.NAME.value},
               '{INCOME_CATEGORY}',
               i.{i.PRICE.value},
               '{TransactionTypes.CREDIT.value}',
               i.{i.INCOME_DATE.value},
               i.{i.CREATED_AT.value}
        FROM {income_table} i
    """


def _monthly_financial_summary_query() -> str:
    e = ExpensesTableFields
    i = IncomeTableFields
    v = MonthlySummaryFields
    return f"""
        SELECT m.{v.MONTH.value},
               SUM(m.income) AS {v.TOTAL_INCOME.value},
               SUM(m.expense) AS {v.TOTAL_EXPENSES.value},
               SUM(m.income) - SUM(m.expense) AS {v.NET_AMOUNT.value}
        FROM (
            SELECT substr(CAST({e.EXPENSE_DATE.value} AS TEXT), 1, 7) AS {v.MONTH.value},
                   0.0 AS income, {e.PRICE.value} AS expense
            FROM {expenses_table}
            UNION ALL
            SELECT substr(CAST({i.INCOME_DATE.value} AS TEXT), 1, 7),
                   {i.PRICE.value}, 0.0
            FROM {income_table}
        ) m
        GROUP BY m.{v.MONTH.value}
    """
