import logging
import pandas as pd

from dataclasses import dataclass
from typing import Optional

from expense_tracker.app.data_access import DataGateway, GatewayError
from expense_tracker.app.data_access.gateway import rows
from expense_tracker.app.services.notifications import Notifier
from expense_tracker.app.naming_conventions import (
    ExpensesTableFields,
    TransactionsTableFields,
    TransactionTypes,
    ALL_CATEGORIES,
)


logger = logging.getLogger(__name__)

name_col = ExpensesTableFields.NAME.value
price_col = ExpensesTableFields.PRICE.value
description_col = ExpensesTableFields.DESCRIPTION.value
category_id_col = ExpensesTableFields.CATEGORY_ID.value


@dataclass(frozen=True)
class ExpensesTotals:
    total: float = 0.0
    count: int = 0
    average: float = 0.0


class ExpensesService:
    load_error_message = "Failed to load expenses"

    def __init__(self, gateway: DataGateway, notifier: Notifier):
        self.gateway = gateway
        self.notifier = notifier

    def load(self) -> Optional[tuple[pd.DataFrame, pd.DataFrame]]:
        """
        Load the expenses (with their category names) and the expense categories.

        Returns
        -------
        tuple[pd.DataFrame, pd.DataFrame] | None
            The expenses and the categories, None if any of the queries failed.
        """
        try:
            expenses = rows(self.gateway.expenses.get_all())
            categories = rows(self.gateway.expense_categories.get_all())
        except GatewayError as exc:
            logger.error("Error loading expenses: %s", exc.message)
            self.notifier.error(self.load_error_message)
            return None
        return expenses, categories

    @staticmethod
    def filter_expenses(expenses: pd.DataFrame, search_term: str = '',
                        category_id: str = ALL_CATEGORIES) -> pd.DataFrame:
        """
        Filter the expenses by a search term and a category.

        Parameters
        ----------
        expenses : pd.DataFrame
            The expenses to filter.
        search_term : str
            Case insensitive text looked up in the name and the description of the expenses. Empty matches all.
        category_id : str
            The id of the category to keep, or 'all' to keep every category.

        Returns
        -------
        pd.DataFrame
            The matching expenses, in their original order.
        """
        if expenses.empty:
            return expenses

        mask = pd.Series(True, index=expenses.index)
        term = (search_term or '').strip()
        if term:
            names = expenses[name_col].fillna('').astype(str)
            descriptions = expenses[description_col].fillna('').astype(str)
            mask &= (names.str.contains(term, case=False, regex=False)
                     | descriptions.str.contains(term, case=False, regex=False))

        if category_id and category_id != ALL_CATEGORIES:
            mask &= expenses[category_id_col] == category_id

        return expenses.loc[mask]

    @staticmethod
    def compute_totals(expenses: pd.DataFrame) -> ExpensesTotals:
        """the total, number and average price of the given expenses"""
        if expenses.empty:
            return ExpensesTotals()

        prices = pd.to_numeric(expenses[price_col], errors='coerce').fillna(0.0)
        total = float(prices.sum())
        count = len(expenses)
        return ExpensesTotals(total=total, count=count, average=total / count)

    @staticmethod
    def has_active_filters(search_term: str, category_id: str) -> bool:
        return bool((search_term or '').strip()) or category_id != ALL_CATEGORIES


class TransactionsService:
    load_error_message = "Failed to load transactions"

    def __init__(self, gateway: DataGateway, notifier: Notifier):
        self.gateway = gateway
        self.notifier = notifier

    def load(self, transaction_type: Optional[str] = None) -> Optional[pd.DataFrame]:
        """
        Load the transactions ledger.

        Parameters
        ----------
        transaction_type : str | None
            'debit' or 'credit' to load a single type, None to load all the transactions.
        """
        if transaction_type is None:
            result = self.gateway.transactions.get_all()
        else:
            result = self.gateway.transactions.get_by_type(transaction_type)

        try:
            return rows(result)
        except GatewayError as exc:
            logger.error("Error loading transactions: %s", exc.message)
            self.notifier.error(self.load_error_message)
            return None

    @staticmethod
    def signed_amounts(transactions: pd.DataFrame) -> pd.Series:
        """credits as positive amounts and debits as negative amounts"""
        amounts = pd.to_numeric(transactions[TransactionsTableFields.AMOUNT.value], errors='coerce').fillna(0.0).abs()
        is_credit = transactions[TransactionsTableFields.TRANSACTION_TYPE.value] == TransactionTypes.CREDIT.value
        return amounts.where(is_credit, -amounts)
