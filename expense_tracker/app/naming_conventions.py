from enum import Enum

UNCATEGORIZED = 'Uncategorized'
INCOME_CATEGORY = 'Income'
ALL_CATEGORIES = 'all'


class Tables(Enum):
    EXPENSE_CATEGORIES = 'expense_categories'
    EXPENSES = 'expenses'
    INCOME = 'income'
    TRANSACTIONS = 'transactions'


class Views(Enum):
    EXPENSE_SUMMARY_BY_CATEGORY = 'expense_summary_by_category'
    MONTHLY_FINANCIAL_SUMMARY = 'monthly_financial_summary'
    RECENT_TRANSACTIONS_DETAILED = 'recent_transactions_detailed'


class ExpenseCategoriesTableFields(Enum):
    ID = 'id'
    NAME = 'name'
    DESCRIPTION = 'description'
    CREATED_AT = 'created_at'


class ExpensesTableFields(Enum):
    ID = 'id'
    NAME = 'name'
    PRICE = 'price'
    DESCRIPTION = 'description'
    EXPENSE_DATE = 'expense_date'
    CATEGORY_ID = 'category_id'
    CREATED_AT = 'created_at'
    # joined from expense_categories on every read
    CATEGORY_NAME = 'category_name'


class IncomeTableFields(Enum):
    ID = 'id'
    NAME = 'name'
    PRICE = 'price'
    DESCRIPTION = 'description'
    INCOME_DATE = 'income_date'
    CREATED_AT = 'created_at'


class TransactionsTableFields(Enum):
    ID = 'id'
    DESCRIPTION = 'description'
    AMOUNT = 'amount'
    TRANSACTION_TYPE = 'transaction_type'
    TRANS_DATE = 'trans_date'
    CREATED_AT = 'created_at'


class CategorySummaryFields(Enum):
    CATEGORY_ID = 'category_id'
    CATEGORY_NAME = 'category_name'
    TOTAL_AMOUNT = 'total_amount'
    EXPENSE_COUNT = 'expense_count'


class RecentTransactionsFields(Enum):
    ID = 'id'
    ITEM_NAME = 'item_name'
    CATEGORY_NAME = 'category_name'
    AMOUNT = 'amount'
    TRANSACTION_TYPE = 'transaction_type'
    TRANS_DATE = 'trans_date'


class MonthlySummaryFields(Enum):
    MONTH = 'month'
    TOTAL_INCOME = 'total_income'
    TOTAL_EXPENSES = 'total_expenses'
    NET_AMOUNT = 'net_amount'


class SpendingSummaryFields(Enum):
    TOTAL_EXPENSES = 'total_expenses'
    TOTAL_INCOME = 'total_income'
    NET_AMOUNT = 'net_amount'
    TRANSACTION_COUNT = 'transaction_count'


class TransactionTypes(Enum):
    DEBIT = 'debit'
    CREDIT = 'credit'
