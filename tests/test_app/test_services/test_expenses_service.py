import pandas as pd
import pytest

from tests.conftest import MockFixtures, DataFixtures
from expense_tracker.app.data_access import Success
from expense_tracker.app.services.expenses_service import ExpensesService, ExpensesTotals, TransactionsService
from expense_tracker.app.services.analytics_service import AnalyticsService
from expense_tracker.app.naming_conventions import (
    ExpensesTableFields,
    MonthlySummaryFields,
    TransactionsTableFields,
    TransactionTypes,
)


@pytest.fixture
def expenses() -> pd.DataFrame:
    f = ExpensesTableFields
    return pd.DataFrame({
        f.ID.value: ['1', '2', '3', '4'],
        f.NAME.value: ['Coffee', 'Groceries', 'Bus ticket', 'Electricity'],
        f.PRICE.value: [4.5, 120.0, 2.5, 80.0],
        f.DESCRIPTION.value: ['morning COFFEE', None, 'to work', 'monthly bill'],
        f.EXPENSE_DATE.value: ['2024-05-01', '2024-05-02', '2024-05-03', '2024-05-04'],
        f.CATEGORY_ID.value: ['food', 'food', 'transport', 'bills'],
        f.CATEGORY_NAME.value: ['Food & Dining', 'Food & Dining', 'Transportation', 'Bills & Utilities'],
    })


class TestExpensesFiltering:
    def test_no_filters(self, expenses):
        assert ExpensesService.filter_expenses(expenses).equals(expenses)

    def test_search_is_case_insensitive_on_name_and_description(self, expenses):
        filtered = ExpensesService.filter_expenses(expenses, 'coffee')
        assert filtered[ExpensesTableFields.ID.value].tolist() == ['1']

        filtered = ExpensesService.filter_expenses(expenses, 'MONTHLY')
        assert filtered[ExpensesTableFields.ID.value].tolist() == ['4']

    def test_search_is_not_a_regex(self, expenses):
        assert ExpensesService.filter_expenses(expenses, '.*').empty

    def test_category_filter(self, expenses):
        filtered = ExpensesService.filter_expenses(expenses, category_id='food')
        assert filtered[ExpensesTableFields.ID.value].tolist() == ['1', '2']

    def test_search_and_category_filter_combined(self, expenses):
        filtered = ExpensesService.filter_expenses(expenses, 'groceries', 'food')
        assert filtered[ExpensesTableFields.ID.value].tolist() == ['2']
        assert ExpensesService.filter_expenses(expenses, 'groceries', 'bills').empty

    def test_totals(self, expenses):
        totals = ExpensesService.compute_totals(expenses)
        assert totals.total == pytest.approx(207.0)
        assert totals.count == 4
        assert totals.average == pytest.approx(51.75)

    def test_totals_of_nothing(self, expenses):
        assert ExpensesService.compute_totals(expenses.iloc[0:0]) == ExpensesTotals(0.0, 0, 0.0)

    @pytest.mark.parametrize('search_term, category_id, expected', [
        ('', 'all', False),
        ('   ', 'all', False),
        ('coffee', 'all', True),
        ('', 'food', True),
    ])
    def test_has_active_filters(self, search_term, category_id, expected):
        assert ExpensesService.has_active_filters(search_term, category_id) is expected


class TestLoading(MockFixtures, DataFixtures):
    def test_expenses_load_failure(self, mock_gateway, notifier, gateway_failure, expenses):
        mock_gateway.expenses.get_all.return_value = Success(expenses)
        mock_gateway.expense_categories.get_all.return_value = gateway_failure()
        service = ExpensesService(mock_gateway, notifier)

        assert service.load() is None
        notifier.error.assert_called_once_with(ExpensesService.load_error_message)

    def test_transactions_by_type(self, mock_gateway, notifier):
        f = TransactionsTableFields
        ledger = pd.DataFrame({
            f.AMOUNT.value: [100.0, -25.0, 40.0],
            f.TRANSACTION_TYPE.value: [TransactionTypes.CREDIT.value, TransactionTypes.DEBIT.value,
                                       TransactionTypes.DEBIT.value],
        })
        mock_gateway.transactions.get_by_type.return_value = Success(ledger)
        service = TransactionsService(mock_gateway, notifier)

        loaded = service.load(TransactionTypes.DEBIT.value)
        mock_gateway.transactions.get_by_type.assert_called_once_with(TransactionTypes.DEBIT.value)
        assert service.signed_amounts(loaded).tolist() == [100.0, -25.0, -40.0]

    def test_transactions_load_failure(self, mock_gateway, notifier, gateway_failure):
        mock_gateway.transactions.get_all.return_value = gateway_failure()
        service = TransactionsService(mock_gateway, notifier)

        assert service.load() is None
        notifier.error.assert_called_once_with(TransactionsService.load_error_message)

    def test_analytics_load(self, mock_gateway, notifier):
        f = MonthlySummaryFields
        mock_gateway.views.monthly_financial_summary.return_value = Success(pd.DataFrame({
            f.MONTH.value: ['2024-06', None, '2024-05'],
            f.TOTAL_INCOME.value: [3200.0, 10.0, None],
            f.TOTAL_EXPENSES.value: ['150.5', 1.0, 80.0],
            f.NET_AMOUNT.value: [3049.5, 9.0, -80.0],
        }))
        data = AnalyticsService(mock_gateway, notifier).load()

        assert [entry.name for entry in data.category_breakdown] == ['Food & Dining', 'Bills & Utilities']
        assert data.monthly_summary[f.MONTH.value].tolist() == ['2024-05', '2024-06']
        assert data.monthly_summary[f.TOTAL_INCOME.value].tolist() == [0.0, 3200.0]
        assert data.monthly_summary[f.TOTAL_EXPENSES.value].tolist() == [80.0, 150.5]

    def test_analytics_load_failure(self, mock_gateway, notifier, gateway_failure):
        mock_gateway.views.monthly_financial_summary.return_value = gateway_failure()
        assert AnalyticsService(mock_gateway, notifier).load() is None
        notifier.error.assert_called_once_with(AnalyticsService.load_error_message)
