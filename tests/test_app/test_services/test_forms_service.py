import pytest

from datetime import date
from unittest.mock import MagicMock

from tests.conftest import MockFixtures, DataFixtures
from expense_tracker.app.services.dashboard_service import DashboardController
from expense_tracker.app.services.forms_service import (
    ExpenseFormService,
    IncomeFormService,
    apply_income_preset,
    parse_price,
    validate_expense_inputs,
    validate_income_inputs,
    MISSING_EXPENSE_FIELDS_MESSAGE,
    MISSING_INCOME_FIELDS_MESSAGE,
    INVALID_PRICE_MESSAGE,
    INVALID_AMOUNT_MESSAGE,
)
from expense_tracker.app.naming_conventions import ExpensesTableFields, IncomeTableFields


class TestValidation:
    @pytest.mark.parametrize('price, expected', [
        ('4.5', 4.5),
        (' 12 ', 12.0),
        (3, 3.0),
        ('0', None),
        ('-2', None),
        ('abc', None),
        ('nan', None),
        ('inf', None),
        ('', None),
        (None, None),
    ])
    def test_parse_price(self, price, expected):
        assert parse_price(price) == expected

    @pytest.mark.parametrize('name, price, category_id, message', [
        ('', '4.5', 'cat', MISSING_EXPENSE_FIELDS_MESSAGE),
        ('   ', '4.5', 'cat', MISSING_EXPENSE_FIELDS_MESSAGE),
        ('Coffee', '', 'cat', MISSING_EXPENSE_FIELDS_MESSAGE),
        ('Coffee', '4.5', None, MISSING_EXPENSE_FIELDS_MESSAGE),
        ('Coffee', 'four', 'cat', INVALID_PRICE_MESSAGE),
        ('Coffee', '0', 'cat', INVALID_PRICE_MESSAGE),
    ])
    def test_invalid_expense_inputs(self, name, price, category_id, message):
        assert validate_expense_inputs(name, price, category_id) == (False, message)

    def test_valid_expense_inputs(self):
        assert validate_expense_inputs('Coffee', '4.5', 'cat') == (True, '')

    def test_income_inputs(self):
        assert validate_income_inputs('', '100') == (False, MISSING_INCOME_FIELDS_MESSAGE)
        assert validate_income_inputs('Salary', '-1') == (False, INVALID_AMOUNT_MESSAGE)
        assert validate_income_inputs('Salary', '3200') == (True, '')


class TestExpenseForm(MockFixtures, DataFixtures):
    def test_valid_submission_creates_once_and_reloads_once(self, mock_gateway, notifier):
        dashboard = DashboardController(mock_gateway, notifier)
        service = ExpenseFormService(mock_gateway, notifier)

        ok = service.submit('Coffee', '4.5', 'food-id', date(2024, 5, 1), on_success=dashboard.load)

        assert ok is True
        mock_gateway.expenses.create.assert_called_once()
        created = mock_gateway.expenses.create.call_args.args[0]
        assert created[ExpensesTableFields.PRICE.value] == 4.5
        assert isinstance(created[ExpensesTableFields.PRICE.value], float)
        assert created[ExpensesTableFields.NAME.value] == 'Coffee'
        assert created[ExpensesTableFields.CATEGORY_ID.value] == 'food-id'
        assert created[ExpensesTableFields.EXPENSE_DATE.value] == '2024-05-01'
        assert created[ExpensesTableFields.DESCRIPTION.value] is None
        assert mock_gateway.functions.get_spending_summary.call_count == 1
        notifier.success.assert_called_once_with(ExpenseFormService.success_message)

    @pytest.mark.parametrize('name, price, category_id', [
        ('', '4.5', 'food-id'),
        ('Coffee', 'abc', 'food-id'),
        ('Coffee', '4.5', None),
    ])
    def test_invalid_submission_never_reaches_the_gateway(self, mock_gateway, notifier, name, price, category_id):
        on_success = MagicMock()
        service = ExpenseFormService(mock_gateway, notifier)

        assert service.submit(name, price, category_id, date.today(), on_success=on_success) is False
        mock_gateway.expenses.create.assert_not_called()
        on_success.assert_not_called()
        notifier.error.assert_called_once()

    def test_gateway_failure_message_is_shown_verbatim(self, mock_gateway, notifier, gateway_failure):
        mock_gateway.expenses.create.side_effect = None
        mock_gateway.expenses.create.return_value = gateway_failure('FOREIGN KEY constraint failed')
        on_success = MagicMock()
        service = ExpenseFormService(mock_gateway, notifier)

        assert service.submit('Coffee', '4.5', 'food-id', date.today(), on_success=on_success) is False
        notifier.error.assert_called_once_with('FOREIGN KEY constraint failed')
        notifier.success.assert_not_called()
        on_success.assert_not_called()

    def test_gateway_failure_without_message(self, mock_gateway, notifier, gateway_failure):
        mock_gateway.expenses.create.side_effect = None
        mock_gateway.expenses.create.return_value = gateway_failure('')
        service = ExpenseFormService(mock_gateway, notifier)

        assert service.submit('Coffee', '4.5', 'food-id', date.today()) is False
        notifier.error.assert_called_once_with(ExpenseFormService.failure_message)


class TestIncomeForm(MockFixtures, DataFixtures):
    def test_valid_submission(self, mock_gateway, notifier, faker):
        on_success = MagicMock()
        service = IncomeFormService(mock_gateway, notifier)
        description = faker.sentence()

        assert service.submit('Salary', '3200', date(2024, 5, 31), description, on_success=on_success) is True
        created = mock_gateway.income.create.call_args.args[0]
        assert created[IncomeTableFields.PRICE.value] == 3200.0
        assert created[IncomeTableFields.DESCRIPTION.value] == description
        assert created[IncomeTableFields.INCOME_DATE.value] == '2024-05-31'
        on_success.assert_called_once()

    def test_invalid_amount(self, mock_gateway, notifier):
        service = IncomeFormService(mock_gateway, notifier)
        assert service.submit('Salary', '0', date.today()) is False
        notifier.error.assert_called_once_with(INVALID_AMOUNT_MESSAGE)
        mock_gateway.income.create.assert_not_called()

    def test_income_preset_fills_only_empty_fields(self):
        preset = {'id': 'salary', 'name': 'Salary', 'description': 'Monthly salary'}
        assert apply_income_preset(preset, '', '') == ('Salary', 'Monthly salary')
        assert apply_income_preset(preset, 'May salary', '') == ('May salary', 'Monthly salary')
        assert apply_income_preset(preset, 'May salary', 'net') == ('May salary', 'net')
