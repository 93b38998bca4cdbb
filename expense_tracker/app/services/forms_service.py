import math
import logging

from datetime import date
from typing import Callable, Optional

from expense_tracker.app.data_access import DataGateway, Failure
from expense_tracker.app.services.notifications import Notifier
from expense_tracker.app.naming_conventions import ExpensesTableFields, IncomeTableFields


logger = logging.getLogger(__name__)

MISSING_EXPENSE_FIELDS_MESSAGE = "Please fill in all required fields"
MISSING_INCOME_FIELDS_MESSAGE = "Please fill in the required fields"
INVALID_PRICE_MESSAGE = "Please enter a valid price"
INVALID_AMOUNT_MESSAGE = "Please enter a valid amount"


def parse_price(price: str | float | None) -> Optional[float]:
    """
    Parse the price typed by the user.

    Returns
    -------
    float | None
        The price, None if it is not a finite positive number
    """
    if price is None:
        return None
    try:
        value = float(str(price).strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def validate_expense_inputs(name: str, price: str, category_id: Optional[str]) -> tuple[bool, str]:
    """
    This function verifies the values of a new expense before it is created. the function returns an error message
    in any of the following cases:
    - the name is empty
    - the price is empty
    - no category is selected
    - the price is not a positive number

    Parameters
    ----------
    name: str
        the name of the expense
    price: str
        the price of the expense as typed by the user
    category_id: str | None
        the id of the selected category

    Returns
    -------
    bool
        True if the inputs are valid, False otherwise
    str
        An error message if the inputs are invalid, empty string otherwise
    """
    if not (name or '').strip() or not str(price or '').strip() or not category_id:
        return False, MISSING_EXPENSE_FIELDS_MESSAGE
    if parse_price(price) is None:
        return False, INVALID_PRICE_MESSAGE
    return True, ""


def validate_income_inputs(name: str, price: str) -> tuple[bool, str]:
    """
    Verify the values of a new income record: the name and the amount are required and the amount must be a
    positive number.
    """
    if not (name or '').strip() or not str(price or '').strip():
        return False, MISSING_INCOME_FIELDS_MESSAGE
    if parse_price(price) is None:
        return False, INVALID_AMOUNT_MESSAGE
    return True, ""


class ExpenseFormService:
    failure_message = "Failed to add expense"
    success_message = "Expense added successfully!"

    def __init__(self, gateway: DataGateway, notifier: Notifier):
        self.gateway = gateway
        self.notifier = notifier

    def submit(self, name: str, price: str, category_id: Optional[str], expense_date: date,
               description: str = '', on_success: Callable[[], None] | None = None) -> bool:
        """
        Validate the form and create the expense.

        Parameters
        ----------
        name : str
            the name of the expense
        price : str
            the price as typed by the user, it is sent to the database as a number
        category_id : str | None
            the id of the selected category
        expense_date : date
            the date of the expense
        description : str
            optional notes
        on_success : Callable | None
            called once after the expense is created, used to notify that the data changed

        Returns
        -------
        bool
            True if the expense was created. On False the caller keeps the form open with its inputs.
        """
        is_valid, message = validate_expense_inputs(name, price, category_id)
        if not is_valid:
            self.notifier.error(message)
            return False

        f = ExpensesTableFields
        result = self.gateway.expenses.create({
            f.NAME.value: name.strip(),
            f.PRICE.value: parse_price(price),
            f.DESCRIPTION.value: (description or '').strip() or None,
            f.EXPENSE_DATE.value: expense_date.isoformat(),
            f.CATEGORY_ID.value: category_id,
        })
        if isinstance(result, Failure):
            logger.error("Error adding expense: %s", result.message)
            self.notifier.error(result.message or self.failure_message)
            return False

        self.notifier.success(self.success_message)
        if on_success is not None:
            on_success()
        return True


class IncomeFormService:
    failure_message = "Failed to add income"
    success_message = "Income added successfully!"

    def __init__(self, gateway: DataGateway, notifier: Notifier):
        self.gateway = gateway
        self.notifier = notifier

    def submit(self, name: str, price: str, income_date: date, description: str = '',
               on_success: Callable[[], None] | None = None) -> bool:
        """
        Validate the form and create the income record. See ``ExpenseFormService.submit``.
        """
        is_valid, message = validate_income_inputs(name, price)
        if not is_valid:
            self.notifier.error(message)
            return False

        f = IncomeTableFields
        result = self.gateway.income.create({
            f.NAME.value: name.strip(),
            f.PRICE.value: parse_price(price),
            f.DESCRIPTION.value: (description or '').strip() or None,
            f.INCOME_DATE.value: income_date.isoformat(),
        })
        if isinstance(result, Failure):
            logger.error("Error adding income: %s", result.message)
            self.notifier.error(result.message or self.failure_message)
            return False

        self.notifier.success(self.success_message)
        if on_success is not None:
            on_success()
        return True


def apply_income_preset(preset: dict, name: str, description: str) -> tuple[str, str]:
    """fill the empty name and description of the income form from the selected income type"""
    return name or preset.get('name', ''), description or preset.get('description', '')
