import logging
import streamlit as st

from datetime import date

from expense_tracker.app.components.navigation import AppContext
from expense_tracker.app.data_access import GatewayError
from expense_tracker.app.data_access.gateway import rows
from expense_tracker.app.services.forms_service import ExpenseFormService, IncomeFormService, apply_income_preset
from expense_tracker.app.utils.data import category_emoji, get_income_types
from expense_tracker.app.naming_conventions import ExpenseCategoriesTableFields


logger = logging.getLogger(__name__)

LOAD_CATEGORIES_ERROR_MESSAGE = "Failed to load categories"

EXPENSE_KEYS_PREFIX = 'add_expense'
INCOME_KEYS_PREFIX = 'add_income'
EXPENSE_FIELDS = ['name', 'price', 'date', 'category', 'description']
INCOME_FIELDS = ['type', 'name', 'price', 'date', 'description']


def _key(prefix: str, field: str) -> str:
    return f'{prefix}_{field}'


def clear_inputs(prefix: str, fields: list[str]) -> None:
    """forget the values of the dialog widgets so the next time it opens it is empty"""
    for field in fields:
        st.session_state.pop(_key(prefix, field), None)


def load_category_options(ctx: AppContext) -> dict[str, str]:
    """
    Get the expense categories to choose from.

    Returns
    -------
    dict
        category id -> display label (emoji and name), empty if the categories could not be loaded
    """
    try:
        categories = rows(ctx.gateway.expense_categories.get_all())
    except GatewayError as exc:
        logger.error("Error loading categories: %s", exc.message)
        ctx.notifier.error(LOAD_CATEGORIES_ERROR_MESSAGE)
        return {}

    id_col = ExpenseCategoriesTableFields.ID.value
    name_col = ExpenseCategoriesTableFields.NAME.value
    return {row[id_col]: f"{category_emoji(row[name_col])} {row[name_col]}" for _, row in categories.iterrows()}


@st.dialog("Add Expense")
def add_expense_dialog(ctx: AppContext) -> None:
    """
    Modal form for adding a new expense. The dialog closes only after the expense was created, on any failure the
    inputs are kept as typed.
    """
    options = load_category_options(ctx)
    if not options:
        st.error(LOAD_CATEGORIES_ERROR_MESSAGE)

    name = st.text_input("Name *", placeholder="e.g. Coffee", key=_key(EXPENSE_KEYS_PREFIX, 'name'))
    price = st.text_input("Price *", placeholder="0.00", key=_key(EXPENSE_KEYS_PREFIX, 'price'))
    expense_date = st.date_input("Date", value=date.today(), key=_key(EXPENSE_KEYS_PREFIX, 'date'))
    category_id = st.selectbox(
        "Category *",
        options=list(options.keys()),
        format_func=lambda id_: options[id_],
        index=None,
        placeholder="Select a category",
        key=_key(EXPENSE_KEYS_PREFIX, 'category')
    )
    description = st.text_area("Description", placeholder="Optional notes", key=_key(EXPENSE_KEYS_PREFIX, 'description'))

    if st.button("Add Expense", type='primary', use_container_width=True, key=_key(EXPENSE_KEYS_PREFIX, 'submit')):
        service = ExpenseFormService(ctx.gateway, ctx.notifier)
        if service.submit(name, price, category_id, expense_date, description, on_success=ctx.notify_data_changed):
            clear_inputs(EXPENSE_KEYS_PREFIX, EXPENSE_FIELDS)
            st.rerun()


def _fill_from_income_type() -> None:
    """callback of the income type selector, fills the empty name and description fields"""
    selected = st.session_state.get(_key(INCOME_KEYS_PREFIX, 'type'))
    preset = next((item for item in get_income_types() if item['id'] == selected), None)
    if preset is None:
        return

    name_key = _key(INCOME_KEYS_PREFIX, 'name')
    description_key = _key(INCOME_KEYS_PREFIX, 'description')
    name, description = apply_income_preset(
        preset, st.session_state.get(name_key, ''), st.session_state.get(description_key, '')
    )
    st.session_state[name_key] = name
    st.session_state[description_key] = description


@st.dialog("Add Income")
def add_income_dialog(ctx: AppContext) -> None:
    """Modal form for adding a new income record"""
    income_types = {item['id']: f"{item.get('emoji', '')} {item['name']}" for item in get_income_types()}
    st.selectbox(
        "Income type",
        options=list(income_types.keys()),
        format_func=lambda id_: income_types[id_],
        index=None,
        placeholder="Choose a type to pre-fill the form",
        on_change=_fill_from_income_type,
        key=_key(INCOME_KEYS_PREFIX, 'type')
    )

    name = st.text_input("Name *", placeholder="e.g. Monthly salary", key=_key(INCOME_KEYS_PREFIX, 'name'))
    price = st.text_input("Amount *", placeholder="0.00", key=_key(INCOME_KEYS_PREFIX, 'price'))
    income_date = st.date_input("Date", value=date.today(), key=_key(INCOME_KEYS_PREFIX, 'date'))
    description = st.text_area("Description", placeholder="Optional notes", key=_key(INCOME_KEYS_PREFIX, 'description'))

    if st.button("Add Income", type='primary', use_container_width=True, key=_key(INCOME_KEYS_PREFIX, 'submit')):
        service = IncomeFormService(ctx.gateway, ctx.notifier)
        if service.submit(name, price, income_date, description, on_success=ctx.notify_data_changed):
            clear_inputs(INCOME_KEYS_PREFIX, INCOME_FIELDS)
            st.rerun()
