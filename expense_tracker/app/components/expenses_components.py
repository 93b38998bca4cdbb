import html
import pandas as pd
import streamlit as st
import streamlit_antd_components as sac

from expense_tracker.app.components.navigation import AppContext
from expense_tracker.app.components.forms import add_expense_dialog
from expense_tracker.app.services.expenses_service import ExpensesService, ExpensesTotals
from expense_tracker.app.utils.data import category_emoji
from expense_tracker.app.utils.formatting import format_currency, escape_markdown_currency
from expense_tracker.app.naming_conventions import (
    ExpensesTableFields,
    ExpenseCategoriesTableFields,
    ALL_CATEGORIES,
    UNCATEGORIZED,
)


ALL_CATEGORIES_LABEL = 'All'


def render_expenses(ctx: AppContext) -> None:
    """The expenses view: search, category filter, totals and the list of expenses"""
    service = ExpensesService(ctx.gateway, ctx.notifier)

    title_col, add_col = st.columns([4, 1])
    title_col.title("Expenses")
    if add_col.button("➖ Add Expense", key="expenses_add_expense", type='primary', use_container_width=True):
        add_expense_dialog(ctx)

    loaded = service.load()
    if loaded is None:
        st.error(service.load_error_message)
        return
    expenses, categories = loaded

    search_term = st.text_input("Search", placeholder="Search by name or description", key="expenses_search",
                                label_visibility="collapsed")
    category_id = category_filter_chips(categories)

    filtered = service.filter_expenses(expenses, search_term, category_id)
    render_totals(service.compute_totals(filtered))

    if filtered.empty:
        render_empty_expenses(service.has_active_filters(search_term, category_id))
        return
    render_expenses_list(filtered)


def category_filter_chips(categories: pd.DataFrame) -> str:
    """
    Display a chip for every category plus an 'All' chip

    Returns
    -------
    str
        The id of the selected category, or 'all'
    """
    id_col = ExpenseCategoriesTableFields.ID.value
    name_col = ExpenseCategoriesTableFields.NAME.value
    labels = {ALL_CATEGORIES_LABEL: ALL_CATEGORIES}
    for _, row in categories.iterrows():
        labels[f"{category_emoji(row[name_col])} {row[name_col]}"] = row[id_col]

    selection = sac.buttons(
        items=list(labels.keys()),
        index=0,
        size='sm',
        variant='outline',
        direction='horizontal',
        key='expenses_category_filter'
    )
    return labels.get(selection, ALL_CATEGORIES)


def render_totals(totals: ExpensesTotals) -> None:
    total_col, count_col, average_col = st.columns(3)
    total_col.metric("Total Spent", format_currency(totals.total), border=True)
    count_col.metric("Expenses", totals.count, border=True)
    average_col.metric("Average", format_currency(totals.average), border=True)


def render_empty_expenses(filters_active: bool) -> None:
    if filters_active:
        st.info("No expenses match your search or filter. Try a different term or category.")
    else:
        st.info("No expenses yet. Add your first expense to start tracking your spending.")


def render_expenses_list(expenses: pd.DataFrame) -> None:
    f = ExpensesTableFields
    for _, row in expenses.iterrows():
        category_name = row.get(f.CATEGORY_NAME.value)
        if not isinstance(category_name, str) or not category_name:
            category_name = UNCATEGORIZED
        description = row.get(f.DESCRIPTION.value)
        description = description if isinstance(description, str) else ''
        expense_date = pd.to_datetime(row.get(f.EXPENSE_DATE.value), errors='coerce')
        date_label = expense_date.strftime('%b %d, %Y') if not pd.isnull(expense_date) else ''
        price = pd.to_numeric(row.get(f.PRICE.value), errors='coerce')

        with st.container(border=True):
            info_col, price_col = st.columns([5, 1])
            info_col.html(
                f"""
                <div>
                    <span style="font-size: 1.3em;">{category_emoji(category_name)}</span>
                    <b>{html.escape(str(row.get(f.NAME.value) or ''))}</b>
                    <span style="color: gray; font-size: 0.85em;"> · {html.escape(category_name)} · {date_label}</span><br>
                    <span style="color: gray; font-size: 0.9em;">{html.escape(description)}</span>
                </div>
                """
            )
            amount = 0.0 if pd.isnull(price) else float(price)
            price_col.markdown(escape_markdown_currency(f"**{format_currency(amount)}**"))
