import html
import streamlit as st

from expense_tracker.app.components.navigation import AppContext, View
from expense_tracker.app.components.forms import add_expense_dialog, add_income_dialog
from expense_tracker.app.services.dashboard_service import (
    DashboardModel,
    CategoryBreakdown,
    RecentTransaction,
    Insight,
)
from expense_tracker.app.utils.data import category_emoji
from expense_tracker.app.utils.formatting import format_currency, escape_markdown_currency


CREDIT_COLOR = '#22c55e'
DEBIT_COLOR = '#ef4444'


def render_dashboard(ctx: AppContext) -> None:
    """
    The dashboard view. The model is loaded when the view is mounted and after every added record.
    """
    ctx.dashboard.load_if_needed()
    model = ctx.dashboard.model

    render_header()
    render_stat_cards(model)

    transactions_col, categories_col = st.columns([1, 1])
    with transactions_col:
        render_recent_transactions(model.recent_transactions, ctx)
    with categories_col:
        render_category_breakdown(model.category_breakdown, ctx)

    render_insights(model.insights)
    render_quick_actions(ctx)


def render_header() -> None:
    st.title("Financial Dashboard")
    st.caption("Track your spending, income and balance at a glance")


def render_stat_cards(model: DashboardModel) -> None:
    summary = model.summary
    balance_col, income_col, expenses_col, count_col = st.columns(4)
    balance_col.metric("Total Balance", format_currency(summary.net_amount), border=True)
    income_col.metric("Total Income", format_currency(summary.total_income), border=True)
    expenses_col.metric("Total Expenses", format_currency(summary.total_expenses), border=True)
    count_col.metric("Transactions", summary.transaction_count, border=True)


def render_recent_transactions(transactions: list[RecentTransaction], ctx: AppContext) -> None:
    with st.container(border=True):
        title_col, link_col = st.columns([3, 1])
        title_col.subheader("Recent Transactions")
        link_col.button("View all", key="dashboard_view_all_transactions", on_click=ctx.navigate,
                        args=(View.TRANSACTIONS,))

        if not transactions:
            st.info("No transactions yet. Add an expense or an income to get started.")
            return

        for transaction in transactions:
            render_transaction_row(transaction)


def render_transaction_row(transaction: RecentTransaction) -> None:
    color = CREDIT_COLOR if transaction.is_credit else DEBIT_COLOR
    emoji = '💰' if transaction.is_credit else category_emoji(transaction.category_label)
    date_label = transaction.date.strftime('%b %d, %Y') if transaction.date else ''
    name = html.escape(transaction.display_name)
    category = html.escape(transaction.category_label)
    st.html(
        f"""
        <div style="display: flex; justify-content: space-between; align-items: center; padding: 6px 0;
                    border-bottom: 1px solid #f0f0f0;">
            <div>
                <span style="font-size: 1.3em;">{emoji}</span>
                <b>{name}</b><br>
                <span style="color: gray; font-size: 0.85em;">{category} · {date_label}</span>
            </div>
            <div style="color: {color}; font-weight: bold;">
                {format_currency(transaction.amount, signed=True)}
            </div>
        </div>
        """
    )


def render_category_breakdown(breakdown: list[CategoryBreakdown], ctx: AppContext) -> None:
    with st.container(border=True):
        st.subheader("Spending by Category")
        if not breakdown:
            render_empty_categories(ctx)
            return

        for entry in breakdown:
            render_category_bar(entry)


def render_category_bar(entry: CategoryBreakdown) -> None:
    items = f"{entry.item_count} item{'' if entry.item_count == 1 else 's'}"
    st.html(
        f"""
        <div style="padding: 4px 0;">
            <div style="display: flex; justify-content: space-between;">
                <span>{category_emoji(entry.name)} <b>{html.escape(entry.name)}</b>
                    <span style="color: gray; font-size: 0.85em;">({items})</span></span>
                <span><b>{format_currency(entry.amount)}</b> · {entry.percentage}%</span>
            </div>
            <div style="width: 100%; background-color: #f3f3f3; border-radius: 6px; height: 10px;">
                <div style="width: {entry.percentage}%; background-color: {entry.color_token}; height: 10px;
                            border-radius: 6px; transition: width 0.4s ease;">
                </div>
            </div>
        </div>
        """
    )


def render_empty_categories(ctx: AppContext) -> None:
    st.markdown("### 📊")
    st.markdown("**No spending data yet**")
    st.caption("Add your first expense to see where your money goes.")
    if st.button("Add Expense", key="dashboard_empty_add_expense"):
        add_expense_dialog(ctx)


def render_insights(insights: list[Insight]) -> None:
    st.subheader("Insights")
    columns = st.columns(len(insights)) if insights else []
    for col, insight in zip(columns, insights):
        with col.container(border=True):
            st.html(
                f"""
                <div style="border-left: 4px solid {insight.color}; padding-left: 10px;">
                    <span style="font-size: 1.3em;">{insight.icon}</span> <b>{insight.title}</b>
                </div>
                """
            )
            st.markdown(escape_markdown_currency(insight.description))


def render_quick_actions(ctx: AppContext) -> None:
    st.subheader("Quick Actions")
    expense_col, income_col, analytics_col = st.columns(3)
    if expense_col.button("➖ Add Expense", key="dashboard_add_expense", use_container_width=True):
        add_expense_dialog(ctx)
    if income_col.button("➕ Add Income", key="dashboard_add_income", use_container_width=True):
        add_income_dialog(ctx)
    analytics_col.button("📈 View Analytics", key="dashboard_view_analytics", use_container_width=True,
                         on_click=ctx.navigate, args=(View.ANALYTICS,))
