import streamlit as st

from expense_tracker.app.components.navigation import AppContext
from expense_tracker.app.services.analytics_service import AnalyticsService
from expense_tracker.app.utils.plotting import (
    bar_plot_by_categories,
    pie_plot_by_categories,
    bar_plot_income_vs_expenses,
)


def render_analytics(ctx: AppContext) -> None:
    st.title("Analytics")
    service = AnalyticsService(ctx.gateway, ctx.notifier)
    data = service.load()
    if data is None:
        st.error(service.load_error_message)
        return

    if data.category_breakdown:
        bar_col, pie_col = st.columns([3, 2])
        bar_col.plotly_chart(bar_plot_by_categories(data.category_breakdown), use_container_width=True)
        pie_col.plotly_chart(pie_plot_by_categories(data.category_breakdown), use_container_width=True)
    else:
        st.info("No expenses recorded yet.")

    if data.monthly_summary.empty:
        st.info("No monthly data to show yet.")
    else:
        st.plotly_chart(bar_plot_income_vs_expenses(data.monthly_summary), use_container_width=True)
