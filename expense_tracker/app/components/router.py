import streamlit as st
import streamlit_antd_components as sac

from typing import Callable

from expense_tracker.app.components.navigation import AppContext, View
from expense_tracker.app.components.dashboard_components import render_dashboard
from expense_tracker.app.components.expenses_components import render_expenses
from expense_tracker.app.components.analytics_components import render_analytics
from expense_tracker.app.components.transactions_components import render_transactions
from expense_tracker.app.components.coming_soon import render_coming_soon


class ViewRouter:
    """
    Shows the navigation menu in the sidebar and renders the selected view in the main area.
    """
    renderers: dict[View, Callable[[AppContext], None]] = {
        View.DASHBOARD: render_dashboard,
        View.EXPENSES: render_expenses,
        View.ANALYTICS: render_analytics,
        View.TRANSACTIONS: render_transactions,
        View.GOALS: render_coming_soon,
        View.LIMITS: render_coming_soon,
        View.AI_ANALYSIS: render_coming_soon,
    }

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    def render_sidebar(self) -> None:
        views = list(View)
        current = self.ctx.navigation.current
        with st.sidebar:
            st.title("💸 Expense Tracker")
            # the menu is keyed by the current view so that navigating from inside a view moves its selection too
            selected = sac.menu(
                items=[sac.MenuItem(view.title, icon=view.icon) for view in views],
                index=views.index(current),
                return_index=True,
                key=f'navigation_menu_{current.value}'
            )
        if selected is not None and views[selected] is not current:
            self.ctx.navigate(views[selected])

    def render_view(self) -> None:
        view = self.ctx.navigation.current
        self.renderers.get(view, render_dashboard)(self.ctx)

    def run(self) -> None:
        self.render_sidebar()
        self.render_view()
