import logging
import streamlit as st

from dataclasses import dataclass, field
from typing import Optional
from enum import Enum

from expense_tracker.app.data_access import DataGateway
from expense_tracker.app.services.notifications import Notifier, ToastNotifier
from expense_tracker.app.services.dashboard_service import DashboardController


logger = logging.getLogger(__name__)


class View(Enum):
    DASHBOARD = 'dashboard'
    EXPENSES = 'expenses'
    ANALYTICS = 'analytics'
    TRANSACTIONS = 'transactions'
    GOALS = 'goals'
    LIMITS = 'limits'
    AI_ANALYSIS = 'ai-analysis'

    @classmethod
    def from_value(cls, value) -> 'View':
        """the view matching the given value, unknown values fall back to the dashboard"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown view '%s', falling back to the dashboard", value)
            return cls.DASHBOARD

    @property
    def title(self) -> str:
        return VIEW_TITLES[self]

    @property
    def icon(self) -> str:
        return VIEW_ICONS[self]


VIEW_TITLES = {
    View.DASHBOARD: 'Dashboard',
    View.EXPENSES: 'Expenses',
    View.ANALYTICS: 'Analytics',
    View.TRANSACTIONS: 'Transactions',
    View.GOALS: 'Goals',
    View.LIMITS: 'Limits',
    View.AI_ANALYSIS: 'AI Analysis',
}

# bootstrap icon names, as expected by streamlit-antd-components
VIEW_ICONS = {
    View.DASHBOARD: 'house',
    View.EXPENSES: 'receipt',
    View.ANALYTICS: 'bar-chart',
    View.TRANSACTIONS: 'arrow-left-right',
    View.GOALS: 'bullseye',
    View.LIMITS: 'shield-check',
    View.AI_ANALYSIS: 'robot',
}


@dataclass
class NavigationState:
    """The view currently shown in the main area. Lives for the session only."""
    current: View = View.DASHBOARD

    def select(self, value) -> View:
        self.current = View.from_value(value)
        return self.current


@dataclass
class AppContext:
    """
    Everything a view needs to render, created once per session and passed down explicitly.

    Parameters
    ----------
    gateway : DataGateway
        The data access gateway of the session.
    notifier : Notifier
        Shows success and error messages to the user.
    navigation : NavigationState
        The selected view.
    dashboard : DashboardController
        Owns the dashboard model.
    """
    gateway: DataGateway
    notifier: Notifier
    navigation: NavigationState = field(default_factory=NavigationState)
    dashboard: Optional[DashboardController] = None

    def __post_init__(self):
        if self.dashboard is None:
            self.dashboard = DashboardController(self.gateway, self.notifier)

    def navigate(self, value) -> View:
        """
        Select a view. Selecting the dashboard mounts it again, so its data is reloaded on the next render.
        """
        view = self.navigation.select(value)
        if view is View.DASHBOARD:
            self.dashboard.mark_stale()
        return view

    def notify_data_changed(self) -> None:
        """reload the dashboard after a record was added"""
        self.dashboard.load()


def get_app_context(gateway_factory) -> AppContext:
    """
    Get the context of the current session, creating it on the first run.

    Parameters
    ----------
    gateway_factory : Callable[[], DataGateway]
        Builds the gateway when the context doesn't exist yet.
    """
    if 'app_context' not in st.session_state:
        st.session_state['app_context'] = AppContext(gateway=gateway_factory(), notifier=ToastNotifier())
    return st.session_state['app_context']
