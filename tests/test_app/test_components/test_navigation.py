import pytest

from streamlit.testing.v1 import AppTest

from tests.conftest import MockFixtures, DataFixtures
from expense_tracker.app.components.navigation import AppContext, NavigationState, View
from expense_tracker.app.components.router import ViewRouter


class TestNavigation(MockFixtures, DataFixtures):
    @pytest.mark.parametrize('value, expected', [
        ('dashboard', View.DASHBOARD),
        ('expenses', View.EXPENSES),
        ('ai-analysis', View.AI_ANALYSIS),
        (View.LIMITS, View.LIMITS),
        ('settings', View.DASHBOARD),
        ('', View.DASHBOARD),
        (None, View.DASHBOARD),
    ])
    def test_select(self, value, expected):
        state = NavigationState(current=View.GOALS)
        assert state.select(value) is expected
        assert state.current is expected

    def test_every_view_has_a_renderer(self):
        assert set(ViewRouter.renderers) == set(View)

    def test_selecting_the_dashboard_reloads_it(self, mock_gateway, notifier):
        ctx = AppContext(gateway=mock_gateway, notifier=notifier)
        ctx.dashboard.load_if_needed()
        assert ctx.dashboard.needs_reload is False

        ctx.navigate('expenses')
        assert ctx.dashboard.needs_reload is False

        ctx.navigate('unknown-view')
        assert ctx.navigation.current is View.DASHBOARD
        assert ctx.dashboard.needs_reload is True

    def test_data_changed_reloads_the_dashboard_once(self, mock_gateway, notifier):
        ctx = AppContext(gateway=mock_gateway, notifier=notifier)
        ctx.notify_data_changed()
        assert mock_gateway.functions.get_spending_summary.call_count == 1


def _coming_soon_app():
    from unittest.mock import MagicMock
    from expense_tracker.app.components.navigation import AppContext, View
    from expense_tracker.app.components.coming_soon import render_coming_soon

    ctx = AppContext(gateway=MagicMock(), notifier=MagicMock())
    ctx.navigate(View.GOALS)
    render_coming_soon(ctx)


def test_coming_soon_view():
    at = AppTest.from_function(_coming_soon_app)
    at.run()
    assert not at.exception
    assert at.title[0].value == 'Goals'
    assert 'Coming Soon' in at.markdown[0].value
