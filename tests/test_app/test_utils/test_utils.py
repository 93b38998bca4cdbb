import pandas as pd
import pytest

from tests.conftest import DataFixtures
from expense_tracker import DEFAULT_CATEGORIES_PATH, INCOME_TYPES_PATH
from expense_tracker.app.services.dashboard_service import build_category_breakdown
from expense_tracker.app.utils.data import load_yaml_list
from expense_tracker.app.utils.formatting import format_currency, escape_markdown_currency
from expense_tracker.app.utils.plotting import (
    bar_plot_by_categories,
    pie_plot_by_categories,
    bar_plot_income_vs_expenses,
)
from expense_tracker.app.naming_conventions import MonthlySummaryFields


@pytest.mark.parametrize('amount, signed, expected', [
    (1234.56, False, '$1,234.56'),
    (-12.5, False, '-$12.50'),
    (0, False, '$0.00'),
    (3200, True, '+$3,200.00'),
    (-4.5, True, '-$4.50'),
    (0, True, '$0.00'),
])
def test_format_currency(amount, signed, expected):
    assert format_currency(amount, signed) == expected


def test_escape_markdown_currency():
    assert escape_markdown_currency('from $5 to $10') == 'from \\$5 to \\$10'


class TestResources:
    def test_default_categories(self):
        categories = load_yaml_list(DEFAULT_CATEGORIES_PATH)
        assert len(categories) == 10
        assert all(category['name'] and category['emoji'] for category in categories)

    def test_income_types(self):
        ids = [item['id'] for item in load_yaml_list(INCOME_TYPES_PATH)]
        assert ids == ['salary', 'freelance', 'business', 'investment', 'rental', 'bonus', 'gift', 'refund',
                       'other']

    def test_missing_file(self, tmp_path):
        assert load_yaml_list(str(tmp_path / 'missing.yaml')) == []


class TestPlotting(DataFixtures):
    def test_category_plots(self, category_rows_maker):
        breakdown = build_category_breakdown(category_rows_maker([('Food', 300.0, 3), ('Bills', 500.0, 1)]))

        bar = bar_plot_by_categories(breakdown)
        # the largest category is drawn last so it shows on top
        assert list(bar.data[0].y) == ['Food', 'Bills']

        pie = pie_plot_by_categories(breakdown)
        assert list(pie.data[0].labels) == ['Bills', 'Food']

    def test_income_vs_expenses(self):
        f = MonthlySummaryFields
        monthly = pd.DataFrame({
            f.MONTH.value: ['2024-05', '2024-06'],
            f.TOTAL_INCOME.value: [3200.0, 0.0],
            f.TOTAL_EXPENSES.value: [4.5, 20.0],
            f.NET_AMOUNT.value: [3195.5, -20.0],
        })
        fig = bar_plot_income_vs_expenses(monthly)
        assert [trace.name for trace in fig.data] == ['Income', 'Expenses', 'Net']
