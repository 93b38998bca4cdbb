"""
The dashboard aggregation engine.

The raw rows of the spending summary procedure, the recent transactions view and the expense summary by
category view are turned into a display ready ``DashboardModel``: totals, net balance, category breakdown with
percentages and colors, and three insight messages. The model is recomputed on every load and never cached beyond
the current session.
"""
import math
import logging
import dataclasses
import pandas as pd

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from dataclasses import dataclass, field
from typing import Any, Optional

from expense_tracker.app.data_access import DataGateway, GatewayError
from expense_tracker.app.data_access.gateway import rows
from expense_tracker.app.services.notifications import Notifier
from expense_tracker.app.utils.formatting import format_currency
from expense_tracker.app.naming_conventions import (
    SpendingSummaryFields,
    CategorySummaryFields,
    RecentTransactionsFields,
    TransactionTypes,
    UNCATEGORIZED,
)


logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 5
LOAD_ERROR_MESSAGE = "Failed to load dashboard data"
NO_EXPENSES_MESSAGE = "No expenses recorded yet."

CATEGORY_COLORS = [
    '#ef4444',  # red
    '#3b82f6',  # blue
    '#a855f7',  # purple
    '#22c55e',  # green
    '#f97316',  # orange
    '#eab308',  # yellow
    '#ec4899',  # pink
]


@dataclass(frozen=True)
class SpendingSummary:
    total_income: float = 0.0
    total_expenses: float = 0.0
    net_amount: float = 0.0
    transaction_count: int = 0


@dataclass(frozen=True)
class CategoryBreakdown:
    name: str
    amount: float
    percentage: int
    item_count: int
    color_token: str = ''


@dataclass(frozen=True)
class RecentTransaction:
    id: str
    display_name: str
    category_label: str
    amount: float
    is_credit: bool
    date: Optional[date]


@dataclass(frozen=True)
class Insight:
    kind: str
    title: str
    description: str
    icon: str
    color: str


@dataclass(frozen=True)
class DashboardModel:
    summary: SpendingSummary = field(default_factory=SpendingSummary)
    recent_transactions: list[RecentTransaction] = field(default_factory=list)
    category_breakdown: list[CategoryBreakdown] = field(default_factory=list)
    total_category_expenses: float = 0.0
    insights: list[Insight] = field(default_factory=list)


def to_amount(value: Any) -> float:
    """
    Coerce a raw value into an amount of money. Absent, non numeric and non finite values become 0.

    Parameters
    ----------
    value : Any
        The raw value, as returned by the database (number, numeric string, None, NaN...)

    Returns
    -------
    float
        The amount
    """
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount


def round_half_up(value: float) -> int:
    """round to the nearest integer, halves are rounded away from zero"""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def build_spending_summary(summary_rows: pd.DataFrame) -> SpendingSummary:
    """
    Build the spending summary from the first row of the aggregate procedure result.

    Parameters
    ----------
    summary_rows : pd.DataFrame
        The rows returned by the spending summary procedure.

    Returns
    -------
    SpendingSummary
        The summary, zero filled if there are no rows.
    """
    if summary_rows is None or summary_rows.empty:
        return SpendingSummary()

    row = summary_rows.iloc[0]
    f = SpendingSummaryFields
    return SpendingSummary(
        total_income=to_amount(row.get(f.TOTAL_INCOME.value)),
        total_expenses=to_amount(row.get(f.TOTAL_EXPENSES.value)),
        net_amount=to_amount(row.get(f.NET_AMOUNT.value)),
        transaction_count=int(to_amount(row.get(f.TRANSACTION_COUNT.value))),
    )


def build_recent_transactions(recent_rows: pd.DataFrame) -> list[RecentTransaction]:
    """
    Convert the recent transactions view rows into display records. Credits are positive and debits negative.
    """
    if recent_rows is None or recent_rows.empty:
        return []

    f = RecentTransactionsFields
    transactions = []
    for _, row in recent_rows.iterrows():
        is_credit = row.get(f.TRANSACTION_TYPE.value) == TransactionTypes.CREDIT.value
        amount = abs(to_amount(row.get(f.AMOUNT.value)))
        category = row.get(f.CATEGORY_NAME.value)
        transactions.append(
            RecentTransaction(
                id=str(row.get(f.ID.value)),
                display_name=str(row.get(f.ITEM_NAME.value) or ''),
                category_label=category if isinstance(category, str) and category else UNCATEGORIZED,
                amount=amount if is_credit else -amount,
                is_credit=is_credit,
                date=_to_date(row.get(f.TRANS_DATE.value)),
            )
        )
    return transactions


def total_category_expenses(category_rows: pd.DataFrame) -> float:
    """the sum of all category amounts, before non positive amounts are filtered out"""
    if category_rows is None or category_rows.empty:
        return 0.0
    return sum(to_amount(amount) for amount in category_rows[CategorySummaryFields.TOTAL_AMOUNT.value])


def category_percentage(amount: float, total: float) -> int:
    """
    The share of a category out of the total expenses, as an integer percentage.

    Every category is rounded on its own, hence the percentages of a breakdown are not guaranteed to sum to 100.
    """
    if total <= 0:
        return 0
    return min(max(round_half_up(amount / total * 100), 0), 100)


def compute_category_shares(category_rows: pd.DataFrame) -> list[CategoryBreakdown]:
    """
    Compute the breakdown entries of the categories with a positive amount, sorted by amount in descending order.
    Entries with equal amounts keep their original order. No color is assigned here.

    Parameters
    ----------
    category_rows : pd.DataFrame
        The rows of the expense summary by category view.

    Returns
    -------
    list[CategoryBreakdown]
        The breakdown entries without color tokens.
    """
    if category_rows is None or category_rows.empty:
        return []

    f = CategorySummaryFields
    total = total_category_expenses(category_rows)
    entries = []
    for _, row in category_rows.iterrows():
        amount = to_amount(row.get(f.TOTAL_AMOUNT.value))
        if amount <= 0:
            continue
        name = row.get(f.CATEGORY_NAME.value)
        entries.append(
            CategoryBreakdown(
                name=name if isinstance(name, str) and name else UNCATEGORIZED,
                amount=amount,
                percentage=category_percentage(amount, total),
                item_count=int(to_amount(row.get(f.EXPENSE_COUNT.value))),
            )
        )
    return sorted(entries, key=lambda entry: entry.amount, reverse=True)


def assign_color_tokens(entries: list[CategoryBreakdown],
                        palette: Optional[list[str]] = None) -> list[CategoryBreakdown]:
    """give every entry a color by cycling the palette by position"""
    palette = palette or CATEGORY_COLORS
    return [dataclasses.replace(entry, color_token=palette[i % len(palette)]) for i, entry in enumerate(entries)]


def build_category_breakdown(category_rows: pd.DataFrame) -> list[CategoryBreakdown]:
    return assign_color_tokens(compute_category_shares(category_rows))


def build_insights(summary: SpendingSummary, breakdown: list[CategoryBreakdown]) -> list[Insight]:
    """
    Build the three dashboard insights, in a fixed order: a summary of the period, the balance polarity and the top
    spending category.

    Parameters
    ----------
    summary : SpendingSummary
        The spending summary of the period.
    breakdown : list[CategoryBreakdown]
        The category breakdown, sorted by amount in descending order.

    Returns
    -------
    list[Insight]
        Exactly three insights.
    """
    count = summary.transaction_count
    insights = [
        Insight(
            kind='info',
            title='Financial Summary',
            description=f"You have {count} transaction{'' if count == 1 else 's'} "
                        f"with a net amount of {format_currency(summary.net_amount)}.",
            icon='📊',
            color='#3b82f6',
        )
    ]

    if summary.net_amount >= 0:
        insights.append(
            Insight(
                kind='success',
                title='Positive Balance',
                description=f"Great job! Your income exceeds your expenses by "
                            f"{format_currency(summary.net_amount)}.",
                icon='🎯',
                color='#22c55e',
            )
        )
    else:
        insights.append(
            Insight(
                kind='warning',
                title='Budget Alert',
                description=f"Your expenses exceed your income by {format_currency(abs(summary.net_amount))}. "
                            f"Consider reviewing your spending.",
                icon='⚠️',
                color='#f97316',
            )
        )

    if breakdown:
        top = breakdown[0]
        description = (f"{top.name} is your top spending category with {format_currency(top.amount)} "
                       f"({top.percentage}% of your expenses).")
    else:
        description = NO_EXPENSES_MESSAGE
    insights.append(
        Insight(
            kind='info',
            title='Top Spending Category',
            description=description,
            icon='🧠',
            color='#a855f7',
        )
    )
    return insights


def build_dashboard_model(summary_rows: pd.DataFrame, recent_rows: pd.DataFrame,
                          category_rows: pd.DataFrame) -> DashboardModel:
    """
    Build the whole dashboard model from the raw rows of the three aggregate queries.
    """
    summary = build_spending_summary(summary_rows)
    breakdown = build_category_breakdown(category_rows)
    return DashboardModel(
        summary=summary,
        recent_transactions=build_recent_transactions(recent_rows),
        category_breakdown=breakdown,
        total_category_expenses=total_category_expenses(category_rows),
        insights=build_insights(summary, breakdown),
    )


class DashboardController:
    """
    Owns the dashboard model of a session. Only ``load`` writes the model, a failed load keeps the previous one.
    """
    def __init__(self, gateway: DataGateway, notifier: Notifier):
        self.gateway = gateway
        self.notifier = notifier
        self.model = DashboardModel(insights=build_insights(SpendingSummary(), []))
        self.loading = False
        self.needs_reload = True

    def mark_stale(self) -> None:
        """request a load on the next render of the dashboard"""
        self.needs_reload = True

    def load(self) -> bool:
        """
        Fetch the three aggregates and rebuild the model.

        Returns
        -------
        bool
            True if the model was rebuilt, False if any query failed (the previous model is kept and the user is
            notified once).
        """
        self.loading = True
        try:
            summary_rows = rows(self.gateway.functions.get_spending_summary())
            recent_rows = rows(self.gateway.views.recent_transactions_detailed(RECENT_TRANSACTIONS_LIMIT))
            category_rows = rows(self.gateway.views.expense_summary_by_category())
            self.model = build_dashboard_model(summary_rows, recent_rows, category_rows)
            return True
        except GatewayError as exc:
            logger.error("%s: %s", LOAD_ERROR_MESSAGE, exc.message)
            self.notifier.error(LOAD_ERROR_MESSAGE)
            return False
        finally:
            self.loading = False
            self.needs_reload = False

    def load_if_needed(self) -> None:
        if self.needs_reload:
            self.load()


def _to_date(value: Any) -> Optional[date]:
    parsed = pd.to_datetime(value, errors='coerce')
    if pd.isnull(parsed):
        return None
    return parsed.date()
