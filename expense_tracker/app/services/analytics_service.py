import logging
import pandas as pd

from dataclasses import dataclass, field
from typing import Optional

from expense_tracker.app.data_access import DataGateway, GatewayError
from expense_tracker.app.data_access.gateway import rows
from expense_tracker.app.services.notifications import Notifier
from expense_tracker.app.services.dashboard_service import CategoryBreakdown, build_category_breakdown
from expense_tracker.app.naming_conventions import MonthlySummaryFields


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsData:
    category_breakdown: list[CategoryBreakdown] = field(default_factory=list)
    monthly_summary: pd.DataFrame = field(default_factory=pd.DataFrame)


class AnalyticsService:
    load_error_message = "Failed to load analytics data"

    def __init__(self, gateway: DataGateway, notifier: Notifier):
        self.gateway = gateway
        self.notifier = notifier

    def load(self) -> Optional[AnalyticsData]:
        """
        Load the category breakdown and the monthly financial summary.

        Returns
        -------
        AnalyticsData | None
            The data for the analytics charts, None if any of the queries failed.
        """
        try:
            category_rows = rows(self.gateway.views.expense_summary_by_category())
            monthly_rows = rows(self.gateway.views.monthly_financial_summary())
        except GatewayError as exc:
            logger.error("Error loading analytics data: %s", exc.message)
            self.notifier.error(self.load_error_message)
            return None

        return AnalyticsData(
            category_breakdown=build_category_breakdown(category_rows),
            monthly_summary=self.normalize_monthly_summary(monthly_rows),
        )

    @staticmethod
    def normalize_monthly_summary(monthly_rows: pd.DataFrame) -> pd.DataFrame:
        """coerce the amounts of the monthly summary to numbers and drop rows without a month"""
        f = MonthlySummaryFields
        columns = [f.MONTH.value, f.TOTAL_INCOME.value, f.TOTAL_EXPENSES.value, f.NET_AMOUNT.value]
        if monthly_rows.empty:
            return pd.DataFrame(columns=columns)

        df = monthly_rows.loc[monthly_rows[f.MONTH.value].notna(), columns].copy()
        for col in columns[1:]:
            df[col] = pd.to_numeric(df[col], errors='coerce').fillna(0.0)
        return df.sort_values(by=f.MONTH.value).reset_index(drop=True)
