import pandas as pd
import plotly.graph_objects as go

from expense_tracker.app.naming_conventions import MonthlySummaryFields


def bar_plot_by_categories(breakdown: list) -> go.Figure:
    """
    Plot the expenses of each category as horizontal bars

    Parameters
    ----------
    breakdown : list[CategoryBreakdown]
        The category breakdown, sorted by amount in descending order

    Returns
    -------
    go.Figure
        The bar plot
    """
    # plotly draws the first bar at the bottom, reverse to keep the largest category on top
    entries = list(reversed(breakdown))
    fig = go.Figure(
        go.Bar(
            x=[entry.amount for entry in entries],
            y=[entry.name for entry in entries],
            orientation='h',
            marker_color=[entry.color_token for entry in entries],
            text=[f"{entry.percentage}%" for entry in entries],
            textposition='auto'
        )
    )
    fig.update_layout(
        title='Spending by Category',
        xaxis_title='Expenses [$]',
        yaxis_title='Category',
    )
    return fig


def pie_plot_by_categories(breakdown: list) -> go.Figure:
    """
    Plot the share of each category out of the total expenses

    Parameters
    ----------
    breakdown : list[CategoryBreakdown]
        The category breakdown

    Returns
    -------
    go.Figure
        The pie plot
    """
    fig = go.Figure(
        go.Pie(
            labels=[entry.name for entry in breakdown],
            values=[entry.amount for entry in breakdown],
            marker_colors=[entry.color_token for entry in breakdown],
            textinfo='label+percent',
            hole=0.3,
            name="Expenses"
        )
    )
    fig.update_layout(title_text='Expenses Share')
    return fig


def bar_plot_income_vs_expenses(monthly_summary: pd.DataFrame) -> go.Figure:
    """
    Plot the income and the expenses of every month side by side, with the net amount as a line

    Parameters
    ----------
    monthly_summary : pd.DataFrame
        The monthly financial summary with the columns month, total_income, total_expenses and net_amount

    Returns
    -------
    go.Figure
        The grouped bar plot
    """
    f = MonthlySummaryFields
    months = monthly_summary[f.MONTH.value]
    fig = go.Figure()
    fig.add_trace(
        go.Bar(x=months, y=monthly_summary[f.TOTAL_INCOME.value], name='Income', marker_color='#22c55e')
    )
    fig.add_trace(
        go.Bar(x=months, y=monthly_summary[f.TOTAL_EXPENSES.value], name='Expenses', marker_color='#ef4444')
    )
    fig.add_trace(
        go.Scatter(x=months, y=monthly_summary[f.NET_AMOUNT.value], name='Net', mode='lines+markers',
                   line=dict(color='#3b82f6'))
    )
    fig.update_layout(
        barmode='group',
        title='Income vs. Expenses Over Months',
        xaxis_title='Month',
        yaxis_title='Amount [$]',
    )
    return fig
