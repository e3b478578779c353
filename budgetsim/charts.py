"""Plotly figures for the year table and the running balance."""
import pandas as pd
import plotly.graph_objects as go

from budgetsim.domain import Projection
from budgetsim.frames import projection_frame

TEMPLATE = "plotly_dark"


def year_figure(year_df: pd.DataFrame, title: str = "Year overview") -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(x=year_df["month"], y=year_df["income"], name="Income"))
    fig.add_trace(go.Bar(x=year_df["month"], y=-year_df["expense"], name="Expense"))
    fig.add_trace(go.Scatter(x=year_df["month"], y=year_df["cumulative"], mode="lines+markers", name="Cumulative"))
    fig.update_layout(barmode="relative", title=title, template=TEMPLATE, margin=dict(t=40, b=10, l=10, r=10))
    return fig


def balance_figure(projection: Projection, period_start=None) -> go.Figure:
    df = projection_frame(projection)
    xs = list(df["date"])
    ys = list(df["balance"])
    if period_start is not None:
        xs = [pd.Timestamp(period_start)] + xs
        ys = [projection.start_balance] + ys

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=xs, y=ys, mode="lines+markers", line_shape="hv", name="Balance"))
    fig.add_hline(y=0, line_dash="dot", line_color="red")
    if projection.first_negative is not None:
        first = df[df["shortfall"]].iloc[0]
        fig.add_trace(go.Scatter(
            x=[first["date"]],
            y=[first["balance"]],
            mode="markers",
            marker=dict(size=12, color="red", symbol="x"),
            name="First shortfall",
        ))
    fig.update_layout(title="Running balance", template=TEMPLATE, margin=dict(t=40, b=10, l=10, r=10))
    return fig
