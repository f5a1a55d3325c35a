"""View renderers: turn derived results into Plotly figures or text.

Renderers only read from their node. IS-LM renderers catch
DegenerateModelError and draw a fallback instead of NaN/infinite geometry.
"""

import logging
import math

import numpy as np
import plotly.graph_objects as go

from .clt import normal_curve
from .config import AXIS_PADDING, MIN_INCOME_AXIS, MIN_RATE_AXIS, RenderConfig
from .errors import DegenerateModelError
from .islm import (
    aggregate_expenditure,
    is_curve,
    lm_curve,
    money_demand,
)

logger = logging.getLogger(__name__)

CURVE_POINTS = 200


def plot_bounds(equilibrium):
    """Axis maxima of the IS-LM chart: (max(1.5Y, 1000), max(1.5r, 10))"""
    xmax = max(equilibrium.Y * AXIS_PADDING, MIN_INCOME_AXIS)
    ymax = max(equilibrium.r * AXIS_PADDING, MIN_RATE_AXIS)
    if not math.isfinite(ymax) or ymax < 0:
        ymax = MIN_RATE_AXIS
    if not math.isfinite(xmax):
        xmax = MIN_INCOME_AXIS
    return xmax, ymax


def _base_layout(fig, config, title, xaxis_title, yaxis_title):
    fig.update_layout(
        title=title,
        xaxis_title=xaxis_title,
        yaxis_title=yaxis_title,
        height=config.height,
        template=config.template,
        font=dict(family=config.font_family),
        legend=dict(x=1, y=1, xanchor="right", bgcolor="white"),
    )
    return fig


def fallback_figure(config, title, message):
    """Empty chart carrying an explanatory annotation"""
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        showarrow=False,
        font=dict(size=16, color="firebrick"),
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(
        title=title,
        height=config.height,
        template=config.template,
        font=dict(family=config.font_family),
    )
    return fig


class EquilibriumView:
    """Base class for the renderers that consume the shared equilibrium node"""

    title = ""

    def __init__(self, node):
        self.node = node

    def render(self, config=None):
        if config is None:
            config = RenderConfig()
        try:
            equilibrium = self.node.get()
        except DegenerateModelError as e:
            logger.warning("%s: %s", type(self).__name__, e)
            return self.fallback(config, e)
        return self.draw(equilibrium, equilibrium.params, config)

    def fallback(self, config, error):
        return fallback_figure(config, self.title, str(error))

    def draw(self, equilibrium, params, config):
        raise NotImplementedError


class ISLMView(EquilibriumView):
    title = "IS-LM Analysis: Equilibrium"

    def draw(self, eq, params, config):
        xmax, ymax = plot_bounds(eq)
        Y_range = np.linspace(0, xmax, CURVE_POINTS)

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=Y_range,
                y=is_curve(params, Y_range),
                mode="lines",
                name="IS Curve (goods market)",
                line=dict(color=config.is_color, width=config.line_width),
                hovertemplate="<b>IS Curve</b><br>Y=%{x:.0f}<br>r=%{y:.2f}%<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=Y_range,
                y=lm_curve(params, Y_range),
                mode="lines",
                name="LM Curve (money market)",
                line=dict(color=config.lm_color, width=config.line_width),
                hovertemplate="<b>LM Curve</b><br>Y=%{x:.0f}<br>r=%{y:.2f}%<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=[eq.Y],
                y=[eq.r],
                mode="markers+text",
                name="Equilibrium",
                marker=dict(color=config.point_color, size=14),
                text=[f"E ({eq.Y:.1f}, {eq.r:.1f}%)"],
                textposition="middle right",
                showlegend=False,
                hovertemplate="<b>Equilibrium</b><br>Y*=%{x:.2f}<br>r*=%{y:.2f}%<extra></extra>",
            )
        )
        fig.update_xaxes(range=[0, xmax], showgrid=True)
        fig.update_yaxes(range=[0, ymax], showgrid=True)
        return _base_layout(fig, config, self.title, "National Income (Y)", "Interest Rate (r, %)")


class GoodsMarketView(EquilibriumView):
    """Keynesian cross at the equilibrium interest rate"""

    title = "Goods Market: Aggregate Expenditure"

    def draw(self, eq, params, config):
        xmax, _ = plot_bounds(eq)
        Y_range = np.linspace(0, xmax, CURVE_POINTS)
        expenditure = aggregate_expenditure(params, Y_range, eq.r)

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=Y_range,
                y=Y_range,
                mode="lines",
                name="45° line (AE = Y)",
                line=dict(color="gray", width=2, dash="dash"),
            )
        )
        fig.add_trace(
            go.Scatter(
                x=Y_range,
                y=expenditure,
                mode="lines",
                name=f"AE = A - b·r* + cY (r* = {eq.r:.2f}%)",
                line=dict(color=config.is_color, width=config.line_width),
                hovertemplate="Y=%{x:.0f}<br>AE=%{y:.0f}<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=[eq.Y],
                y=[eq.Y],
                mode="markers",
                name="Equilibrium",
                marker=dict(color=config.point_color, size=12),
                showlegend=False,
            )
        )
        fig.update_xaxes(range=[0, xmax])
        fig.update_yaxes(range=[0, xmax])
        return _base_layout(fig, config, self.title, "National Income (Y)", "Aggregate Expenditure (AE)")


class MoneyMarketView(EquilibriumView):
    """Real money supply against money demand at equilibrium income"""

    title = "Money Market: Real Balances"

    def draw(self, eq, params, config):
        _, ymax = plot_bounds(eq)
        r_range = np.linspace(0, ymax, CURVE_POINTS)
        demand = money_demand(params, eq.Y, r_range)
        real_money = params.real_money
        xmax = max(float(np.max(demand)), real_money) * AXIS_PADDING

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=demand,
                y=r_range,
                mode="lines",
                name=f"Money demand L = kY* - hr (Y* = {eq.Y:.0f})",
                line=dict(color=config.lm_color, width=config.line_width),
                hovertemplate="L=%{x:.0f}<br>r=%{y:.2f}%<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=[real_money, real_money],
                y=[0, ymax],
                mode="lines",
                name=f"Real money supply M/P = {real_money:.0f}",
                line=dict(color="green", width=config.line_width),
            )
        )
        fig.add_trace(
            go.Scatter(
                x=[real_money],
                y=[eq.r],
                mode="markers",
                name="Equilibrium",
                marker=dict(color=config.point_color, size=12),
                showlegend=False,
            )
        )
        fig.update_xaxes(range=[0, xmax])
        fig.update_yaxes(range=[0, ymax])
        return _base_layout(fig, config, self.title, "Real Money Balances (M/P, L)", "Interest Rate (r, %)")


class EquilibriumTextView(EquilibriumView):
    def fallback(self, config, error):
        return str(error)

    def draw(self, eq, params, config):
        return (
            f"Equilibrium income (Y*): {eq.Y:.2f}\n"
            f"Equilibrium interest rate (r*): {eq.r:.2f} %"
        )


class SamplingDistributionView:
    """Histogram of the simulated sample means with the CLT normal overlay"""

    def __init__(self, histogram_node):
        self.histogram_node = histogram_node

    def render(self, config=None):
        if config is None:
            config = RenderConfig()
        hist = self.histogram_node.get()
        result = hist.result
        x, density = normal_curve(result, np.linspace(hist.edges[0], hist.edges[-1], CURVE_POINTS))

        fig = go.Figure()
        fig.add_trace(
            go.Bar(
                x=hist.centers,
                y=hist.density,
                width=hist.widths,
                name="Simulation",
                marker=dict(color=config.histogram_color, line=dict(color="white", width=1)),
                hovertemplate="mean=%{x:.3f}<br>density=%{y:.3f}<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=x,
                y=density,
                mode="lines",
                name="Theoretical normal",
                line=dict(color=config.normal_color, width=config.line_width),
            )
        )
        fig.update_layout(bargap=0)
        title = (
            f"Distribution of sample means (n = {result.n}, "
            f"population: {result.distribution.label})"
        )
        return _base_layout(fig, config, title, "Sample mean", "Probability density")
