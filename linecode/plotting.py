from __future__ import annotations

from typing import List

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from utils import SimResult, V_HIGH, V_LOW
from timeline import x_ticks
from d2d import SCHEME_LABELS, simulate_d2d

TRACE_NAME = "Digital Signal"
TRACE_COLOR = "blue"
TRACE_WIDTH = 5


def _style_axes(fig: go.Figure, t, spb: int, grid: bool = True, row=None, col=None):
    tickvals, ticktext = x_ticks(t, spb)
    fig.update_xaxes(
        title_text="Time (t)",
        tickmode="array",
        tickvals=tickvals,
        ticktext=ticktext,
        showgrid=grid,
        gridcolor="black",
        griddash="dash",
        row=row, col=col,
    )
    fig.update_yaxes(
        title_text="Volts (V)",
        range=[V_LOW, V_HIGH],
        tickmode="linear",
        dtick=1,
        showgrid=grid,
        gridcolor="black",
        row=row, col=col,
    )


def plot_encoded(res: SimResult, grid: bool = True) -> go.Figure:
    """Stepped waveform of one encoding run.

    Samples are joined horizontal-then-vertical (``hv``) so each level holds
    until the next sample.
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=res.t, y=res.signals["tx"], mode="lines", line_shape="hv",
        name=TRACE_NAME, line=dict(color=TRACE_COLOR, width=TRACE_WIDTH),
    ))
    title = "Digital Encoding Visualizer"
    if res.meta.get("scheme"):
        title += f"<br><sup>{res.meta['scheme']}</sup>"
    fig.update_layout(
        title=title,
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="center", x=0.5),
    )
    spb = res.meta.get("samples_per_bit") or 1
    _style_axes(fig, res.t, spb, grid=grid)
    return fig


def plot_bits(bits: List[int], grid: bool = True) -> go.Figure:
    # Input bits as a step, one time unit each, last bit held to the end
    x = np.arange(len(bits) + 1, dtype=float)
    y = list(bits) + list(bits[-1:])
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=x, y=y, mode="lines", line_shape="hv", name="Input bits"))
    fig.update_layout(title="Input bits (0/1)", xaxis_title="Bit", yaxis_title="Value")
    if grid:
        fig.update_xaxes(showgrid=True, tickmode="linear", dtick=1)
        fig.update_yaxes(showgrid=True, tickmode="linear", dtick=1)
    return fig


def plot_compare(text: str, grid: bool = True) -> go.Figure:
    labels = SCHEME_LABELS
    rows = (len(labels) + 1) // 2
    fig = make_subplots(rows=rows, cols=2, subplot_titles=labels)
    for idx, label in enumerate(labels):
        r, c = idx // 2 + 1, idx % 2 + 1
        res = simulate_d2d(text, label)
        fig.add_trace(go.Scatter(
            x=res.t, y=res.signals["tx"], mode="lines", line_shape="hv",
            name=label, line=dict(color=TRACE_COLOR, width=2),
        ), row=r, col=c)
        _style_axes(fig, res.t, res.meta["samples_per_bit"], grid=grid, row=r, col=c)
    fig.update_layout(height=300 * rows, showlegend=False)
    return fig
