"""
Plotly rendering of computed chart geometry.

The figure works in the engine's pixel space: the x axis spans the box
width, the y axis spans the box height with 0 at the top, and the line
and area are drawn directly from the engine's path strings.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import plotly.graph_objects as go

from bodyweight.charts.geometry import ChartResult, RenderedChart
from bodyweight.charts.weight_chart import build_tooltip
from bodyweight.config_loader import ConfigLoader
from bodyweight.models import ChartPoint, WeightEntry

logger = logging.getLogger(__name__)


def _pixel_axes(fig: go.Figure, width: float, height: float):
    fig.update_xaxes(range=[0, width], visible=False, fixedrange=True)
    fig.update_yaxes(range=[height, 0], visible=False, fixedrange=True)


def _hover_text(point: ChartPoint) -> str:
    """Tooltip for stored entries; bare series only show the value."""
    if isinstance(point.sample, WeightEntry):
        tooltip = build_tooltip(point)
        return f"<b>{tooltip.date_label}</b><br>{tooltip.value:g}<br>{tooltip.time_label}"
    return f"{point.value:g}"


def create_weight_figure(chart: ChartResult, viz_config: Optional[Dict[str, Any]] = None,
                         title: str = "Body Weight", width: float = 300,
                         height: float = 220) -> go.Figure:
    """
    Build a figure for any chart result.

    Empty and insufficient results become a figure with the placeholder
    text; `width`/`height` size that placeholder.
    """
    viz = dict(ConfigLoader.DEFAULT_VIZ)
    viz.update(viz_config or {})

    fig = go.Figure()

    if not isinstance(chart, RenderedChart):
        _pixel_axes(fig, width, height)
        fig.add_annotation(
            x=width / 2, y=height / 2, showarrow=False,
            text=f"{chart.message}<br><sub>{chart.hint}</sub>",
            font=dict(color=viz["label_color"]),
        )
        fig.update_layout(title=title, width=width, height=height, plot_bgcolor="white")
        return fig

    box = chart.box
    _pixel_axes(fig, box.width, box.height)

    # Dashed grid line and label per tick
    for tick in chart.ticks:
        fig.add_shape(
            type="line", x0=box.left, x1=box.right, y0=tick.y, y1=tick.y,
            line=dict(color=viz["grid_color"], width=1, dash="dash"),
        )
        fig.add_annotation(
            x=box.left - 8, y=tick.y, text=f"{tick.value:g}", showarrow=False,
            xanchor="right", font=dict(size=10, color=viz["label_color"]),
        )

    fig.add_shape(type="path", path=chart.area_path, fillcolor=viz["fill_color"], line=dict(width=0))
    fig.add_shape(type="path", path=chart.line_path, line=dict(color=viz["line_color"], width=2.5))

    hover_text = [_hover_text(point) for point in chart.points]

    fig.add_trace(
        go.Scatter(
            x=[point.x for point in chart.points],
            y=[point.y for point in chart.points],
            mode='markers',
            name='Weight',
            marker=dict(size=6, color=viz["marker_fill"],
                        line=dict(color=viz["line_color"], width=2)),
            text=hover_text,
            hovertemplate="%{text}<extra></extra>",
        )
    )

    if chart.summary.show_badge:
        fig.add_annotation(
            x=box.right, y=box.top, text=chart.summary.badge_text, showarrow=False,
            xanchor="right", yanchor="bottom", font=dict(size=12),
        )

    fig.update_layout(
        title=title,
        width=box.width,
        height=box.height,
        margin=dict(l=0, r=0, t=40 if title else 0, b=0),
        plot_bgcolor="white",
        showlegend=False,
    )
    return fig


def save_weight_chart(chart: ChartResult, output_dir: str, filename: str = "weight_chart.html",
                      viz_config: Optional[Dict[str, Any]] = None, **figure_kwargs) -> str:
    """Write the chart to a standalone HTML file and return its path."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    html_file = output_path / filename

    fig = create_weight_figure(chart, viz_config, **figure_kwargs)
    fig.write_html(
        str(html_file),
        include_plotlyjs='cdn',
        config={'displayModeBar': False, 'displaylogo': False},
    )
    logger.info(f"Chart written to {html_file}")
    return str(html_file)
