"""Plotly rendering of chart geometry."""

from bodyweight.viz.weight_figure import create_weight_figure, save_weight_chart

__all__ = ['create_weight_figure', 'save_weight_chart']
