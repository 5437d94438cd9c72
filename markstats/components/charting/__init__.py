"""
Charting components: Chart.js config building, the Chart.js backend and the chart sink.
"""

from .chart_config_comp import build_bar_chart_config
from .chart_sink_comp import ChartSink
from .chartjs_backend_comp import ChartBackend, ChartHandle, ChartJsBackend

__all__ = [
    "ChartBackend",
    "ChartHandle",
    "ChartJsBackend",
    "ChartSink",
    "build_bar_chart_config",
]
