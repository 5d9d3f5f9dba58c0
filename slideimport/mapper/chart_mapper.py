"""
Chart Mapper - Maps raw chart series into editor chart data
"""

import logging
from typing import List, Dict, Any, Tuple

logger = logging.getLogger(__name__)

CHART_TYPE_MAP = {
    'barChart': 'bar',
    'bar3DChart': 'bar',
    'lineChart': 'line',
    'line3DChart': 'line',
    'areaChart': 'area',
    'area3DChart': 'area',
    'scatterChart': 'scatter',
    'bubbleChart': 'scatter',
    'pieChart': 'pie',
    'pie3DChart': 'pie',
    'radarChart': 'radar',
    'doughnutChart': 'ring',
}

DEFAULT_CHART_TYPE = 'bar'
COORDINATE_CHART_TYPES = ('scatterChart', 'bubbleChart')
STACKABLE_CHART_TYPES = ('bar', 'line', 'area')
STACKED_GROUPINGS = ('stacked', 'percentStacked')


def map_chart_type(vendor_type: str, bar_dir: str = None, grouping: str = None) -> Tuple[str, Dict[str, Any]]:
    """
    Map a vendor chart type to the editor chart type and options.

    Args:
        vendor_type: Raw chart type, e.g. 'barChart'
        bar_dir: Bar direction; 'bar' turns a bar chart into a column chart
        grouping: Raw grouping; stacked groupings set the stack option

    Returns:
        Tuple of (chart_type, options)
    """
    chart_type = CHART_TYPE_MAP.get(vendor_type)
    if chart_type is None:
        logger.debug(f"Unknown chart type '{vendor_type}', defaulting to {DEFAULT_CHART_TYPE}")
        return DEFAULT_CHART_TYPE, {}

    options = {}
    if chart_type in STACKABLE_CHART_TYPES and grouping in STACKED_GROUPINGS:
        options['stack'] = True
    if chart_type == 'bar' and bar_dir == 'bar':
        chart_type = 'column'

    return chart_type, options


def map_chart_data(vendor_type: str, data: List[Any]) -> Dict[str, List[Any]]:
    """
    Build labels, legends and series from raw chart data.

    Coordinate charts carry [xs, ys] lists; category charts carry one item per
    series with key, xlabels and values.
    """
    if not data:
        return {'labels': [], 'legends': [], 'series': []}

    if vendor_type in COORDINATE_CHART_TYPES:
        labels = [f"Coordinate {index + 1}" for index in range(len(data[0]))]
        return {
            'labels': labels,
            'legends': ['X', 'Y'],
            'series': [list(values) for values in data],
        }

    xlabels = data[0].get('xlabels') or {}
    labels = list(xlabels.values()) if isinstance(xlabels, dict) else list(xlabels)
    legends = [item.get('key') for item in data]
    series = [[value.get('y') for value in item.get('values', [])] for item in data]
    return {
        'labels': labels,
        'legends': legends,
        'series': series,
    }
