"""
Result builder for web interface output.
"""

from typing import Any, Dict, List

from ..formatters import format_percent
from ..processors import FlameCell

LAYOUTS = ('timeline', 'left-heavy')


def serialize_location(location) -> Dict[str, Any]:
    """Shared fields of locations, bottom-up nodes and flame cells."""
    return {
        'id': location.id,
        'call_frame': location.call_frame.to_dict(),
        'category': location.category.name.lower(),
        'src': location.src.to_dict() if location.src else None,
    }


def serialize_bottom_up(node, total_time: float, format_time, max_depth: int) -> Dict[str, Any]:
    """
    Convert a bottom-up node and its callers into nested dictionaries.

    Args:
        node: BottomUpNode to convert
        total_time: Time used as 100% for percentages
        format_time: Time formatting function
        max_depth: Caller levels to include below this node

    Returns:
        Nested dictionary; children are ranked by aggregate time
    """
    result = serialize_location(node)
    result.update({
        'self_time': node.self_time,
        'self_time_formatted': format_time(node.self_time),
        'aggregate_time': node.aggregate_time,
        'aggregate_time_formatted': format_time(node.aggregate_time),
        'aggregate_percent': format_percent(node.aggregate_time, total_time),
        'ticks': node.ticks,
        'children': [],
        'has_more_children': False,
    })

    if max_depth <= 0:
        result['has_more_children'] = bool(node.children)
        return result

    result['children'] = [
        serialize_bottom_up(child, total_time, format_time, max_depth - 1)
        for child in node.sorted_children()
    ]
    return result


def serialize_columns(columns) -> List[Dict[str, Any]]:
    """Convert flame columns; merged rows stay as integer column references."""
    serialized = []
    for column in columns:
        rows = []
        for row in column.rows:
            if isinstance(row, FlameCell):
                cell = serialize_location(row)
                cell.update({
                    'graph_id': row.graph_id,
                    'self_time': row.self_time,
                    'aggregate_time': row.aggregate_time,
                })
                rows.append(cell)
            else:
                rows.append(row)
        serialized.append({'x1': column.x1, 'x2': column.x2, 'rows': rows})
    return serialized


def prepare_results(analyzer, layout: str = 'timeline', max_depth: int = 8) -> Dict[str, Any]:
    """
    Convert analyzer results to a structured format for JSON output.

    Args:
        analyzer: ProfileAnalyzer instance with a processed profile
        layout: Flame graph layout, 'timeline' or 'left-heavy'
        max_depth: Caller levels to include in the bottom-up tree

    Returns:
        Dictionary with structured results for rendering
    """
    if layout not in LAYOUTS:
        raise ValueError(f"Unknown layout '{layout}', expected one of {', '.join(LAYOUTS)}")

    model = analyzer.model
    total_self_time = model.total_self_time

    summary = {
        'duration': model.duration,
        'duration_formatted': analyzer.format_time(model.duration),
        'total_self_time': total_self_time,
        'total_self_time_formatted': analyzer.format_time(total_self_time),
        'sample_count': len(model.samples),
        'node_count': len(model.nodes),
        'location_count': len(model.locations),
        'root_path': model.root_path,
    }

    locations = []
    for entry in analyzer.top_locations(limit=len(model.locations)):
        location = entry['location']
        data = serialize_location(location)
        data.update({
            'self_time': location.self_time,
            'self_time_formatted': analyzer.format_time(location.self_time),
            'self_percent': format_percent(location.self_time, total_self_time),
            'aggregate_time': location.aggregate_time,
            'aggregate_time_formatted': analyzer.format_time(location.aggregate_time),
            'ticks': location.ticks,
        })
        locations.append(data)

    columns = analyzer.timeline_columns if layout == 'timeline' else analyzer.left_heavy_columns

    return {
        'summary': summary,
        'locations': locations,
        'bottom_up': serialize_bottom_up(
            analyzer.bottom_up, total_self_time, analyzer.format_time, max_depth
        ),
        'flame': {
            'layout': layout,
            'columns': serialize_columns(columns),
        },
    }
