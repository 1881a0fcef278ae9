"""Region formatters for CLI output.

Provides formatting of detected regions in two formats:
- JSON: Machine-readable format
- table: Aligned plain-text columns
"""

import json
from typing import Any

from ..model import DetectedRegion


def region_to_dict(region: DetectedRegion) -> dict[str, Any]:
    """Convert a region to a JSON-serializable dictionary (thumbnail excluded)."""
    bounds = region.bounds
    return {
        "left": bounds.left,
        "top": bounds.top,
        "width": bounds.width,
        "height": bounds.height,
        "area": region.area,
        "aspect_ratio": round(region.aspect_ratio, 4),
        "cycle_position": region.cycle_position,
        "category": region.category.value,
        "thumbnail_bytes": len(region.thumbnail),
    }


def format_regions(regions: list[DetectedRegion], format_type: str) -> str:
    """Format regions in the specified format.

    Args:
        regions: Regions to format
        format_type: Output format ("json" or "table")

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "json":
        return json.dumps([region_to_dict(r) for r in regions], indent=2)
    elif format_type == "table":
        return _format_table(regions)
    else:
        raise ValueError(f"Unknown format type: {format_type}")


def _format_table(regions: list[DetectedRegion]) -> str:
    header = ("#", "left", "top", "width", "height", "cycle", "category")
    rows = [header]
    for i, region in enumerate(regions):
        left, top, width, height = region.bounds.truncated()
        rows.append(
            (
                str(i),
                str(left),
                str(top),
                str(width),
                str(height),
                str(region.cycle_position),
                region.category.display_name,
            )
        )

    widths = [max(len(row[col]) for row in rows) for col in range(len(header))]
    lines = [
        "  ".join(cell.ljust(widths[col]) for col, cell in enumerate(row)).rstrip()
        for row in rows
    ]
    lines.append(f"{len(regions)} region(s)")
    return "\n".join(lines)
