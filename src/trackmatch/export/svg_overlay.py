"""
SVG overlays of a drawn shape and its matched circuits.

The circuit layout is aligned into the drawing's bounding box and both are
scaled into a square canvas, so the two outlines can be compared by eye.
"""

import os
import re

import numpy as np
import svgwrite

from trackmatch.geometry.align import align_to_reference
from trackmatch.geometry.primitives import as_points, bounding_box
from trackmatch.io.save_artifacts import ensure_dir, save_svg
from trackmatch.tracer import get_tracer, trace

_MARGIN = 10


def create_overlay_svg(drawn, layout, size=400, drawing_color="black",
                       circuit_color="red", stroke_width=2.0, title=None):
    """
    Create an SVG with the drawn shape and an aligned circuit layout.

    Args:
        drawn: drawn point sequence
        layout: circuit layout point sequence
        size: canvas edge length in pixels
        title: optional caption rendered at the top-left corner

    Returns:
        svgwrite.Drawing object
    """
    drawn_pts = as_points(drawn)
    aligned = align_to_reference(layout, drawn_pts)

    to_canvas = _canvas_transform(drawn_pts, size)

    dwg = svgwrite.Drawing(size=(f"{size}px", f"{size}px"))
    dwg.viewbox(0, 0, size, size)

    dwg.defs.add(dwg.style("""
        .outline { stroke-linecap: round; stroke-linejoin: round; }
    """))

    circuit_group = dwg.g(id="circuit", fill="none", stroke=circuit_color,
                          stroke_width=stroke_width, class_="outline")
    if len(aligned) >= 2:
        circuit_group.add(dwg.polygon(points=_as_tuples(to_canvas(aligned))))
    dwg.add(circuit_group)

    drawing_group = dwg.g(id="drawing", fill="none", stroke=drawing_color,
                          stroke_width=stroke_width, class_="outline")
    if len(drawn_pts) >= 2:
        drawing_group.add(dwg.polyline(points=_as_tuples(to_canvas(drawn_pts))))
    dwg.add(drawing_group)

    if title:
        dwg.add(dwg.text(title, insert=(_MARGIN, _MARGIN + 12), font_size=12,
                         font_family="sans-serif", fill=drawing_color))

    return dwg


def _canvas_transform(reference, size):
    """Map the reference's bounding box into the canvas, keeping aspect ratio."""
    box = bounding_box(reference)
    span = max(box.width, box.height)
    usable = size - 2 * _MARGIN
    scale = usable / span if span > 0 else 1.0
    origin = np.array([box.min_x, box.min_y])

    def transform(points):
        return (points - origin) * scale + _MARGIN

    return transform


def _as_tuples(points):
    return [(round(float(x), 2), round(float(y), 2)) for x, y in points]


def _safe_filename(circuit_id):
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", circuit_id) or "circuit"


@trace(label="export_overlays")
def export_overlays(drawn, circuits, results, out_dir, output_config):
    """
    Write one overlay SVG per result.

    Args:
        drawn: drawn point sequence
        circuits: mapping of circuit id -> layout points
        results: ranked MatchResult list
        out_dir: output directory; files go to out_dir/overlays
        output_config: OutputConfig

    Returns:
        list of written file paths
    """
    tracer = get_tracer()

    overlay_dir = os.path.join(out_dir, "overlays")
    ensure_dir(overlay_dir)

    paths = []
    for rank, result in enumerate(results, start=1):
        layout = circuits.get(result.circuit_id)
        if layout is None:
            tracer.event(f"No layout for {result.circuit_id}, skipping overlay", level="WARN")
            continue

        dwg = create_overlay_svg(
            drawn, layout,
            size=output_config.overlay_size,
            drawing_color=output_config.drawing_color,
            circuit_color=output_config.circuit_color,
            stroke_width=output_config.stroke_width,
            title=f"#{rank} {result.circuit_id} {result.similarity:.1f}%",
        )
        path = os.path.join(overlay_dir, f"{rank:02d}_{_safe_filename(result.circuit_id)}.svg")
        save_svg(dwg, path)
        paths.append(path)

    tracer.event(f"Exported {len(paths)} overlays")

    return paths
