"""
Loading of circuit catalogs and drawn shapes from JSON files.

Catalog files hold a list of circuits:

    [{"id": "monza", "name": "...", "location": "...", "country": "...",
      "layout": [{"x": 0.0, "y": 1.0}, ...]}, ...]

Drawing files hold a list of {"x", "y"} objects or [x, y] pairs, optionally
wrapped in an object under a "points" key.
"""

import json
import os

from pydantic import ValidationError

from trackmatch.geometry.primitives import as_points
from trackmatch.models import CatalogError, Circuit, InvalidGeometryError
from trackmatch.tracer import get_tracer, trace


def _read_json(path, kind):
    if not os.path.exists(path):
        raise FileNotFoundError(f"{kind} not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


@trace(label="load_catalog")
def load_catalog(path):
    """
    Load a circuit catalog.

    Returns a list of Circuit objects in file order.

    Raises FileNotFoundError if path does not exist.
    Raises CatalogError for malformed entries or duplicate ids.
    """
    tracer = get_tracer()

    data = _read_json(path, "Catalog")
    if isinstance(data, dict) and "circuits" in data:
        data = data["circuits"]
    if not isinstance(data, list):
        raise CatalogError(f"Catalog must be a list of circuits: {path}")

    circuits = parse_catalog(data)

    tracer.event(f"Loaded catalog: {len(circuits)} circuits", path=path)

    return circuits


def parse_catalog(entries):
    """Validate raw catalog entries into Circuit objects."""
    circuits = []
    seen = set()

    for idx, entry in enumerate(entries):
        try:
            circuit = Circuit.model_validate(entry)
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog entry {idx}: {e.errors()[0]['msg']}") from e

        if circuit.id in seen:
            raise CatalogError(f"Duplicate circuit id: {circuit.id}")
        if not circuit.layout:
            raise CatalogError(f"Circuit {circuit.id} has an empty layout")

        seen.add(circuit.id)
        circuits.append(circuit)

    return circuits


@trace(label="load_drawing")
def load_drawing(path):
    """
    Load a drawn shape.

    Returns an (N, 2) array. Raises InvalidGeometryError for malformed or
    non-finite coordinates.
    """
    tracer = get_tracer()

    data = _read_json(path, "Drawing")
    if isinstance(data, dict):
        if "points" not in data:
            raise InvalidGeometryError(f"Drawing object has no 'points' key: {path}")
        data = data["points"]

    points = as_points(data)

    tracer.event(f"Loaded drawing: {len(points)} points", path=path)

    return points


def catalog_pairs(circuits):
    """Ordered (id, layout) pairs for the matcher."""
    return [(c.id, c.layout_array()) for c in circuits]


def validate_inputs(drawing_path, catalog_path):
    """
    Check that input files exist and have a JSON extension.

    Returns a list of error messages (empty if all valid).
    """
    errors = []

    for label, path in (("Drawing", drawing_path), ("Catalog", catalog_path)):
        if not os.path.exists(path):
            errors.append(f"{label} file not found: {path}")
            continue

        ext = os.path.splitext(path)[1].lower()
        if ext != ".json":
            errors.append(f"Unsupported {label.lower()} format: {path}")

    return errors
