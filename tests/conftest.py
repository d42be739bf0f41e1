"""Pytest fixtures for trackmatch tests."""

import json
import os
import tempfile

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def unit_square():
    """Corners of the unit square, implicitly closed."""
    return [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]


@pytest.fixture
def big_square(unit_square):
    """The unit square scaled by 10 and moved to (500, 500)."""
    return [[x * 10 + 500, y * 10 + 500] for x, y in unit_square]


@pytest.fixture
def line_segment():
    """A straight horizontal segment."""
    return [[0.0, 0.0], [10.0, 0.0]]


@pytest.fixture
def circle():
    """Regular 64-gon approximating a circle, implicitly closed."""
    t = np.linspace(0, 2 * np.pi, 64, endpoint=False)
    return np.column_stack([5 * np.cos(t) + 20, 5 * np.sin(t) - 3])


@pytest.fixture
def circuit_like():
    """An irregular closed loop with straights and corners."""
    return [
        [0, 0], [40, 0], [55, 8], [60, 20], [52, 30], [35, 28],
        [28, 40], [10, 42], [2, 30], [6, 18], [0, 10],
    ]


@pytest.fixture
def default_config():
    """Create default matching configuration."""
    from trackmatch.config import MatchConfig
    return MatchConfig()


def _as_xy(points):
    return [{"x": float(x), "y": float(y)} for x, y in points]


@pytest.fixture
def catalog_file(temp_dir, unit_square, circle, line_segment):
    """A small catalog on disk with a square, a circle and a straight."""
    data = [
        {"id": "oval", "name": "Oval Speedway", "location": "Somewhere", "country": "US",
         "layout": _as_xy(circle)},
        {"id": "square", "name": "Square Ring", "location": "Elsewhere", "country": "DE",
         "layout": _as_xy(unit_square)},
        {"id": "dragstrip", "name": "Drag Strip", "location": "Desert", "country": "US",
         "layout": _as_xy(line_segment)},
    ]
    path = os.path.join(temp_dir, "circuits.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path


@pytest.fixture
def drawing_file(temp_dir, big_square):
    """A drawing of a square on disk, in {x, y} form."""
    path = os.path.join(temp_dir, "drawing.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_as_xy(big_square), f)
    return path
