"""
Pydantic data models for trackmatch.

Points entering the engine and results leaving it are validated here, so
non-finite coordinates are rejected before any distance is computed.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class MatchAlgorithm(str, Enum):
    """Distance metrics available for matching."""
    HAUSDORFF = "hausdorff"
    FRECHET = "frechet"
    TURNING_ANGLE = "turning-angle"


class NormalizationPolicy(str, Enum):
    """How shapes are made translation and scale invariant."""
    BBOX = "bbox"
    PCA = "pca"


class TrackMatchError(ValueError):
    """Base class for contract errors raised at the engine boundary."""


class UnknownAlgorithmError(TrackMatchError):
    """Algorithm selector outside MatchAlgorithm."""


class UnknownPolicyError(TrackMatchError):
    """Normalization policy outside NormalizationPolicy."""


class InvalidGeometryError(TrackMatchError):
    """Malformed or non-finite coordinates."""


class CatalogError(TrackMatchError):
    """Malformed circuit catalog."""


def parse_algorithm(value):
    """
    Resolve an algorithm selector to a MatchAlgorithm.

    Raises UnknownAlgorithmError for anything outside the enumeration.
    """
    if isinstance(value, MatchAlgorithm):
        return value
    try:
        return MatchAlgorithm(value)
    except ValueError:
        valid = ", ".join(a.value for a in MatchAlgorithm)
        raise UnknownAlgorithmError(f"Unknown algorithm {value!r} (expected one of: {valid})") from None


def parse_policy(value):
    """Resolve a normalization policy selector."""
    if isinstance(value, NormalizationPolicy):
        return value
    try:
        return NormalizationPolicy(value)
    except ValueError:
        valid = ", ".join(p.value for p in NormalizationPolicy)
        raise UnknownPolicyError(f"Unknown normalization policy {value!r} (expected one of: {valid})") from None


class Point(BaseModel):
    """A 2D point with finite coordinates."""
    x: float
    y: float

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)


class BoundingBox(BaseModel):
    """Axis-aligned bounds of a point sequence."""
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    width: float = Field(default=0.0, ge=0.0)
    height: float = Field(default=0.0, ge=0.0)
    center_x: float = 0.0
    center_y: float = 0.0

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_degenerate(self):
        """True when the box has no extent in either direction."""
        return self.width == 0 and self.height == 0


class MatchResult(BaseModel):
    """Similarity of one catalog entry to the drawn shape."""
    circuit_id: str
    similarity: float = Field(..., ge=0.0, le=100.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class Circuit(BaseModel):
    """A catalog entry: a circuit and its track layout."""
    id: str
    name: str = ""
    location: str = ""
    country: str = ""
    layout: List[Point] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    def layout_array(self):
        """Layout as a list of [x, y] pairs."""
        return [[p.x, p.y] for p in self.layout]


class MatchReport(BaseModel):
    """Ranked output of a catalog matching run."""
    algorithm: MatchAlgorithm
    policy: NormalizationPolicy
    resample_count: int
    drawn_point_count: int
    candidate_count: int
    results: List[MatchResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def best(self):
        """Highest scoring result, or None for an empty catalog."""
        return self.results[0] if self.results else None
