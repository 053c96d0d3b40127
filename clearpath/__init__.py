"""Borrower qualification engine.

This module also exposes the package version for runtime display."""

from importlib import metadata

from .calculators import compute_metrics, income_breakdown
from .models import BorrowerSnapshot, QualificationMetrics, ScenarioAdjustments
from .parsing import snapshot_from_record

__all__ = [
    "__version__",
    "BorrowerSnapshot",
    "QualificationMetrics",
    "ScenarioAdjustments",
    "compute_metrics",
    "income_breakdown",
    "snapshot_from_record",
]

try:
    __version__ = metadata.version("clearpath-qualifier")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"
