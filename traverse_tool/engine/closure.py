"""
Closure Validator Module

Checks that a walked traverse returns to its point of beginning and drops
the redundant closing point.

The tolerance is applied to the latitude and longitude differences
independently, in degrees. A degree of longitude shrinks with latitude,
so the same tolerance is a tighter physical limit east-west than
north-south away from the equator. The policy is kept as-is for
compatibility with existing survey data; misclosure_m reports the
physical distance alongside it.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import logging

import numpy as np

from .errors import MalformedRecordError, TraverseDoesNotCloseError
from .geodesic_walker import get_geodesic
from ..config.models import Traverse
from ..config.settings import get_settings


logger = logging.getLogger(__name__)


@dataclass
class ClosureReport:
    """Outcome of comparing the last walked point with the first."""
    delta_lat: float
    delta_lon: float
    tolerance: float
    misclosure_m: float
    failed_axes: List[str] = field(default_factory=list)

    @property
    def closes(self) -> bool:
        return not self.failed_axes


def check_closure(traverse: Traverse, tolerance: Optional[float] = None) -> ClosureReport:
    """
    Compare the final point of a walked traverse against its first point.

    Args:
        traverse: Open traverse (start point plus one point per leg)
        tolerance: Per-axis tolerance in degrees (defaults to settings)

    Returns:
        ClosureReport; failed_axes is empty when the traverse closes

    Raises:
        MalformedRecordError: the traverse has no legs
    """
    if tolerance is None:
        tolerance = get_settings().traverse.closure_tolerance_deg
    if traverse.num_points < 2:
        raise MalformedRecordError(f"traverse '{traverse.name}' has no legs to close")

    first = traverse.points[0]
    last = traverse.points[-1]
    deltas = np.subtract(
        [last.latitude, last.longitude],
        [first.latitude, first.longitude]
    )
    failed = np.abs(deltas) >= tolerance

    failed_axes = [axis for axis, bad in zip(('latitude', 'longitude'), failed) if bad]
    inverse = get_geodesic().Inverse(first.latitude, first.longitude, last.latitude, last.longitude)

    return ClosureReport(
        delta_lat=float(deltas[0]),
        delta_lon=float(deltas[1]),
        tolerance=tolerance,
        misclosure_m=float(inverse['s12']),
        failed_axes=failed_axes,
    )


def close_traverse(traverse: Traverse, tolerance: Optional[float] = None) -> Traverse:
    """
    Validate closure and finalize the traverse.

    On success the last point, which duplicates the first, is removed and
    the traverse is marked closed.

    Raises:
        TraverseDoesNotCloseError: either axis differs by tolerance or more
    """
    if traverse.closed:
        raise RuntimeError(f"Traverse '{traverse.name}' is already closed")

    report = check_closure(traverse, tolerance)
    traverse.misclosure_lat = report.delta_lat
    traverse.misclosure_lon = report.delta_lon

    if not report.closes:
        raise TraverseDoesNotCloseError(
            report.delta_lat, report.delta_lon, report.failed_axes, report.tolerance
        )

    traverse.points.pop()
    traverse.closed = True

    logger.debug(
        f"{traverse.name}: closes within {report.misclosure_m:.4f} m, "
        f"{traverse.num_points} boundary points"
    )
    for point in traverse.points:
        logger.debug(f"lat = {point.latitude}, lon = {point.longitude}, name = {point.label}")

    return traverse
