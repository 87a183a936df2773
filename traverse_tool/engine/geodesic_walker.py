"""
Geodesic Walker Module

Walks a traverse over the ellipsoid: each leg starts where the previous
one ended and follows a geodesic for the given azimuth and distance.
"""
from typing import Iterable, Optional, Tuple
import logging
import math

from geographiclib.geodesic import Geodesic

from .errors import GeodesicComputationFailedError
from ..config.models import Leg, NamedPoint, Traverse
from ..config.settings import get_settings


logger = logging.getLogger(__name__)


def get_geodesic(ellipsoid: Optional[str] = None) -> Geodesic:
    """Return the geographiclib Geodesic for a named ellipsoid."""
    name = ellipsoid or get_settings().traverse.ellipsoid
    geod = getattr(Geodesic, name, None)
    if not isinstance(geod, Geodesic):
        raise ValueError(f"Unknown ellipsoid '{name}'")
    return geod


def destination(
    point: NamedPoint,
    azimuth: float,
    distance_m: float,
    label: str,
    leg_index: int = 0,
    geod: Optional[Geodesic] = None
) -> Tuple[NamedPoint, float]:
    """
    Solve the direct geodesic problem for one leg.

    Args:
        point: Point the leg starts from
        azimuth: Departure azimuth in degrees, clockwise from north
        distance_m: Leg length in meters
        label: Label for the destination point
        leg_index: Index of the leg, for error reporting
        geod: Geodesic to use (defaults to the configured ellipsoid)

    Returns:
        Tuple of (destination point, arrival azimuth in degrees)

    Raises:
        GeodesicComputationFailedError: non-finite input or no finite solution
    """
    geod = geod or get_geodesic()
    inputs = (point.latitude, point.longitude, azimuth, distance_m)
    if not all(math.isfinite(v) for v in inputs):
        raise GeodesicComputationFailedError(
            leg_index, f"non-finite input (lat, lon, az, dist) = {inputs}"
        )

    try:
        r = geod.Direct(point.latitude, point.longitude, azimuth, distance_m)
    except (ValueError, ArithmeticError) as e:
        raise GeodesicComputationFailedError(leg_index, str(e)) from e

    lat2, lon2, azi2 = r['lat2'], r['lon2'], r['azi2']
    if not all(math.isfinite(v) for v in (lat2, lon2, azi2)):
        raise GeodesicComputationFailedError(
            leg_index, f"no finite destination from ({point.latitude}, {point.longitude})"
        )

    return NamedPoint(latitude=lat2, longitude=lon2, label=label), azi2


def walk_traverse(
    start: NamedPoint,
    legs: Iterable[Leg],
    name: Optional[str] = None,
    parcel_number: Optional[int] = None
) -> Traverse:
    """
    Walk every leg from the starting point in order.

    The result holds the starting point plus one point per leg; the
    closing point is still present (see closure.close_traverse).

    Args:
        start: Point of beginning
        legs: Ordered (azimuth, distance_m, label) legs
        name: Traverse name (defaults to the start label)
        parcel_number: Parcel number, if any

    Returns:
        Open Traverse
    """
    geod = get_geodesic()
    traverse = Traverse(name=name or start.label, parcel_number=parcel_number, points=[start])

    for index, (azimuth, distance_m, label) in enumerate(legs):
        current = traverse.points[-1]
        point, _ = destination(current, azimuth, distance_m, label, leg_index=index, geod=geod)
        traverse.append(point)
        logger.debug(
            f"leg {index}: az {azimuth:.6f}°, {distance_m:.3f} m -> "
            f"{point.label} ({point.latitude:.8f}, {point.longitude:.8f})"
        )

    return traverse
