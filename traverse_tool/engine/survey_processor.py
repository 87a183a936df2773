"""
Survey Processor Module

Runs the full pipeline for each parcel: read records, walk the
traverse, validate closure.
"""
from pathlib import Path
from typing import Iterable, Optional, Union
import logging

from .closure import close_traverse
from .errors import TraverseError
from .geodesic_walker import walk_traverse
from ..config.models import Leg, NamedPoint, ParcelFiles, Survey, Traverse
from ..parsers.record_parser import discover_parcels, read_legs, read_start_point


logger = logging.getLogger(__name__)


def build_traverse(
    start: NamedPoint,
    legs: Iterable[Leg],
    name: Optional[str] = None,
    parcel_number: Optional[int] = None,
    tolerance: Optional[float] = None
) -> Traverse:
    """Walk the legs from the start point and close the result."""
    traverse = walk_traverse(start, legs, name=name, parcel_number=parcel_number)
    return close_traverse(traverse, tolerance)


def process_parcel(parcel: ParcelFiles, tolerance: Optional[float] = None) -> Traverse:
    """
    Build the closed boundary of one parcel from its file pair.

    Raises:
        TraverseError: first failure, tagged with the parcel number
    """
    n = parcel.parcel_number
    try:
        start = read_start_point(parcel.start_path)
        legs = read_legs(parcel.bearing_path)
        try:
            traverse = build_traverse(start, legs, f"Parcel {n}", n, tolerance)
        except TraverseError as e:
            raise e.add_context(source=str(parcel.bearing_path))
    except TraverseError as e:
        raise e.add_context(parcel=n)

    logger.info(f"Parcel {n}: {traverse.num_points} boundary points from {len(legs)} calls")
    return traverse


def process_survey(
    data_dir: Union[str, Path],
    count: Optional[int] = None,
    tolerance: Optional[float] = None,
    name: str = "Survey Outline"
) -> Survey:
    """
    Process every parcel in a data directory.

    The first failing parcel aborts the run.
    """
    return process_parcels(discover_parcels(data_dir, count), tolerance, name)


def process_parcels(
    parcels: Iterable[ParcelFiles],
    tolerance: Optional[float] = None,
    name: str = "Survey Outline"
) -> Survey:
    """Process parcel file pairs in order."""
    survey = Survey(name=name)
    for parcel in parcels:
        survey.add_traverse(process_parcel(parcel, tolerance))
    return survey
