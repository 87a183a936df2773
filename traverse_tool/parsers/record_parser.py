"""
Survey Record Parser

Parses the two plain-text files that describe a parcel.

File Formats:
    parcelN_start_lat_lon.txt (one line):
        <latitude> <longitude> <label>
        39.603480 -84.151764 Iron Pin Found

    parcelN_bearing_distance.txt (one call per line):
        <face> <deg> <min> <sec> <turn> <distance_ft> <label>
        S 78 03 13 E 171.48 Corner 18

The label is always the rest of the line and may contain spaces.
"""
from pathlib import Path
from typing import List, Optional, Union
import logging
import re

from .base_parser import BaseParser, split_fields, parse_number, check_range, require_fields
from .bearing import parse_face, parse_turn
from ..config.models import BearingRecord, Leg, NamedPoint, ParcelFiles
from ..config.settings import get_settings
from ..engine.errors import MalformedRecordError, ParcelDiscoveryError, TraverseError


logger = logging.getLogger(__name__)

START_FIELDS = ('latitude', 'longitude', 'label')
BEARING_FIELDS = ('face', 'degrees', 'minutes', 'seconds', 'turn', 'distance', 'label')


def parse_start_point(text: str) -> NamedPoint:
    """
    Parse a starting-point record.

    Args:
        text: Raw record text, ``<lat> <lon> <label>``

    Returns:
        NamedPoint for the point of beginning
    """
    parts = split_fields(text, len(START_FIELDS))
    require_fields(parts, START_FIELDS, 'starting point record')
    lat_raw, lon_raw, label = parts

    lat = parse_number(lat_raw, 'latitude')
    check_range(lat, 'latitude', lat_raw, -90.0, 90.0)
    lon = parse_number(lon_raw, 'longitude')
    check_range(lon, 'longitude', lon_raw, -180.0, 180.0)

    return NamedPoint(latitude=lat, longitude=lon, label=label)


def parse_bearing_line(line: str, line_number: Optional[int] = None) -> BearingRecord:
    """
    Parse a single bearing/distance call.

    Args:
        line: Raw line, e.g. ``S 78 03 13 E 171.48 Corner 18``
        line_number: 1-based line number for error context

    Returns:
        BearingRecord with typed fields

    Raises:
        MalformedRecordError: wrong field count, bad number or bad direction
    """
    try:
        parts = split_fields(line, len(BEARING_FIELDS))
        require_fields(parts, BEARING_FIELDS, 'bearing/distance record')
        face_raw, deg_raw, min_raw, sec_raw, turn_raw, dist_raw, label = parts

        face = parse_face(face_raw)
        degrees = parse_number(deg_raw, 'degrees')
        check_range(degrees, 'degrees', deg_raw, 0.0, 90.0)
        minutes = parse_number(min_raw, 'minutes')
        check_range(minutes, 'minutes', min_raw, 0.0, 60.0, high_inclusive=False)
        seconds = parse_number(sec_raw, 'seconds')
        check_range(seconds, 'seconds', sec_raw, 0.0, 60.0)
        turn = parse_turn(turn_raw)
        distance_ft = parse_number(dist_raw, 'distance')
        if distance_ft <= 0.0:
            raise MalformedRecordError(
                f"distance must be positive, got '{dist_raw}'", field='distance', raw=dist_raw
            )
    except TraverseError as e:
        raise e.add_context(line_number=line_number)

    return BearingRecord(
        face=face,
        degrees=degrees,
        minutes=minutes,
        seconds=seconds,
        turn=turn,
        distance_ft=distance_ft,
        label=label,
        line_number=line_number,
    )


class StartPointParser(BaseParser):
    """Parser for starting-point files."""

    def parse_text(self, text: str) -> NamedPoint:
        point = parse_start_point(text)
        logger.debug(
            f"Starting point named {point.label} at ({point.latitude}, {point.longitude})"
        )
        return point


class BearingDistanceParser(BaseParser):
    """Parser for bearing/distance files."""

    def parse_records(self, text: str) -> List[BearingRecord]:
        """
        Parse every call in a bearing/distance file.

        Blank lines are skipped; line numbers still refer to the physical
        lines of the file.
        """
        records = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                logger.debug(f"Skipping blank line {line_number}")
                continue
            record = parse_bearing_line(line, line_number)
            logger.debug(f"{record}")
            records.append(record)

        if not records:
            raise MalformedRecordError("no bearing/distance records found")
        return records

    def parse_text(self, text: str) -> List[Leg]:
        """
        Parse a bearing/distance file into legs.

        Returns:
            List of Leg(azimuth, distance_m, label)
        """
        legs = []
        for record in self.parse_records(text):
            leg = record.to_leg()
            logger.debug(f"\taz = {leg.azimuth}°, dist = {leg.distance_m} m")
            legs.append(leg)
        return legs


def read_start_point(filepath: Union[str, Path]) -> NamedPoint:
    """Read a starting-point file."""
    return StartPointParser().parse(filepath)


def read_legs(filepath: Union[str, Path]) -> List[Leg]:
    """Read a bearing/distance file into legs."""
    return BearingDistanceParser().parse(filepath)


def discover_parcels(data_dir: Union[str, Path], count: Optional[int] = None) -> List[ParcelFiles]:
    """
    Locate the input file pair for each parcel in a data directory.

    Args:
        data_dir: Directory holding the parcel files
        count: If given, require exactly parcels 1..count. Otherwise every
            parcel number with a start file is used, in ascending order.

    Returns:
        List of ParcelFiles

    Raises:
        ParcelDiscoveryError: directory missing, no parcels, or a file of a pair missing
    """
    config = get_settings().parcels
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise ParcelDiscoveryError(f"specified data directory '{data_dir}' does not exist")

    if count is None:
        count = config.count

    if count is not None:
        if count < 1:
            raise ParcelDiscoveryError(f"parcel count must be at least 1, got {count}")
        numbers = list(range(1, count + 1))
    else:
        start_re = re.compile(
            '^' + re.escape(config.start_pattern).replace(re.escape('{n}'), r'(\d+)') + '$'
        )
        numbers = sorted(
            int(m.group(1))
            for m in (start_re.match(p.name) for p in data_dir.iterdir())
            if m
        )
        if not numbers:
            raise ParcelDiscoveryError(
                f"no parcel start files matching '{config.start_pattern}' in '{data_dir}'"
            )

    parcels = []
    for n in numbers:
        start_path = data_dir / config.start_pattern.format(n=n)
        bearing_path = data_dir / config.bearing_pattern.format(n=n)
        for path in (start_path, bearing_path):
            if not path.is_file():
                raise ParcelDiscoveryError(f"missing file '{path}'", parcel=n)
        parcels.append(ParcelFiles(n, start_path, bearing_path))

    logger.info(f"Found {len(parcels)} parcel(s) in {data_dir}")
    return parcels
