"""
Parsers Package

Parsers for surveyor bearings and parcel record files.
"""
from .base_parser import BaseParser, split_fields
from .bearing import bearing_to_azimuth, parse_face, parse_turn, dms_to_decimal
from .record_parser import (
    StartPointParser,
    BearingDistanceParser,
    parse_start_point,
    parse_bearing_line,
    read_start_point,
    read_legs,
    discover_parcels,
)

__all__ = [
    'BaseParser',
    'split_fields',
    'bearing_to_azimuth',
    'parse_face',
    'parse_turn',
    'dms_to_decimal',
    'StartPointParser',
    'BearingDistanceParser',
    'parse_start_point',
    'parse_bearing_line',
    'read_start_point',
    'read_legs',
    'discover_parcels',
]
