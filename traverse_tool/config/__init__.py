"""
Config Package

Configuration and data models for the traverse tool.
"""
from .settings import (
    get_settings,
    Settings,
    TraverseConfig,
    ParcelConfig,
    EncodingConfig,
    KMLConfig,
    feet_to_meters,
)

from .models import (
    FaceDirection,
    TurnDirection,
    NamedPoint,
    Leg,
    BearingRecord,
    Traverse,
    Survey,
    ParcelFiles,
)

__all__ = [
    # Settings
    'get_settings',
    'Settings',
    'TraverseConfig',
    'ParcelConfig',
    'EncodingConfig',
    'KMLConfig',
    'feet_to_meters',

    # Models
    'FaceDirection',
    'TurnDirection',
    'NamedPoint',
    'Leg',
    'BearingRecord',
    'Traverse',
    'Survey',
    'ParcelFiles',
]
