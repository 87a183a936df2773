"""
Engine Package

Core traverse computation modules.

The survey pipeline lives in ``engine.survey_processor`` and is imported
from there directly; it depends on the parsers, which depend on this
package's errors.
"""
from .errors import (
    TraverseError,
    MalformedRecordError,
    InvalidDirectionError,
    GeodesicComputationFailedError,
    TraverseDoesNotCloseError,
    ParcelDiscoveryError
)

from .geodesic_walker import (
    get_geodesic,
    destination,
    walk_traverse
)

from .closure import (
    ClosureReport,
    check_closure,
    close_traverse
)

__all__ = [
    # Errors
    'TraverseError',
    'MalformedRecordError',
    'InvalidDirectionError',
    'GeodesicComputationFailedError',
    'TraverseDoesNotCloseError',
    'ParcelDiscoveryError',

    # Geodesic walker
    'get_geodesic',
    'destination',
    'walk_traverse',

    # Closure
    'ClosureReport',
    'check_closure',
    'close_traverse',
]
