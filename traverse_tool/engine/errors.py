"""
Traverse Errors Module

Error classes for traverse parsing and computation.

Every error can carry the parcel, source file and line number it came
from. Context is attached as the error propagates outward, so the caller
can report exactly which parcel and which input line failed.
"""
from typing import Optional, Sequence


class TraverseError(Exception):
    """Base class for all traverse processing errors."""

    def __init__(self, message: str, parcel: Optional[int] = None,
                 source: Optional[str] = None, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.parcel = parcel
        self.source = source
        self.line_number = line_number

    def add_context(self, parcel: Optional[int] = None, source: Optional[str] = None,
                    line_number: Optional[int] = None) -> 'TraverseError':
        """
        Fill in context fields that are still unset.

        Returns the error itself so callers can ``raise err.add_context(...)``.
        Inner context wins over outer context.
        """
        if self.parcel is None:
            self.parcel = parcel
        if self.source is None and source is not None:
            self.source = str(source)
        if self.line_number is None:
            self.line_number = line_number
        return self

    @property
    def context(self) -> str:
        parts = []
        if self.parcel is not None:
            parts.append(f"parcel {self.parcel}")
        if self.source is not None:
            location = self.source
            if self.line_number is not None:
                location += f":{self.line_number}"
            parts.append(location)
        elif self.line_number is not None:
            parts.append(f"line {self.line_number}")
        return ", ".join(parts)

    def __str__(self) -> str:
        context = self.context
        return f"{context}: {self.message}" if context else self.message


class MalformedRecordError(TraverseError):
    """
    Error raised when an input record cannot be parsed.

    Covers a wrong field count, a non-numeric or out-of-range numeric
    field, and (through InvalidDirectionError) a bad face or turn token.
    """

    def __init__(self, message: str, field: Optional[str] = None,
                 raw: Optional[str] = None, **context):
        super().__init__(message, **context)
        self.field = field
        self.raw = raw


class InvalidDirectionError(MalformedRecordError):
    """Error raised when a face or turn token is not one of the accepted letters."""

    def __init__(self, axis: str, token: str, accepted: Sequence[str], **context):
        message = (
            f"invalid {axis} direction '{token}' "
            f"(expected one of {', '.join(accepted)})"
        )
        super().__init__(message, field=axis, raw=token, **context)
        self.axis = axis
        self.token = token


class GeodesicComputationFailedError(TraverseError):
    """Error raised when the geodesic direct problem yields no usable destination."""

    def __init__(self, leg_index: int, message: str, **context):
        super().__init__(f"leg {leg_index}: {message}", **context)
        self.leg_index = leg_index


class TraverseDoesNotCloseError(TraverseError):
    """
    Error raised when the last walked point does not coincide with the first.

    ``axes`` names every axis whose absolute difference reached the
    tolerance (``'latitude'``, ``'longitude'``).
    """

    def __init__(self, delta_lat: float, delta_lon: float, axes: Sequence[str],
                 tolerance: float, **context):
        message = (
            f"traverse does not close on {' and '.join(axes)}: "
            f"dLat = {delta_lat:.3e}°, dLon = {delta_lon:.3e}° "
            f"(tolerance {tolerance:g}°)"
        )
        super().__init__(message, **context)
        self.delta_lat = delta_lat
        self.delta_lon = delta_lon
        self.axes = tuple(axes)
        self.tolerance = tolerance


class ParcelDiscoveryError(TraverseError):
    """Error raised when the data directory does not hold the expected parcel files."""
    pass
