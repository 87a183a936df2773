"""
Bearing Parser Module

Converts surveyor quadrant bearings (e.g. ``S 78°03'13" E``) into
navigational azimuths.
"""
from typing import Union

from ..config.models import FaceDirection, TurnDirection
from ..engine.errors import InvalidDirectionError


FACE_TOKENS = tuple(d.value for d in FaceDirection)
TURN_TOKENS = tuple(d.value for d in TurnDirection)


def parse_face(token: Union[str, FaceDirection]) -> FaceDirection:
    """Parse a face token ("N" or "S"), case-sensitive."""
    if isinstance(token, FaceDirection):
        return token
    try:
        return FaceDirection(token)
    except ValueError:
        raise InvalidDirectionError('face', token, FACE_TOKENS) from None


def parse_turn(token: Union[str, TurnDirection]) -> TurnDirection:
    """Parse a turn token ("E" or "W"), case-sensitive."""
    if isinstance(token, TurnDirection):
        return token
    try:
        return TurnDirection(token)
    except ValueError:
        raise InvalidDirectionError('turn', token, TURN_TOKENS) from None


def dms_to_decimal(degrees: float, minutes: float, seconds: float) -> float:
    """Combine degrees, minutes and seconds into decimal degrees."""
    return degrees + minutes / 60.0 + seconds / 3600.0


def bearing_to_azimuth(
    face: Union[str, FaceDirection],
    degrees: float,
    minutes: float,
    seconds: float,
    turn: Union[str, TurnDirection]
) -> float:
    """
    Convert a quadrant bearing to an azimuth.

    N a E = a, N a W = -a, S a E = 180 - a, S a W = 180 + a,
    with negative results wrapped by +360.

    Args:
        face: Meridian the angle is measured from ("N"/"S")
        degrees: Whole degrees of the bearing angle
        minutes: Minutes of arc
        seconds: Seconds of arc
        turn: Direction the angle turns toward ("E"/"W")

    Returns:
        Azimuth in degrees, clockwise from north, in [0, 360)

    Raises:
        InvalidDirectionError: face or turn token is not recognized
    """
    face = parse_face(face)
    turn = parse_turn(turn)
    angle = dms_to_decimal(degrees, minutes, seconds)

    if face is FaceDirection.NORTH:
        azimuth = angle if turn is TurnDirection.EAST else -angle
    else:
        azimuth = 180.0 - angle if turn is TurnDirection.EAST else 180.0 + angle

    if azimuth < 0.0:
        azimuth += 360.0
    # -tiny + 360 rounds to exactly 360.0
    if azimuth >= 360.0:
        azimuth -= 360.0

    return azimuth
