"""
Data Models for Survey Traverses

Core data structures used throughout the traverse tool.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple
import pandas as pd


class FaceDirection(Enum):
    """Quadrant face of a surveyor's bearing (the meridian it is measured from)."""
    NORTH = "N"
    SOUTH = "S"


class TurnDirection(Enum):
    """Side of the meridian a bearing turns toward."""
    EAST = "E"
    WEST = "W"


@dataclass(frozen=True)
class NamedPoint:
    """Geographic coordinate in decimal degrees with a label."""
    latitude: float
    longitude: float
    label: str

    @property
    def x(self) -> float:
        return self.longitude

    @property
    def y(self) -> float:
        return self.latitude

    def lon_lat(self) -> Tuple[float, float]:
        """Coordinate in longitude-then-latitude order."""
        return self.longitude, self.latitude


class Leg(NamedTuple):
    """One resolved traverse call."""
    azimuth: float      # degrees, [0, 360)
    distance_m: float
    label: str


@dataclass
class BearingRecord:
    """Single bearing/distance call as written on a survey."""
    face: FaceDirection
    degrees: float
    minutes: float
    seconds: float
    turn: TurnDirection
    distance_ft: float
    label: str
    line_number: Optional[int] = None

    @property
    def angle(self) -> float:
        """Bearing angle in decimal degrees."""
        return self.degrees + self.minutes / 60.0 + self.seconds / 3600.0

    def azimuth(self) -> float:
        """Navigational azimuth in degrees."""
        from ..parsers.bearing import bearing_to_azimuth
        return bearing_to_azimuth(self.face, self.degrees, self.minutes, self.seconds, self.turn)

    def distance_m(self) -> float:
        """Distance converted from feet to meters."""
        from .settings import feet_to_meters
        return feet_to_meters(self.distance_ft)

    def to_leg(self) -> Leg:
        return Leg(self.azimuth(), self.distance_m(), self.label)

    def __str__(self) -> str:
        return (
            f"{self.face.value} {self.degrees:g}° {self.minutes:g}′ {self.seconds:g}″ "
            f"{self.turn.value}, {self.distance_ft:g} ft, {self.label}"
        )


@dataclass
class Traverse:
    """
    Boundary of one parcel as an ordered sequence of points.

    While walking, the sequence runs from the starting point to the last
    leg's destination. Once closed, the redundant final point has been
    dropped and the polygon's closing edge runs from the last point back
    to the first.
    """
    name: str
    parcel_number: Optional[int] = None
    points: List[NamedPoint] = field(default_factory=list)
    closed: bool = False

    # Filled in by closure validation
    misclosure_lat: Optional[float] = None
    misclosure_lon: Optional[float] = None

    @property
    def num_points(self) -> int:
        return len(self.points)

    @property
    def start(self) -> NamedPoint:
        return self.points[0]

    def append(self, point: NamedPoint):
        """Add the next walked point."""
        if self.closed:
            raise RuntimeError(f"Traverse '{self.name}' is closed and cannot be extended")
        self.points.append(point)

    def polygon_coordinates(self) -> List[Tuple[float, float]]:
        """(lon, lat) pairs, one per boundary point."""
        return [p.lon_lat() for p in self.points]

    def marker_coordinates(self) -> List[Tuple[float, float, str]]:
        """(lon, lat, label) triples, one per boundary point."""
        return [(p.longitude, p.latitude, p.label) for p in self.points]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert boundary points to a pandas DataFrame."""
        data = []
        for index, point in enumerate(self.points):
            data.append({
                'Index': index,
                'Label': point.label,
                'Latitude': point.latitude,
                'Longitude': point.longitude,
            })
        return pd.DataFrame(data, columns=['Index', 'Label', 'Latitude', 'Longitude'])


@dataclass
class Survey:
    """All parcels processed in one run."""
    name: str
    traverses: List[Traverse] = field(default_factory=list)

    def add_traverse(self, traverse: Traverse):
        """Add a finished parcel traverse to the survey."""
        self.traverses.append(traverse)

    @property
    def num_parcels(self) -> int:
        return len(self.traverses)

    def traverses_to_dataframe(self) -> pd.DataFrame:
        """Convert all traverses to a summary DataFrame."""
        data = []
        for traverse in self.traverses:
            data.append({
                'Parcel': traverse.parcel_number,
                'Name': traverse.name,
                'Start': traverse.start.label if traverse.points else None,
                'NumPoints': traverse.num_points,
                'Closed': traverse.closed,
                'MisclosureLat': traverse.misclosure_lat,
                'MisclosureLon': traverse.misclosure_lon,
            })
        return pd.DataFrame(data)


@dataclass
class ParcelFiles:
    """Input file pair for one parcel."""
    parcel_number: int
    start_path: Path
    bearing_path: Path
