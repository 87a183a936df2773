"""
Traverse Tool Configuration Settings
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TraverseConfig:
    """Traverse computation configuration."""
    # Closure tolerance, applied to latitude and longitude separately (degrees)
    closure_tolerance_deg: float = 1e-6

    # Feet (international) to meters
    feet_to_meters: float = 0.3048

    # Reference ellipsoid used for the geodesic walk
    ellipsoid: str = 'WGS84'


@dataclass
class ParcelConfig:
    """Parcel data file naming configuration."""
    start_pattern: str = 'parcel{n}_start_lat_lon.txt'
    bearing_pattern: str = 'parcel{n}_bearing_distance.txt'

    # None = process every parcel found in the data directory
    count: Optional[int] = None


@dataclass
class EncodingConfig:
    """File encoding configuration."""
    default_encoding: str = 'utf-8'
    fallback_encodings: List[str] = field(default_factory=lambda: ['utf-8-sig', 'latin-1'])
    output_encoding: str = 'utf-8'


@dataclass
class KMLConfig:
    """KML document configuration."""
    style_id: str = 'icon-1739-0288D1-nodesc'
    icon_color: str = 'ffd18802'   # KML colors are aabbggrr
    line_color: str = 'ff0000ff'
    line_width: int = 3
    fill_color: str = '200000ff'
    icon_href: str = 'https://www.gstatic.com/mapspro/images/stock/503-wht-blank_maps.png'
    outline_filename: str = 'survey_outline.kml'
    points_pattern: str = 'parcel{n}_survey_points.kml'


@dataclass
class Settings:
    """Main settings container."""
    traverse: TraverseConfig = field(default_factory=TraverseConfig)
    parcels: ParcelConfig = field(default_factory=ParcelConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)
    kml: KMLConfig = field(default_factory=KMLConfig)

    # Console output formatting
    decimal_places: int = 8


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings


def feet_to_meters(distance_ft: float) -> float:
    """Convert a distance in feet (international foot) to meters."""
    return distance_ft * settings.traverse.feet_to_meters
