"""
Traverse Tool
=============
A Python package for turning land-survey traverses into map overlays.

Reads a point of beginning and a list of surveyor's bearing/distance
calls per parcel, walks the calls as geodesics on the WGS84 ellipsoid,
checks that each boundary closes, and writes the result as KML or
GeoJSON.

Features:
- Quadrant bearing to azimuth conversion
- Parcel record file parsing
- Geodesic traverse walk (geographiclib)
- Closure validation
- KML survey outline and survey point documents
- GeoJSON export for QGIS integration
"""

__version__ = "1.0.0"
__author__ = "Traverse Tools"

from .config.models import NamedPoint, Traverse, Survey
from .config.settings import Settings
