"""
GIS Package

GIS export tools.
"""
from .geojson_export import (
    GeoJSONExporter,
    export_survey_to_geojson,
    point_feature,
    polygon_feature
)

__all__ = [
    'GeoJSONExporter',
    'export_survey_to_geojson',
    'point_feature',
    'polygon_feature'
]
