"""
GIS Export Module

Export survey traverses to GeoJSON for visualization in QGIS and other
GIS software.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Union

from ..config.models import NamedPoint, Survey, Traverse
from ..config.settings import get_settings


def point_feature(point: NamedPoint, parcel_number: int = None, index: int = None) -> Dict:
    """Convert a boundary point to a GeoJSON Point Feature."""
    return {
        'type': 'Feature',
        'geometry': {
            'type': 'Point',
            'coordinates': [point.longitude, point.latitude]
        },
        'properties': {
            'label': point.label,
            'parcel': parcel_number,
            'index': index
        }
    }


def polygon_feature(traverse: Traverse) -> Dict:
    """
    Convert a closed traverse to a GeoJSON Polygon Feature.

    GeoJSON rings repeat their first position, so the closing point
    dropped during validation is put back here.
    """
    ring = [[lon, lat] for lon, lat in traverse.polygon_coordinates()]
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))

    return {
        'type': 'Feature',
        'geometry': {
            'type': 'Polygon',
            'coordinates': [ring]
        },
        'properties': {
            'name': traverse.name,
            'parcel': traverse.parcel_number,
            'num_points': traverse.num_points,
            'start_point': traverse.start.label if traverse.points else None,
            'misclosure_lat': traverse.misclosure_lat,
            'misclosure_lon': traverse.misclosure_lon
        }
    }


class GeoJSONExporter:
    """Export survey traverses to GeoJSON format."""

    def __init__(self, include_points: bool = True):
        self.include_points = include_points
        self.encoding = get_settings().encoding.output_encoding

    def build(self, traverses: List[Traverse], name: str = 'Survey Outline') -> Dict:
        """
        Build a FeatureCollection with a polygon per parcel and,
        optionally, a point per boundary corner.
        """
        features = [polygon_feature(t) for t in traverses]

        num_points = 0
        if self.include_points:
            for traverse in traverses:
                for index, point in enumerate(traverse.points):
                    features.append(point_feature(point, traverse.parcel_number, index))
                    num_points += 1

        return {
            'type': 'FeatureCollection',
            'name': name,
            'crs': {
                'type': 'name',
                'properties': {
                    'name': 'urn:ogc:def:crs:OGC:1.3:CRS84'  # WGS84, lon/lat order
                }
            },
            'features': features,
            'metadata': {
                'created': datetime.now().isoformat(),
                'num_parcels': len(traverses),
                'num_points': num_points,
                'generator': 'Traverse Tool'
            }
        }

    def export(self, traverses: List[Traverse], output_path: Union[str, Path],
               name: str = 'Survey Outline') -> Dict:
        """
        Export traverses to a GeoJSON file.

        Returns:
            GeoJSON FeatureCollection dict
        """
        geojson = self.build(traverses, name)

        with open(output_path, 'w', encoding=self.encoding) as f:
            json.dump(geojson, f, indent=2, ensure_ascii=False)

        return geojson


def export_survey_to_geojson(survey: Survey,
                             output_folder: Union[str, Path],
                             project_name: str = "survey") -> Dict[str, str]:
    """
    Convenience function to export a complete survey to a GeoJSON file.

    Args:
        survey: Survey of closed traverses
        output_folder: Output folder path
        project_name: Base name for output files

    Returns:
        Dictionary of output file paths
    """
    output_path = Path(output_folder)
    output_path.mkdir(parents=True, exist_ok=True)

    survey_file = output_path / f"{project_name}.geojson"
    GeoJSONExporter().export(survey.traverses, survey_file, survey.name)

    return {'survey_geojson': str(survey_file)}
