"""
Exporters Package

KML output for survey traverses.

Two kinds of document are produced:
    survey_outline.kml          One Polygon placemark per parcel
    parcelN_survey_points.kml   One Point placemark per boundary point

Coordinates are written longitude first, as KML requires.
"""
from pathlib import Path
from typing import Dict, List, TextIO, Union
from xml.sax.saxutils import escape
import logging

from ..config.models import Survey, Traverse
from ..config.settings import get_settings


logger = logging.getLogger(__name__)

KML_NAMESPACES = (
    'xmlns="http://www.opengis.net/kml/2.2" '
    'xmlns:gx="http://www.google.com/kml/ext/2.2" '
    'xmlns:kml="http://www.opengis.net/kml/2.2" '
    'xmlns:atom="http://www.w3.org/2005/Atom"'
)


class KMLExporter:
    """
    Export traverses to KML documents.

    Both document kinds share one style map: a blank map pin for points,
    a red outline and translucent red fill for polygons.
    """

    def __init__(self):
        self.settings = get_settings()
        self.config = self.settings.kml
        self.encoding = self.settings.encoding.output_encoding

    def export_survey_outline(self, filepath: Union[str, Path], traverses: List[Traverse],
                              title: str = "Survey Outline"):
        """
        Write every parcel boundary as a polygon.

        Args:
            filepath: Output file path
            traverses: Closed traverses, one per parcel
            title: Document name
        """
        with open(filepath, 'w', encoding=self.encoding) as f:
            self._write_header(f, title)
            for index, traverse in enumerate(traverses, start=1):
                number = traverse.parcel_number if traverse.parcel_number is not None else index
                self._write_polygon(f, f"Parcel {number}", traverse)
            self._write_footer(f)
        logger.info(f"Wrote {len(traverses)} parcel outline(s) to {filepath}")

    def export_parcel_points(self, filepath: Union[str, Path], traverse: Traverse,
                             title: str = None):
        """
        Write each boundary point of one parcel as a point placemark.

        Args:
            filepath: Output file path
            traverse: Closed traverse
            title: Document name (defaults to "<name> Survey Points")
        """
        title = title or f"{traverse.name} Survey Points"
        with open(filepath, 'w', encoding=self.encoding) as f:
            self._write_header(f, title)
            for lon, lat, label in traverse.marker_coordinates():
                f.write("\t<Placemark>\n")
                f.write(f"\t\t<name>{escape(label)}</name>\n")
                f.write(f"\t\t<styleUrl>#{self.config.style_id}</styleUrl>\n")
                f.write("\t\t<Point>\n")
                f.write("\t\t\t<coordinates>\n")
                f.write(f"\t\t\t\t{lon},{lat}\n")
                f.write("\t\t\t</coordinates>\n")
                f.write("\t\t</Point>\n")
                f.write("\t</Placemark>\n")
            self._write_footer(f)
        logger.info(f"Wrote {traverse.num_points} survey points to {filepath}")

    def _write_polygon(self, f: TextIO, name: str, traverse: Traverse):
        coords = traverse.polygon_coordinates()
        # A LinearRing must repeat its first coordinate
        if coords and coords[0] != coords[-1]:
            coords.append(coords[0])
        ring = "\n\t\t\t\t\t\t".join(f"{lon},{lat}" for lon, lat in coords)

        f.write("\t<Placemark>\n")
        f.write(f"\t\t<name>{escape(name)}</name>\n")
        f.write(f"\t\t<styleUrl>#{self.config.style_id}</styleUrl>\n")
        f.write("\t\t<Polygon>\n")
        f.write("\t\t\t<outerBoundaryIs>\n")
        f.write("\t\t\t\t<LinearRing>\n")
        f.write("\t\t\t\t\t<coordinates>\n")
        f.write(f"\t\t\t\t\t\t{ring}\n")
        f.write("\t\t\t\t\t</coordinates>\n")
        f.write("\t\t\t\t</LinearRing>\n")
        f.write("\t\t\t</outerBoundaryIs>\n")
        f.write("\t\t</Polygon>\n")
        f.write("\t</Placemark>\n")

    def _write_header(self, f: TextIO, title: str):
        f.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        f.write(f'<kml {KML_NAMESPACES}>\n')
        f.write("<Document>\n")
        f.write(f"\t<name>{escape(title)}</name>\n")
        f.write(self._style_block())

    def _write_footer(self, f: TextIO):
        f.write("</Document>\n")
        f.write("</kml>\n")

    def _style_block(self) -> str:
        c = self.config
        styles = [
            f'''\t<StyleMap id="{c.style_id}">
\t\t<Pair>
\t\t\t<key>normal</key>
\t\t\t<styleUrl>#{c.style_id}-normal</styleUrl>
\t\t</Pair>
\t\t<Pair>
\t\t\t<key>highlight</key>
\t\t\t<styleUrl>#{c.style_id}-highlight</styleUrl>
\t\t</Pair>
\t</StyleMap>
''']
        # Labels are hidden until the pin is highlighted
        for variant, label_scale in (('normal', 0), ('highlight', 1)):
            styles.append(f'''\t<Style id="{c.style_id}-{variant}">
\t\t<IconStyle>
\t\t\t<color>{c.icon_color}</color>
\t\t\t<scale>1</scale>
\t\t\t<Icon>
\t\t\t\t<href>{escape(c.icon_href)}</href>
\t\t\t</Icon>
\t\t</IconStyle>
\t\t<LabelStyle>
\t\t\t<scale>{label_scale}</scale>
\t\t</LabelStyle>
\t\t<BalloonStyle>
\t\t\t<text><![CDATA[<h3>$[name]</h3>]]></text>
\t\t</BalloonStyle>
\t\t<LineStyle>
\t\t\t<color>{c.line_color}</color>
\t\t\t<width>{c.line_width}</width>
\t\t</LineStyle>
\t\t<PolyStyle>
\t\t\t<outline>1</outline>
\t\t\t<fill>1</fill>
\t\t\t<color>{c.fill_color}</color>
\t\t</PolyStyle>
\t</Style>
''')
        return "".join(styles)


# Convenience functions
def export_survey_outline_kml(filepath: Union[str, Path], survey: Survey):
    """Export all parcel outlines of a survey to one KML file."""
    KMLExporter().export_survey_outline(filepath, survey.traverses, survey.name)


def export_parcel_points_kml(filepath: Union[str, Path], traverse: Traverse):
    """Export one parcel's boundary points to KML."""
    KMLExporter().export_parcel_points(filepath, traverse)


def export_survey_kml(survey: Survey, output_folder: Union[str, Path]) -> Dict[str, str]:
    """
    Export a complete survey: the outline document plus a points document per parcel.

    Args:
        survey: Survey of closed traverses
        output_folder: Output folder path

    Returns:
        Dictionary of output file paths
    """
    config = get_settings().kml
    output_path = Path(output_folder)
    output_path.mkdir(parents=True, exist_ok=True)

    exporter = KMLExporter()
    output_files = {}

    for index, traverse in enumerate(survey.traverses, start=1):
        number = traverse.parcel_number if traverse.parcel_number is not None else index
        points_file = output_path / config.points_pattern.format(n=number)
        exporter.export_parcel_points(points_file, traverse)
        output_files[f'parcel{number}_points'] = str(points_file)

    outline_file = output_path / config.outline_filename
    exporter.export_survey_outline(outline_file, survey.traverses, survey.name)
    output_files['survey_outline'] = str(outline_file)

    return output_files
