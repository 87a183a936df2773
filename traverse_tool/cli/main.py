"""
Traverse Tool - Main Entry Point

Command-line interface for turning survey traverses into KML/GeoJSON.
"""
import argparse
import logging
import sys
from typing import List, Optional

from ..config.models import NamedPoint, Survey
from ..config.settings import get_settings, feet_to_meters
from ..engine import TraverseError, destination
from ..engine.survey_processor import process_parcel, process_survey
from ..exporters import export_survey_kml
from ..gis.geojson_export import export_survey_to_geojson
from ..parsers.record_parser import discover_parcels


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_survey(args) -> Optional[Survey]:
    """
    Process every parcel in the data directory.

    Returns:
        Survey, or None if any parcel failed (the error is logged)
    """
    try:
        return process_survey(args.data_dir, count=args.parcels, tolerance=args.tolerance)
    except TraverseError as e:
        logger.error(f"{e}")
        return None


def print_summary(survey: Survey):
    """Print summary of processed parcels."""
    decimals = get_settings().decimal_places
    df = survey.traverses_to_dataframe()

    print("\n" + "=" * 80)
    print("SURVEY SUMMARY")
    print("=" * 80)
    if df.empty:
        print("No parcels")
    else:
        print(df.to_string(index=False, float_format=lambda v: f"{v:.3e}"))
    print("-" * 80)
    print(f"Total parcels: {survey.num_parcels}")

    for traverse in survey.traverses:
        start = traverse.start
        print(
            f"  {traverse.name}: start {start.label} "
            f"({start.latitude:.{decimals}f}, {start.longitude:.{decimals}f}), "
            f"{traverse.num_points} points"
        )


def add_data_dir_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        '-d', '--data-dir', required=True,
        help='Directory containing the start and bearing/distance files for each parcel'
    )
    parser.add_argument(
        '-n', '--parcels', type=int, default=None,
        help='Require exactly parcels 1..N (default: every parcel found)'
    )
    parser.add_argument(
        '-t', '--tolerance', type=float, default=None,
        help='Closure tolerance in degrees, per axis (default: 1e-6)'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='traverse-cli',
        description="Survey traverse to KML/GeoJSON tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write survey_outline.kml and parcelN_survey_points.kml
  traverse-cli kml --data-dir ./data -o ./output

  # Check that every parcel closes
  traverse-cli validate --data-dir ./data

  # One geodesic destination (lat lon azimuth meters)
  traverse-cli destination 39.603480 -84.151764 269.3291666667 142.5
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # KML command
    kml_parser = subparsers.add_parser('kml', help='Write KML outline and point files')
    add_data_dir_args(kml_parser)
    kml_parser.add_argument('-o', '--output', default='.', help='Output folder')

    # GeoJSON export command
    geojson_parser = subparsers.add_parser('geojson', help='Export to GeoJSON for GIS')
    add_data_dir_args(geojson_parser)
    geojson_parser.add_argument('-o', '--output', default='.', help='Output folder')
    geojson_parser.add_argument('-p', '--project', default='survey', help='Project name')

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Check that every parcel closes')
    add_data_dir_args(validate_parser)

    # Info command
    info_parser = subparsers.add_parser('info', help='Show the boundary points of one parcel')
    add_data_dir_args(info_parser)
    info_parser.add_argument('--parcel', type=int, required=True, help='Parcel number')

    # Destination command
    dest_parser = subparsers.add_parser('destination', help='Compute one geodesic destination')
    dest_parser.add_argument('lat', type=float, help='Start latitude (degrees)')
    dest_parser.add_argument('lon', type=float, help='Start longitude (degrees)')
    dest_parser.add_argument('azimuth', type=float, help='Azimuth (degrees from north)')
    dest_parser.add_argument('distance', type=float, help='Distance (meters)')
    dest_parser.add_argument('--feet', action='store_true', help='Distance is given in feet')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == 'kml':
        survey = load_survey(args)
        if survey is None:
            return 1

        output_files = export_survey_kml(survey, args.output)

        print(f"\nExported KML files:")
        for key, path in output_files.items():
            print(f"  {key}: {path}")
        return 0

    elif args.command == 'geojson':
        survey = load_survey(args)
        if survey is None:
            return 1

        output_files = export_survey_to_geojson(survey, args.output, args.project)

        print(f"\nExported GeoJSON files:")
        for key, path in output_files.items():
            print(f"  {key}: {path}")
        return 0

    elif args.command == 'validate':
        survey = load_survey(args)
        if survey is None:
            return 1
        print_summary(survey)
        return 0

    elif args.command == 'info':
        try:
            parcels = [p for p in discover_parcels(args.data_dir, args.parcels)
                       if p.parcel_number == args.parcel]
            if not parcels:
                logger.error(f"Parcel {args.parcel} not found in {args.data_dir}")
                return 1
            traverse = process_parcel(parcels[0], args.tolerance)
        except TraverseError as e:
            logger.error(f"{e}")
            return 1

        decimals = get_settings().decimal_places
        print(f"\n{traverse.name}")
        print(f"Boundary points: {traverse.num_points}")
        print(f"Misclosure: dLat = {traverse.misclosure_lat:.3e}°, dLon = {traverse.misclosure_lon:.3e}°\n")
        print(traverse.to_dataframe().to_string(index=False, float_format=lambda v: f"{v:.{decimals}f}"))
        return 0

    elif args.command == 'destination':
        distance = feet_to_meters(args.distance) if args.feet else args.distance
        start = NamedPoint(args.lat, args.lon, 'start')
        try:
            dest, arrival = destination(start, args.azimuth, distance, 'destination')
        except TraverseError as e:
            logger.error(f"{e}")
            return 1

        print(f"Destination lat={dest.latitude}, lon={dest.longitude}")
        print(f"Arrival azimuth={arrival}")
        return 0

    return 0


if __name__ == '__main__':
    sys.exit(main())
