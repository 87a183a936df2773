"""
Tests for the geodesic walk, closure validation and the survey pipeline.
"""
import math

import pytest

from traverse_tool.config.models import Leg, NamedPoint, Traverse
from traverse_tool.engine import (
    ClosureReport, check_closure, close_traverse, destination, walk_traverse,
    GeodesicComputationFailedError, MalformedRecordError, TraverseDoesNotCloseError,
    TraverseError
)
from traverse_tool.engine.survey_processor import build_traverse, process_survey
from traverse_tool.parsers import parse_bearing_line


# ---------------------------------------------------------------------------
# Geodesic walker
# ---------------------------------------------------------------------------

def test_single_leg_matches_reference(pob):
    pyproj = pytest.importorskip("pyproj")

    leg = parse_bearing_line("S 78 03 13 E 171.48 Corner18").to_leg()
    assert leg.azimuth == pytest.approx(101.946389, abs=1e-6)
    assert leg.distance_m == pytest.approx(52.267104, abs=1e-6)

    traverse = walk_traverse(pob, [leg])
    dest = traverse.points[-1]

    lon2, lat2, _ = pyproj.Geod(ellps="WGS84").fwd(pob.longitude, pob.latitude, leg.azimuth, leg.distance_m)
    assert abs(dest.latitude - lat2) < 1e-6
    assert abs(dest.longitude - lon2) < 1e-6
    assert dest.label == "Corner18"


def test_single_leg_known_destination(pob):
    # WGS84 direct solution for S 78°03'13" E, 171.48 ft from the POB
    leg = parse_bearing_line("S 78 03 13 E 171.48 Corner18").to_leg()
    dest = walk_traverse(pob, [leg]).points[-1]
    assert abs(dest.latitude - 39.6033826) < 1e-6
    assert abs(dest.longitude - -84.1511686) < 1e-6


def test_single_leg_direction(pob):
    # ESE leg: south of and east of the start, about 52 m away
    dest, _ = destination(pob, 101.946389, 52.267104, "Corner18")
    assert dest.latitude < pob.latitude
    assert dest.longitude > pob.longitude
    north_m = (dest.latitude - pob.latitude) * 111_000
    assert north_m == pytest.approx(52.267104 * math.cos(math.radians(101.946389)), rel=0.01)


@pytest.mark.parametrize("azimuth", [0.0, 180.0])
def test_meridian_round_trip(pob, azimuth):
    out, _ = destination(pob, azimuth, 1234.5, "out")
    back, _ = destination(out, (azimuth + 180.0) % 360.0, 1234.5, "back")
    assert abs(back.latitude - pob.latitude) < 1e-9
    assert abs(back.longitude - pob.longitude) < 1e-9


def test_equator_round_trip():
    start = NamedPoint(0.0, 10.0, "E0")
    out, _ = destination(start, 90.0, 5000.0, "out")
    back, _ = destination(out, 270.0, 5000.0, "back")
    assert abs(back.latitude - start.latitude) < 1e-9
    assert abs(back.longitude - start.longitude) < 1e-9


@pytest.mark.parametrize("azimuth", [0.5, 37.25, 101.946389, 200.0, 359.9])
@pytest.mark.parametrize("distance", [3.0, 52.267104, 4800.0])
def test_reciprocal_round_trip(pob, azimuth, distance):
    out, arrival = destination(pob, azimuth, distance, "out")
    back, _ = destination(out, (arrival + 180.0) % 360.0, distance, "back")
    assert abs(back.latitude - pob.latitude) < 1e-9
    assert abs(back.longitude - pob.longitude) < 1e-9


def test_walk_is_cumulative(pob):
    traverse = walk_traverse(pob, [Leg(0.0, 100.0, "A"), Leg(0.0, 100.0, "B")])
    single, _ = destination(pob, 0.0, 200.0, "B")
    assert traverse.num_points == 3
    assert traverse.points[0] == pob
    assert abs(traverse.points[-1].latitude - single.latitude) < 1e-9


def test_walk_through_north(pob):
    traverse = walk_traverse(pob, [Leg(359.999, 10.0, "A"), Leg(0.001, 10.0, "B")])
    assert traverse.points[2].latitude > traverse.points[1].latitude > pob.latitude


def test_walk_failure_reports_leg_index(pob):
    legs = [Leg(10.0, 10.0, "A"), Leg(20.0, float("nan"), "B")]
    with pytest.raises(GeodesicComputationFailedError) as excinfo:
        walk_traverse(pob, legs)
    assert excinfo.value.leg_index == 1
    assert "leg 1" in str(excinfo.value)


# ---------------------------------------------------------------------------
# Closure validator
# ---------------------------------------------------------------------------

def _two_point_traverse(d_lat=0.0, d_lon=0.0):
    first = NamedPoint(39.6, -84.15, "POB")
    last = NamedPoint(39.6 + d_lat, -84.15 + d_lon, "POB again")
    return Traverse(name="t", points=[first, last])


@pytest.mark.parametrize("d_lat, d_lon", [(9.9e-7, 0.0), (0.0, 9.9e-7), (-9.9e-7, -9.9e-7)])
def test_closure_within_tolerance(d_lat, d_lon):
    traverse = close_traverse(_two_point_traverse(d_lat, d_lon))
    assert traverse.closed
    assert traverse.num_points == 1
    assert traverse.points[0].label == "POB"


@pytest.mark.parametrize("d_lat, d_lon, axes", [
    (1.1e-6, 0.0, ("latitude",)),
    (0.0, -1.1e-6, ("longitude",)),
    (1.1e-6, 1.1e-6, ("latitude", "longitude")),
])
def test_closure_outside_tolerance(d_lat, d_lon, axes):
    traverse = _two_point_traverse(d_lat, d_lon)
    with pytest.raises(TraverseDoesNotCloseError) as excinfo:
        close_traverse(traverse)
    err = excinfo.value
    assert err.axes == axes
    assert err.delta_lat == pytest.approx(d_lat, abs=1e-12)
    assert err.delta_lon == pytest.approx(d_lon, abs=1e-12)
    # rejected traverse is left untouched
    assert traverse.num_points == 2
    assert not traverse.closed


def test_closure_custom_tolerance():
    traverse = close_traverse(_two_point_traverse(5e-6, 0.0), tolerance=1e-5)
    assert traverse.closed


def test_check_closure_report():
    report = check_closure(_two_point_traverse(0.0, 2e-6))
    assert isinstance(report, ClosureReport)
    assert not report.closes
    assert report.failed_axes == ["longitude"]
    # 2e-6 degrees of longitude at 39.6N is about 0.17 m
    assert report.misclosure_m == pytest.approx(0.172, abs=0.01)


def test_closed_traverse_is_frozen():
    traverse = close_traverse(_two_point_traverse())
    with pytest.raises(RuntimeError):
        traverse.append(NamedPoint(0.0, 0.0, "x"))
    with pytest.raises(RuntimeError):
        close_traverse(traverse)


def test_square_closes(pob, square_calls):
    legs = [parse_bearing_line(line).to_leg() for line in square_calls]
    assert [leg.azimuth for leg in legs] == [0.0, 90.0, 180.0, 270.0]

    walked = walk_traverse(pob, legs)
    assert walked.num_points == 5

    traverse = close_traverse(walked)
    assert traverse.num_points == 4
    assert [p.label for p in traverse.points] == ["POB", "Corner 2", "Corner 3", "Corner 4"]
    assert abs(traverse.misclosure_lat) < 1e-7
    assert abs(traverse.misclosure_lon) < 1e-7


def test_no_legs_is_a_traverse_error(pob):
    with pytest.raises(MalformedRecordError, match="no legs to close"):
        build_traverse(pob, [])
    with pytest.raises(TraverseError):
        check_closure(Traverse(name="t", points=[pob]))


def test_open_figure_rejected(pob):
    legs = [Leg(0.0, 100.0, "A"), Leg(90.0, 100.0, "B"), Leg(180.0, 100.0, "C")]
    with pytest.raises(TraverseDoesNotCloseError):
        build_traverse(pob, legs)


# ---------------------------------------------------------------------------
# Survey pipeline
# ---------------------------------------------------------------------------

def test_process_survey(data_dir):
    survey = process_survey(data_dir)
    assert survey.num_parcels == 2

    first, second = survey.traverses
    assert first.parcel_number == 1
    assert first.name == "Parcel 1"
    assert first.num_points == 4
    assert second.num_points == 4
    assert second.start.label == "Point of Beginning"
    assert all(t.closed for t in survey.traverses)

    df = survey.traverses_to_dataframe()
    assert list(df['NumPoints']) == [4, 4]


def test_process_survey_stops_at_open_parcel(open_data_dir):
    with pytest.raises(TraverseDoesNotCloseError) as excinfo:
        process_survey(open_data_dir)
    err = excinfo.value
    assert err.parcel == 2
    assert err.axes == ("longitude",)
    assert err.source.endswith("parcel2_bearing_distance.txt")
    assert str(err).startswith("parcel 2, ")


def test_process_survey_tags_parse_errors(data_dir):
    (data_dir / "parcel1_start_lat_lon.txt").write_text("39.6 POB\n", encoding="utf-8")
    with pytest.raises(MalformedRecordError) as excinfo:
        process_survey(data_dir)
    err = excinfo.value
    assert err.parcel == 1
    assert err.source.endswith("parcel1_start_lat_lon.txt")
