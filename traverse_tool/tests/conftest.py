"""Shared fixtures for traverse tool tests."""
import pytest

from traverse_tool.config.models import NamedPoint


POB = NamedPoint(latitude=39.603480, longitude=-84.151764, label='POB')

# 328.084 ft is 100.0000032 m
SQUARE_CALLS = [
    "N 00 00 00 E 328.084 Corner 2",
    "N 90 00 00 E 328.084 Corner 3",
    "S 00 00 00 E 328.084 Corner 4",
    "N 90 00 00 W 328.084 POB",
]

DIAMOND_CALLS = [
    "N 45 00 00 E 500.00 Iron Pin",
    "",
    "S 45 00 00 E 500.00 Fence Post",
    "S 45 00 00 W 500.00 Oak Tree 36in",
    "N 45 00 00 W 500.00 Point of Beginning",
]


def write_parcel(data_dir, number, start_line, calls):
    """Write the start and bearing/distance files for one parcel."""
    start = data_dir / f"parcel{number}_start_lat_lon.txt"
    start.write_text(start_line + "\n", encoding="utf-8")
    bearing = data_dir / f"parcel{number}_bearing_distance.txt"
    bearing.write_text("\n".join(calls) + "\n", encoding="utf-8")
    return start, bearing


@pytest.fixture
def pob():
    return POB


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with two closing parcels."""
    d = tmp_path / "data"
    d.mkdir()
    write_parcel(d, 1, "39.603480 -84.151764 POB", SQUARE_CALLS)
    write_parcel(d, 2, "39.604200   -84.150500   Point of Beginning", DIAMOND_CALLS)
    return d


@pytest.fixture
def open_data_dir(tmp_path):
    """Data directory whose second parcel does not close."""
    d = tmp_path / "open"
    d.mkdir()
    write_parcel(d, 1, "39.603480 -84.151764 POB", SQUARE_CALLS)
    write_parcel(d, 2, "39.604200 -84.150500 POB", SQUARE_CALLS[:3] + ["N 90 00 00 W 300.00 POB"])
    return d


@pytest.fixture
def square_calls():
    return list(SQUARE_CALLS)


@pytest.fixture
def diamond_calls():
    return list(DIAMOND_CALLS)
