from __future__ import annotations

import math

import pytest

from src.worktime.worktime.core.enums import GeofenceSelection
from src.worktime.worktime.core.exceptions import InvalidCoordinate
from src.worktime.worktime.employees.model import Employee
from src.worktime.worktime.geofence.evaluator import calculate_distance, evaluate_geofence
from src.worktime.worktime.geofence.model import GeofenceLocation, GeoPoint

EMP = Employee(employee_id=7, full_name="Asha", department_id=3)
DELHI = GeoPoint(28.6139, 77.2090)


def office(location_id: int, lat: float, lon: float, radius: float = 100, **kwargs) -> GeofenceLocation:
    return GeofenceLocation(
        location_id=location_id, name=f"Office {location_id}", center=GeoPoint(lat, lon), radius=radius, **kwargs
    )


def test_distance_of_one_degree_on_the_equator():
    assert calculate_distance(0, 0, 0, 1) == pytest.approx(111194.93, abs=0.01)
    assert calculate_distance(12.5, 45.0, 12.5, 45.0) == 0


def test_distance_is_symmetric():
    assert calculate_distance(28.6139, 77.2090, 19.0760, 72.8777) == pytest.approx(
        calculate_distance(19.0760, 72.8777, 28.6139, 77.2090)
    )


def test_employee_a_few_meters_from_the_center_is_inside():
    result = evaluate_geofence(EMP, [office(1, 28.6140, 77.2091)], DELHI)

    assert result.is_within_geofence
    assert result.closest_location.location_id == 1
    assert 10 < result.min_distance < 20


def test_point_exactly_on_the_radius_is_inside():
    distance = calculate_distance(0, 0, 0, 0.001)

    assert evaluate_geofence(EMP, [office(1, 0, 0.001, radius=distance)], GeoPoint(0, 0)).is_within_geofence
    assert not evaluate_geofence(EMP, [office(1, 0, 0.001, radius=distance - 0.01)], GeoPoint(0, 0)).is_within_geofence


def test_outside_reports_closest_allowed_location():
    far = office(1, 28.70, 77.10)
    near = office(2, 28.62, 77.21)

    result = evaluate_geofence(EMP, [far, near], DELHI)

    assert not result.is_within_geofence
    assert result.closest_location is near
    assert result.min_distance == pytest.approx(calculate_distance(28.6139, 77.2090, 28.62, 77.21))


def test_locations_of_other_departments_are_skipped():
    other_dept = office(1, 28.6140, 77.2091, allowed_departments=(9,))

    result = evaluate_geofence(EMP, [other_dept], DELHI)

    assert not result.is_within_geofence
    assert result.closest_location is None
    assert result.min_distance == math.inf


def test_individually_allowed_employee_passes_department_filter():
    loc = office(1, 28.6140, 77.2091, allowed_departments=(9,), allowed_employees=(7,))

    assert evaluate_geofence(EMP, [loc], DELHI).is_within_geofence


def test_own_department_is_allowed():
    loc = office(1, 28.6140, 77.2091, allowed_departments=(3, 9))

    assert evaluate_geofence(EMP, [loc], DELHI).is_within_geofence


def test_inactive_location_is_skipped():
    loc = office(1, 28.6140, 77.2091, is_active=False)

    assert not evaluate_geofence(EMP, [loc], DELHI).is_within_geofence


def test_first_match_wins_in_iteration_order():
    wide = office(1, 28.6150, 77.2100, radius=1000)
    tight = office(2, 28.6139, 77.2090, radius=50)

    first = evaluate_geofence(EMP, [wide, tight], DELHI)
    nearest = evaluate_geofence(EMP, [wide, tight], DELHI, selection=GeofenceSelection.NEAREST_MATCH)

    assert first.closest_location is wide
    assert nearest.closest_location is tight
    assert nearest.min_distance == 0


def test_no_locations_means_outside():
    result = evaluate_geofence(EMP, [], DELHI)

    assert not result.is_within_geofence
    assert result.closest_location is None


@pytest.mark.parametrize(
    "point",
    [GeoPoint(float("nan"), 77.2), GeoPoint(28.6, float("inf")), GeoPoint(91, 0), GeoPoint(0, -181)],
)
def test_invalid_coordinates_are_rejected(point):
    with pytest.raises(InvalidCoordinate):
        evaluate_geofence(EMP, [office(1, 0, 0)], point)
