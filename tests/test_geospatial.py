import math

import pytest

from fieldops.errors import EmptyInputError
from fieldops.models.domain import Stop
from fieldops.services.geospatial import (
    centroid,
    distance_miles,
    filter_within_radius,
    max_pairwise_distance,
    pairwise_distance_matrix,
    sort_by_distance,
)

DOWNTOWN = (33.749, -84.388)
MARIETTA = (33.9526, -84.5499)
DECATUR = (33.7748, -84.2963)


def _stop(sid: str, lat: float | None, lon: float | None) -> Stop:
    return Stop(stop_id=sid, latitude=lat, longitude=lon)


def test_distance_is_zero_for_identical_points():
    assert distance_miles(*DOWNTOWN, *DOWNTOWN) == 0.0


def test_distance_is_symmetric():
    assert distance_miles(*DOWNTOWN, *MARIETTA) == pytest.approx(distance_miles(*MARIETTA, *DOWNTOWN))


def test_distance_satisfies_triangle_inequality():
    direct = distance_miles(*DOWNTOWN, *MARIETTA)
    via = distance_miles(*DOWNTOWN, *DECATUR) + distance_miles(*DECATUR, *MARIETTA)
    assert direct <= via + 1e-9


def test_distance_known_value():
    # Downtown Atlanta to Marietta is roughly 17 miles in a straight line.
    assert distance_miles(*DOWNTOWN, *MARIETTA) == pytest.approx(16.9, abs=0.5)


def test_distance_antipodal_points_do_not_fail():
    result = distance_miles(0.0, 0.0, 0.0, 180.0)
    assert math.isfinite(result)
    assert result == pytest.approx(math.pi * 3959.0, rel=1e-6)


def test_centroid_is_mean_and_within_bounds():
    points = [_stop("A", 33.0, -84.0), _stop("B", 34.0, -85.0)]
    center = centroid(points)
    assert center.latitude == pytest.approx(33.5)
    assert center.longitude == pytest.approx(-84.5)
    assert 33.0 <= center.latitude <= 34.0
    assert -85.0 <= center.longitude <= -84.0


def test_centroid_ignores_points_without_coordinates():
    points = [_stop("A", 33.0, -84.0), _stop("B", None, None)]
    assert centroid(points) == (33.0, -84.0)


def test_centroid_rejects_empty_input():
    with pytest.raises(EmptyInputError):
        centroid([])
    with pytest.raises(EmptyInputError):
        centroid([_stop("A", None, -84.0)])


def test_sort_by_distance_orders_and_keeps_ties_stable():
    points = [
        _stop("far", *MARIETTA),
        _stop("tie-1", *DECATUR),
        _stop("near", *DOWNTOWN),
        _stop("tie-2", *DECATUR),
        _stop("nowhere", None, None),
    ]
    ordered = [entry.point.stop_id for entry in sort_by_distance(points, *DOWNTOWN)]
    assert ordered == ["near", "tie-1", "tie-2", "far"]


def test_filter_within_radius_is_inclusive():
    anchor = _stop("anchor", *DOWNTOWN)
    other = _stop("other", *DECATUR)
    exact = distance_miles(*DOWNTOWN, *DECATUR)

    assert filter_within_radius([anchor, other], *DOWNTOWN, exact) == [anchor, other]
    assert filter_within_radius([anchor, other], *DOWNTOWN, exact - 0.01) == [anchor]


def test_pairwise_matrix_matches_scalar_distance():
    points = [_stop("A", *DOWNTOWN), _stop("B", *MARIETTA), _stop("C", *DECATUR)]
    matrix = pairwise_distance_matrix(points)

    assert matrix.shape == (3, 3)
    assert matrix[0, 1] == pytest.approx(distance_miles(*DOWNTOWN, *MARIETTA))
    assert matrix[1, 2] == pytest.approx(matrix[2, 1])
    assert max_pairwise_distance(points) == pytest.approx(matrix.max())
    assert max_pairwise_distance(points[:1]) == 0.0
