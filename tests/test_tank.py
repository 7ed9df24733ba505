"""Tests for core.tank - waypoint pursuit stepper."""

import math

import pytest

from core.geodesy import angle_difference, inverse, move, normalize_angle
from core.tank import Tank
from core.waypoint import Waypoint

START = (48.869094, 2.309664)
TARGET = (48.869500, 2.310000)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_start_heading_is_normalized(tank):
    assert tank.current_heading() == pytest.approx(300.0)
    assert tank.current_position() == START
    assert not tank.has_waypoint


def test_unknown_blend_mode_rejected():
    with pytest.raises(ValueError, match="blend mode"):
        Tank(*START, 0.0, blend_mode='spline')


def test_invalid_start_position_rejected():
    with pytest.raises(ValueError):
        Tank(math.nan, 2.3, 0.0)


# ---------------------------------------------------------------------------
# Idle behaviour
# ---------------------------------------------------------------------------


def test_step_without_waypoint_is_noop(tank):
    before = (tank.current_position(), tank.current_heading())

    for _ in range(5):
        assert tank.step() is False

    assert (tank.current_position(), tank.current_heading()) == before
    assert tank.distance_m == 0.0
    assert tank.distance_to_waypoint() is None


# ---------------------------------------------------------------------------
# Single step scenario
# ---------------------------------------------------------------------------


def test_one_step_toward_waypoint(tank):
    """One tick moves ~1 m along the initial bearing and turns 1/10 of the way."""
    expected = inverse(*START, *TARGET)
    assert 20 < expected.azimuth1 < 40

    tank.set_waypoint(*TARGET)
    assert tank.step() is True

    moved = inverse(*START, *tank.current_position())
    assert moved.distance_m == pytest.approx(1.0, abs=1e-6)
    assert moved.azimuth1 == pytest.approx(expected.azimuth1, abs=1e-6)

    turn = angle_difference(300.0, expected.azimuth1) / 10
    assert tank.current_heading() == pytest.approx(normalize_angle(300.0 + turn))
    assert tank.has_waypoint


def test_naive_blend_subtracts_from_unwrapped_heading(naive_tank):
    """Starting at -60°, plain subtraction turns clockwise toward ~29°."""
    expected = inverse(*START, *TARGET)

    naive_tank.set_waypoint(*TARGET)
    naive_tank.step()

    unwrapped = -60.0 + (expected.azimuth1 + 60.0) / 10
    assert unwrapped == pytest.approx(-51.14, abs=0.05)
    assert naive_tank.current_heading() == pytest.approx(unwrapped + 360.0)
    assert naive_tank.current_heading() == pytest.approx(308.86, abs=0.05)

    assert naive_tank.heading == naive_tank.current_heading()
    assert naive_tank.get_state_dict()['heading'] == pytest.approx(308.86, abs=0.05)


def test_naive_blend_from_wrapped_heading_turns_long_way(naive_tank):
    naive_tank.heading = 300.0
    expected = inverse(*START, *TARGET)

    naive_tank.set_waypoint(*TARGET)
    naive_tank.step()

    assert naive_tank.current_heading() == pytest.approx(300.0 + (expected.azimuth1 - 300.0) / 10)
    assert naive_tank.current_heading() < 300.0


def test_shortest_blend_across_north(tank):
    tank.heading = 350.0
    lat, lon = move(*START, 10.0, 100.0)
    tank.set_waypoint(lat, lon)

    tank.step()

    # Turns clockwise through north, not back toward 10 the long way
    assert tank.current_heading() > 350.0


# ---------------------------------------------------------------------------
# Arrival
# ---------------------------------------------------------------------------


def test_within_threshold_clears_without_moving(tank):
    lat, lon = move(*START, 45.0, 4.0)
    tank.set_waypoint(lat, lon)
    heading = tank.current_heading()

    assert tank.step() is False

    assert not tank.has_waypoint
    assert tank.current_position() == START
    assert tank.current_heading() == heading
    assert tank.arrivals == 1


def test_waypoint_at_current_position_is_immediate_arrival(tank):
    tank.set_waypoint(*START)
    tank.step()

    assert not tank.has_waypoint
    assert tank.current_position() == START


def test_distance_decreases_until_arrival(tank):
    lat, lon = move(*START, 123.0, 30.0)
    tank.set_waypoint(lat, lon)

    previous = tank.distance_to_waypoint()
    for _ in range(100):
        if not tank.has_waypoint:
            break
        tank.step()
        if tank.has_waypoint:
            current = tank.distance_to_waypoint()
            assert current < previous
            previous = current

    assert not tank.has_waypoint
    assert tank.arrivals == 1
    assert inverse(*tank.current_position(), lat, lon).distance_m <= 5.0 + 1e-9


@pytest.mark.parametrize("blend_mode", ['shortest', 'naive'])
def test_heading_stays_in_range(blend_mode):
    tank = Tank(*START, 359.0, blend_mode=blend_mode)

    for azimuth in (5.0, 355.0, 180.0, 1.0, 270.0):
        tank.set_waypoint(*move(*tank.current_position(), azimuth, 20.0))
        for _ in range(30):
            tank.step()
            assert 0.0 <= tank.current_heading() < 360.0


# ---------------------------------------------------------------------------
# Waypoint assignment
# ---------------------------------------------------------------------------


def test_second_waypoint_replaces_first(tank):
    first = move(*START, 90.0, 50.0)
    second = move(*START, 200.0, 50.0)

    tank.set_waypoint(*first)
    tank.set_waypoint(*second)
    tank.step()

    moved = inverse(*START, *tank.current_position())
    assert moved.azimuth1 == pytest.approx(inverse(*START, *second).azimuth1, abs=1e-6)
    assert (tank.waypoint.lat, tank.waypoint.lon) == pytest.approx(second)


@pytest.mark.parametrize("lat, lon", [(math.nan, 2.31), (48.87, math.inf), (95.0, 2.31)])
def test_malformed_waypoint_discarded(tank, lat, lon):
    assert tank.set_waypoint(lat, lon) is False
    assert not tank.has_waypoint


def test_malformed_waypoint_keeps_pending_one(tank):
    tank.set_waypoint(*TARGET)
    tank.set_waypoint(math.nan, math.nan)

    assert (tank.waypoint.lat, tank.waypoint.lon) == TARGET


def test_malformed_waypoint_in_store_treated_as_idle(tank):
    tank.waypoints.set(Waypoint(math.nan, 2.31))

    assert tank.step() is False
    assert not tank.has_waypoint
    assert tank.current_position() == START


def test_clear_waypoint(tank):
    assert tank.clear_waypoint() is False
    tank.set_waypoint(*TARGET)
    assert tank.clear_waypoint() is True
    assert not tank.has_waypoint


# ---------------------------------------------------------------------------
# Bookkeeping
# ---------------------------------------------------------------------------


def test_statistics_and_state_dict(tank):
    tank.set_waypoint(*TARGET, name="Etoile")
    for _ in range(3):
        tank.step()

    state = tank.get_state_dict()
    assert state['stats'] == {'distance_m': 3.0, 'ticks': 3, 'arrivals': 0}
    assert state['waypoint']['name'] == "Etoile"
    assert 0.0 <= state['heading'] < 360.0


def test_breadcrumbs_are_capped(tank, monkeypatch):
    monkeypatch.setattr('core.tank.MAX_BREADCRUMBS', 3)
    for _ in range(5):
        tank.add_breadcrumb()
    assert len(tank.breadcrumbs) == 3
