"""Tests for the command line entry point (headless mode only)."""

import pytest

from main import create_tank, main, parse_args, run_headless
from config import HEADING_BLEND_MODE, TANK_START_LAT, TANK_START_LON


def test_parse_args_defaults():
    args = parse_args([])

    assert not args.headless
    assert args.ticks == 100
    assert args.waypoint is None
    assert args.heading_blend == HEADING_BLEND_MODE


def test_parse_args_rejects_unknown_blend():
    with pytest.raises(SystemExit):
        parse_args(['--heading-blend', 'spline'])


def test_create_tank_with_waypoint():
    tank = create_tank(parse_args(['--waypoint', '48.8695', '2.31', '--heading-blend', 'naive']))

    assert tank.current_position() == (TANK_START_LAT, TANK_START_LON)
    assert tank.blend_mode == 'naive'
    assert (tank.waypoint.lat, tank.waypoint.lon) == (48.8695, 2.31)


def test_run_headless_moves_and_drops_breadcrumbs(capsys):
    tank = create_tank(parse_args(['--waypoint', '48.8695', '2.31']))

    assert run_headless(tank, 20) == 0

    assert tank.distance_m == pytest.approx(20.0)
    assert len(tank.breadcrumbs) == 2
    out = capsys.readouterr().out
    assert '"ticks": 20' in out
    assert '"breadcrumbs": 2' in out


def test_main_headless_without_waypoint(capsys):
    assert main(['--headless', '--ticks', '5']) == 0
    assert '"distance_m": 0.0' in capsys.readouterr().out


def test_idle_tank_does_not_repeat_breadcrumbs(capsys):
    tank = create_tank(parse_args([]))

    run_headless(tank, 50)
    assert tank.breadcrumbs == [(TANK_START_LAT, TANK_START_LON)]

    tank.set_waypoint(48.8695, 2.31)
    run_headless(tank, 10)
    assert len(tank.breadcrumbs) == 2
    assert tank.breadcrumbs[-1] == tank.current_position()
