"""Pytest configuration and shared fixtures."""

import pytest

from core.tank import Tank
from config import TANK_START_HEADING, TANK_START_LAT, TANK_START_LON


@pytest.fixture
def tank():
    """Tank at the Paris start position, default tuning, shortest-turn blending."""
    return Tank(TANK_START_LAT, TANK_START_LON, TANK_START_HEADING, blend_mode='shortest')


@pytest.fixture
def naive_tank():
    """Same tank using the plain bearing - heading blend."""
    return Tank(TANK_START_LAT, TANK_START_LON, TANK_START_HEADING, blend_mode='naive')
