"""
pytest configuration and shared fixtures
"""
import json
import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from fixtures.regulation import make_regulation_data
from weapon_calculator.models import AttackPowerType, Attribute, Weapon, WeaponType
from weapon_calculator.regulation import Regulation, decode_regulation_data
from weapon_calculator.versions import get_regulation_version


# =============================================================================
# pytest configuration
# =============================================================================


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: tests that exercise the API or CLI end to end"
    )


@pytest.fixture(autouse=True)
def reset_cli_logger():
    """Drop handlers bound to streams that CliRunner closes between tests."""
    logger = logging.getLogger("weapon_calculator")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


# =============================================================================
# Regulation data fixtures
# =============================================================================


@pytest.fixture
def regulation_data() -> dict[str, Any]:
    """Raw regulation JSON (fresh copy per test)"""
    return make_regulation_data()


@pytest.fixture
def regulation(regulation_data) -> Regulation:
    """Decoded test regulation"""
    return decode_regulation_data(regulation_data)


@pytest.fixture
def weapons_by_name(regulation) -> dict[str, Weapon]:
    return {weapon.name: weapon for weapon in regulation.weapons}


@pytest.fixture
def data_dir(tmp_path, regulation_data) -> Path:
    """Data directory holding the test dataset under the 'latest' version's file name"""
    version = get_regulation_version("latest")
    (tmp_path / version.data_file).write_text(json.dumps(regulation_data), encoding="utf-8")
    return tmp_path


# =============================================================================
# Weapon / attribute builders
# =============================================================================


@pytest.fixture
def make_weapon() -> Callable[..., Weapon]:
    """
    Builder for single-level weapons.
    Defaults: a standard straight sword with 100 physical scaling with strength on curve 0.
    """

    def _make(**overrides: Any) -> Weapon:
        fields: dict[str, Any] = {
            "name": "Test Sword",
            "weapon_name": overrides.get("name", "Test Sword"),
            "affinity_id": 0,
            "weapon_type": WeaponType.STRAIGHT_SWORD,
            "max_upgrade_level": 0,
            "requirements": {},
            "attack": ({AttackPowerType.PHYSICAL: 100.0},),
            "attribute_scaling": ({Attribute.STR: 1.0},),
            "attack_element_correct": {AttackPowerType.PHYSICAL: (Attribute.STR,)},
            "scaling_curves": {AttackPowerType.PHYSICAL: 0},
        }
        fields.update(overrides)
        return Weapon(**fields)

    return _make


@pytest.fixture
def make_attributes() -> Callable[..., dict[Attribute, int]]:
    """Attribute builder: every attribute 10 unless overridden, e.g. make_attributes(str=40)"""

    def _make(**values: int) -> dict[Attribute, int]:
        attributes = {attribute: 10 for attribute in Attribute}
        attributes.update({Attribute(k): v for k, v in values.items()})
        return attributes

    return _make
