"""
Sort engine tests
"""
import pytest

from weapon_calculator.calculator import compute_attack, weapon_upgrade_level
from weapon_calculator.models import AttackPowerType, Attribute, WeaponRow
from weapon_calculator.search import SortBy, SortKey, parse_sort_by, sort_weapons


@pytest.fixture
def rows(regulation, make_attributes):
    attributes = make_attributes(str=40, dex=40, int=40, fai=40, arc=40)
    return [
        WeaponRow(weapon, compute_attack(weapon, weapon_upgrade_level(weapon, 25), attributes))
        for weapon in regulation.weapons
    ]


def _names(rows):
    return [row.weapon.name for row in rows]


class TestSortWeapons:
    def test_total_attack_descending(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.TOTAL_ATTACK))
        totals = [row.result.total_attack for row in ordered]
        assert totals == sorted(totals, reverse=True)

    def test_reverse(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.TOTAL_ATTACK), reverse=True)
        totals = [row.result.total_attack for row in ordered]
        assert totals == sorted(totals)

    @pytest.mark.parametrize(
        "sort_by",
        [SortBy(SortKey.NAME), SortBy(SortKey.TOTAL_ATTACK)],
    )
    def test_reverse_is_exact_mirror(self, rows, sort_by):
        distinct = list({row.result.total_attack: row for row in rows}.values())
        assert sort_weapons(distinct, sort_by, reverse=True) == list(reversed(sort_weapons(distinct, sort_by)))

    def test_name_groups_affinities(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.NAME))
        assert _names(ordered) == [
            "Antspur Rapier",
            "Cold Antspur Rapier",
            "Dagger",
            "Heavy Dagger",
            "Glintstone Staff",
            "Moonveil",
            "Star-Lined Sword",
        ]

    def test_attack_of_type(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.ATTACK, attack_power_type=AttackPowerType.MAGIC))
        assert ordered[0].weapon.name == "Moonveil"

    def test_status(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.STATUS, attack_power_type=AttackPowerType.BLEED))
        assert ordered[0].weapon.name == "Dagger"

    def test_spell_scaling(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.SPELL_SCALING, attack_power_type=AttackPowerType.MAGIC))
        assert {row.weapon.name for row in ordered[:2]} == {"Glintstone Staff", "Moonveil"}

    def test_requirement(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.REQUIREMENT, attribute=Attribute.INT))
        assert _names(ordered[:2]) == ["Moonveil", "Glintstone Staff"]

    def test_scaling(self, rows):
        ordered = sort_weapons(rows, SortBy(SortKey.SCALING, attribute=Attribute.STR))
        assert ordered[0].weapon.name == "Heavy Dagger"

    def test_stable_for_ties(self, rows):
        """Weapons without a bleed value keep their input order"""
        ordered = sort_weapons(rows, SortBy(SortKey.STATUS, attack_power_type=AttackPowerType.BLEED))
        assert _names(ordered[1:]) == [n for n in _names(rows) if n != "Dagger"]

    def test_input_untouched(self, rows):
        before = list(rows)
        sort_weapons(rows, SortBy(SortKey.NAME), reverse=True)
        assert rows == before


class TestParseSortBy:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("name", SortBy(SortKey.NAME)),
            ("total", SortBy(SortKey.TOTAL_ATTACK)),
            ("attack:fire", SortBy(SortKey.ATTACK, attack_power_type=AttackPowerType.FIRE)),
            ("status:scarlet_rot", SortBy(SortKey.STATUS, attack_power_type=AttackPowerType.SCARLET_ROT)),
            ("requirement:str", SortBy(SortKey.REQUIREMENT, attribute=Attribute.STR)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_sort_by(text) == expected

    def test_str_round_trips(self):
        assert str(parse_sort_by("Scaling:Dex")) == "scaling:dex"

    @pytest.mark.parametrize("text", ["weight", "attack", "attack:wind", "scaling:luck"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_sort_by(text)

    def test_sort_by_requires_argument(self):
        with pytest.raises(ValueError):
            SortBy(SortKey.ATTACK)
        with pytest.raises(ValueError):
            SortBy(SortKey.SCALING)
