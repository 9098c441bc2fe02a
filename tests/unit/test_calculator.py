"""
Attack power calculator tests

Scaling formula, the ineffective-attribute penalty, two-handing, spell
scaling, status buildup and upgrade level mapping.
"""
import pytest

from weapon_calculator.calculator import (
    adjust_attributes_for_two_handing,
    compute_attack,
    get_ineffective_attributes,
    scaling_grade,
    to_regular_upgrade_level,
    to_special_upgrade_level,
    weapon_upgrade_level,
)
from weapon_calculator.models import AttackPowerType, Attribute, WeaponType
from weapon_calculator.scaling_curves import curve, status_curve

PHYSICAL = AttackPowerType.PHYSICAL


class TestScalingFormula:
    """attack = base * (1 + multiplier)"""

    def test_requirement_met(self, make_weapon, make_attributes):
        """Base 100, strength scaling 1.0, strength 60 on curve 0 -> +75"""
        result = compute_attack(make_weapon(), 0, make_attributes(str=60))

        assert result.attack_power[PHYSICAL].base == pytest.approx(100)
        assert result.attack_power[PHYSICAL].scaling == pytest.approx(75)
        assert result.total_attack == pytest.approx(175)
        assert result.ineffective_attributes == ()

    def test_requirement_not_met(self, make_weapon, make_attributes):
        """Strength 10 against a requirement of 30 -> flat -40% penalty"""
        weapon = make_weapon(requirements={Attribute.STR: 30}, attribute_scaling=({Attribute.STR: 0.5},))
        result = compute_attack(weapon, 0, make_attributes(str=10))

        assert result.attack_power[PHYSICAL].scaling == pytest.approx(-40)
        assert result.total_attack == pytest.approx(60)
        assert result.ineffective_attributes == (Attribute.STR,)

    def test_custom_penalty(self, make_weapon, make_attributes):
        weapon = make_weapon(requirements={Attribute.STR: 30})
        result = compute_attack(weapon, 0, make_attributes(str=10), ineffective_attribute_penalty=0.5)
        assert result.attack_power[PHYSICAL].scaling == pytest.approx(-50)

    def test_penalty_only_hits_types_scaling_with_the_attribute(self, make_weapon, make_attributes):
        weapon = make_weapon(
            requirements={Attribute.FAI: 20},
            attack=({PHYSICAL: 100.0, AttackPowerType.FIRE: 50.0},),
            attribute_scaling=({Attribute.STR: 1.0, Attribute.FAI: 1.0},),
            attack_element_correct={PHYSICAL: (Attribute.STR,), AttackPowerType.FIRE: (Attribute.FAI,)},
            scaling_curves={PHYSICAL: 0, AttackPowerType.FIRE: 0},
        )
        result = compute_attack(weapon, 0, make_attributes(str=60, fai=10))

        assert result.attack_power[PHYSICAL].scaling == pytest.approx(75)
        assert result.attack_power[AttackPowerType.FIRE].scaling == pytest.approx(-20)

    def test_multiple_attributes_add_up(self, make_weapon, make_attributes):
        weapon = make_weapon(
            attribute_scaling=({Attribute.STR: 0.5, Attribute.DEX: 0.5},),
            attack_element_correct={PHYSICAL: (Attribute.STR, Attribute.DEX)},
        )
        result = compute_attack(weapon, 0, make_attributes(str=60, dex=18))
        expected = 100 * (0.5 * curve(0, 60) + 0.5 * curve(0, 18))
        assert result.attack_power[PHYSICAL].scaling == pytest.approx(expected)

    def test_type_without_curve_does_not_scale(self, make_weapon, make_attributes):
        result = compute_attack(make_weapon(scaling_curves={}), 0, make_attributes(str=60))
        assert result.attack_power[PHYSICAL].scaling == 0

    def test_absent_types_are_omitted(self, make_weapon, make_attributes):
        result = compute_attack(make_weapon(), 0, make_attributes())
        assert set(result.attack_power) == {PHYSICAL}
        assert result.attack_of(AttackPowerType.FIRE) == 0.0

    def test_upgrade_level_out_of_range(self, make_weapon, make_attributes):
        with pytest.raises(ValueError):
            compute_attack(make_weapon(), 1, make_attributes())
        with pytest.raises(ValueError):
            compute_attack(make_weapon(), -1, make_attributes())

    def test_decoded_weapon_at_max_level(self, weapons_by_name, make_attributes):
        dagger = weapons_by_name["Dagger"]
        result = compute_attack(dagger, 25, make_attributes(str=10, dex=10))
        expected = 75 * 3.5 * (
            0.35 * 2.25 * curve(0, 10) + 0.5 * 2.25 * curve(0, 10)
        )
        assert result.attack_power[PHYSICAL].base == pytest.approx(75 * 3.5)
        assert result.attack_power[PHYSICAL].scaling == pytest.approx(expected)


class TestTwoHanding:
    """Strength bonus when two-handing"""

    def test_strength_multiplied_and_floored(self, make_weapon, make_attributes):
        adjusted = adjust_attributes_for_two_handing(make_attributes(str=11), make_weapon(), two_handing=True)
        assert adjusted[Attribute.STR] == 16

    def test_one_handing_leaves_attributes(self, make_weapon, make_attributes):
        attributes = make_attributes(str=11)
        assert adjust_attributes_for_two_handing(attributes, make_weapon()) == attributes

    def test_two_handing_meets_requirement(self, make_weapon, make_attributes):
        weapon = make_weapon(requirements={Attribute.STR: 15})
        attributes = make_attributes(str=10)

        assert compute_attack(weapon, 0, attributes).ineffective_attributes == (Attribute.STR,)
        result = compute_attack(weapon, 0, attributes, two_handing=True)
        assert result.ineffective_attributes == ()
        assert result.attack_power[PHYSICAL].scaling == pytest.approx(100 * curve(0, 15))

    def test_paired_weapons_never_get_the_bonus(self, make_weapon, make_attributes):
        weapon = make_weapon(paired=True, requirements={Attribute.STR: 15})
        attributes = make_attributes(str=10)
        assert compute_attack(weapon, 0, attributes, two_handing=True) == compute_attack(weapon, 0, attributes)

    def test_bows_always_get_the_bonus(self, make_weapon, make_attributes):
        weapon = make_weapon(weapon_type=WeaponType.BOW, requirements={Attribute.STR: 14})
        result = compute_attack(weapon, 0, make_attributes(str=10))
        assert result.attributes[Attribute.STR] == 15
        assert result.ineffective_attributes == ()

    def test_disabled_bonus_still_helps_requirements(self, make_weapon, make_attributes):
        """Requirements use adjusted strength, scaling uses the raw value"""
        weapon = make_weapon(requirements={Attribute.STR: 15})
        result = compute_attack(
            weapon,
            0,
            make_attributes(str=10),
            two_handing=True,
            disable_two_handing_attack_power_bonus=True,
        )
        assert result.ineffective_attributes == ()
        assert result.attack_power[PHYSICAL].scaling == pytest.approx(100 * curve(0, 10))

    def test_ineffective_attributes_helper(self, make_weapon, make_attributes):
        weapon = make_weapon(requirements={Attribute.STR: 12, Attribute.DEX: 12})
        assert get_ineffective_attributes(weapon, make_attributes(str=12, dex=11)) == (Attribute.DEX,)


class TestStatusBuildup:
    """Status types scale with arcane on the status curve"""

    def test_bleed_scales_with_arcane(self, make_weapon, make_attributes):
        weapon = make_weapon(
            attack=({PHYSICAL: 100.0, AttackPowerType.BLEED: 50.0},),
            attribute_scaling=({Attribute.STR: 1.0, Attribute.ARC: 1.0},),
            attack_element_correct={PHYSICAL: (Attribute.STR,), AttackPowerType.BLEED: (Attribute.ARC,)},
            scaling_curves={PHYSICAL: 0, AttackPowerType.BLEED: 6},
        )
        result = compute_attack(weapon, 0, make_attributes(arc=45))

        assert result.attack_of(AttackPowerType.BLEED) == pytest.approx(50 * (1 + status_curve(45)))
        # Status buildup isn't part of the damage total
        assert result.total_attack == pytest.approx(result.attack_of(PHYSICAL))

    def test_flat_status_without_scaling(self, weapons_by_name, make_attributes):
        antspur = weapons_by_name["Antspur Rapier"]
        result = compute_attack(antspur, 0, make_attributes(str=10, dex=20, arc=99))
        assert result.attack_of(AttackPowerType.SCARLET_ROT) == pytest.approx(60)


class TestSpellScaling:
    """Catalysts report 100 * (1 + multiplier)"""

    def _staff(self, make_weapon, **overrides):
        fields = dict(
            weapon_type=WeaponType.GLINTSTONE_STAFF,
            attack=({PHYSICAL: 25.0},),
            attribute_scaling=({Attribute.INT: 1.0},),
            attack_element_correct={AttackPowerType.MAGIC: (Attribute.INT,)},
            scaling_curves={PHYSICAL: 0, AttackPowerType.MAGIC: 0},
            sorcery_tool=True,
        )
        fields.update(overrides)
        return make_weapon(**fields)

    def test_sorcery_tool(self, make_weapon, make_attributes):
        result = compute_attack(self._staff(make_weapon), 0, make_attributes(int=60))
        assert result.spell_scaling == {AttackPowerType.MAGIC: pytest.approx(175)}
        # No magic attack power, only spell scaling
        assert AttackPowerType.MAGIC not in result.attack_power

    def test_incantation_tool(self, make_weapon, make_attributes):
        seal = self._staff(
            make_weapon,
            sorcery_tool=False,
            incantation_tool=True,
            attribute_scaling=({Attribute.FAI: 1.0},),
            attack_element_correct={AttackPowerType.HOLY: (Attribute.FAI,)},
            scaling_curves={AttackPowerType.HOLY: 0},
        )
        result = compute_attack(seal, 0, make_attributes(fai=60))
        assert set(result.spell_scaling) == {AttackPowerType.HOLY}
        assert result.spell_scaling[AttackPowerType.HOLY] == pytest.approx(175)

    def test_penalty_applies(self, make_weapon, make_attributes):
        staff = self._staff(make_weapon, requirements={Attribute.INT: 20})
        result = compute_attack(staff, 0, make_attributes(int=10))
        assert result.spell_scaling[AttackPowerType.MAGIC] == pytest.approx(60)

    def test_split_spell_scaling(self, make_weapon, make_attributes):
        result = compute_attack(self._staff(make_weapon), 0, make_attributes(int=60), split_spell_scaling=True)
        assert set(result.spell_scaling) == {
            AttackPowerType.PHYSICAL,
            AttackPowerType.MAGIC,
            AttackPowerType.FIRE,
            AttackPowerType.LIGHTNING,
            AttackPowerType.HOLY,
        }
        assert result.spell_scaling[AttackPowerType.FIRE] == pytest.approx(100)

    def test_non_catalyst_has_none(self, make_weapon, make_attributes):
        assert compute_attack(make_weapon(), 0, make_attributes()).spell_scaling == {}


class TestUpgradeLevels:
    """Regular -> somber upgrade level mapping"""

    @pytest.mark.parametrize(
        "regular, special",
        [(0, 0), (2, 1), (12, 5), (24, 9), (25, 10)],
    )
    def test_to_special(self, regular, special):
        assert to_special_upgrade_level(regular) == special

    @pytest.mark.parametrize("special, regular", [(0, 0), (4, 10), (5, 12), (10, 25)])
    def test_to_regular(self, special, regular):
        assert to_regular_upgrade_level(special) == regular

    def test_weapon_upgrade_level(self, weapons_by_name):
        assert weapon_upgrade_level(weapons_by_name["Dagger"], 25) == 25
        assert weapon_upgrade_level(weapons_by_name["Moonveil"], 25) == 10
        assert weapon_upgrade_level(weapons_by_name["Dagger"], 40) == 25

    def test_custom_regular_maximum(self, weapons_by_name):
        assert weapon_upgrade_level(weapons_by_name["Moonveil"], 15, max_regular_upgrade_level=15) == 10


class TestScalingGrade:
    @pytest.mark.parametrize(
        "scaling, grade",
        [(1.8, "S"), (1.4, "A"), (1.0, "B"), (0.6, "C"), (0.3, "D"), (0.1, "E"), (0.0, "-")],
    )
    def test_grades(self, scaling, grade):
        assert scaling_grade(scaling) == grade
