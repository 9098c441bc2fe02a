# apps/cli/main.py
"""Command-line interface for the weapon calculator"""

from __future__ import annotations

import json
from typing import Any, Dict, Tuple

import click
import requests

from weapon_calculator.errors import WeaponCalculatorError
from weapon_calculator.io.loader import Loader, load_regulation_data
from weapon_calculator.models import Attribute
from weapon_calculator.regulation import Regulation
from weapon_calculator.reporter import ReportOptions, WeaponTableReporter
from weapon_calculator.scaling_curves import BUILTIN_CURVES
from weapon_calculator.search import FilterCriteria, build_weapon_rows, parse_sort_by
from weapon_calculator.utils import parse_affinity, parse_weapon_type, setup_logger
from weapon_calculator.versions import DEFAULT_REGULATION_VERSION, REGULATION_VERSIONS


def _load(shared: Dict[str, Any]) -> Regulation:
    """Decode the selected regulation dataset, once per invocation."""
    if shared.get("regulation") is None:
        try:
            shared["regulation"] = load_regulation_data(
                shared["version"].key,
                data_dir=shared["data_dir"],
                logger=shared["logger"],
            )
        except FileNotFoundError as e:
            raise click.ClickException(f"Regulation data not found: {e.filename}")
        except requests.RequestException as e:
            raise click.ClickException(f"Could not fetch regulation data: {e}")
        except WeaponCalculatorError as e:
            raise click.ClickException(str(e))
        except (TypeError, ValueError) as e:
            raise click.ClickException(f"Invalid regulation data: {e}")
    return shared["regulation"]


# ---------- Root group: picks the regulation version ----------
@click.group()
@click.option(
    "--regulation",
    type=click.Choice(sorted(REGULATION_VERSIONS)),
    default=DEFAULT_REGULATION_VERSION,
    show_default=True,
    help="Regulation version (game patch or mod).",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=str),
    default=None,
    help="Directory holding regulation-*.json files (overrides REGULATION_DATA_DIR).",
)
@click.option("--verbose", is_flag=True, help="Enable detailed debug logs.")
@click.pass_context
def cli(ctx: click.Context, regulation: str, data_dir: str | None, verbose: bool):
    """⚔️ Weapon attack power calculator"""
    logger = setup_logger(verbose)
    version = REGULATION_VERSIONS[regulation]
    if version.info:
        logger.debug(f"📘 {version.info}")

    # Stash settings for all subcommands; the dataset is loaded on first use
    ctx.obj = {
        "logger": logger,
        "version": version,
        "data_dir": data_dir,
        "regulation": None,
    }


# ---------- Subcommand: ranked weapon table ----------
@cli.command("table")
@click.option("--str", "strength", type=click.IntRange(1, 99), default=10, show_default=True)
@click.option("--dex", "dexterity", type=click.IntRange(1, 99), default=10, show_default=True)
@click.option("--int", "intelligence", type=click.IntRange(1, 99), default=10, show_default=True)
@click.option("--fai", "faith", type=click.IntRange(1, 99), default=10, show_default=True)
@click.option("--arc", "arcane", type=click.IntRange(1, 99), default=10, show_default=True)
@click.option("--level", type=click.IntRange(min=0), default=None,
              help="Regular upgrade level (default: the version's maximum).")
@click.option("--two-handing", is_flag=True, help="Two-hand the weapons.")
@click.option("--type", "weapon_types", multiple=True,
              help="Weapon type name or id, e.g. 'katana'. Repeatable.")
@click.option("--affinity", "affinities", multiple=True,
              help="Affinity name or id, e.g. 'Heavy'. Repeatable.")
@click.option("--effective-only", is_flag=True, help="Hide weapons whose requirements aren't met.")
@click.option("--no-dlc", is_flag=True, help="Hide weapons from the expansion.")
@click.option("--max-weight", type=float, default=None, help="Hide weapons heavier than this.")
@click.option("--sort", "sort_text", default="total", show_default=True,
              help="Sort key: name, total, attack:<type>, status:<type>, spell:<type>, scaling:<attr>, requirement:<attr>.")
@click.option("--reverse", is_flag=True, help="Reverse the sort order.")
@click.option("--limit", type=click.IntRange(min=0), default=20, show_default=True)
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True)
@click.pass_obj
def cmd_table(
    shared: Dict[str, Any],
    strength: int,
    dexterity: int,
    intelligence: int,
    faith: int,
    arcane: int,
    level: int | None,
    two_handing: bool,
    weapon_types: Tuple[str, ...],
    affinities: Tuple[str, ...],
    effective_only: bool,
    no_dlc: bool,
    max_weight: float | None,
    sort_text: str,
    reverse: bool,
    limit: int,
    offset: int,
):
    """Print weapons ranked by attack power."""
    version = shared["version"]
    attributes = {
        Attribute.STR: strength,
        Attribute.DEX: dexterity,
        Attribute.INT: intelligence,
        Attribute.FAI: faith,
        Attribute.ARC: arcane,
    }
    upgrade_level = version.max_regular_upgrade_level if level is None else level
    if upgrade_level > version.max_regular_upgrade_level:
        raise click.BadParameter(
            f"at most {version.max_regular_upgrade_level} for {version.name}", param_hint="--level"
        )

    try:
        criteria = FilterCriteria(
            weapon_types=frozenset(parse_weapon_type(t) for t in weapon_types),
            affinity_ids=frozenset(parse_affinity(a, version.affinity_options) for a in affinities),
            effective_with_attributes=attributes if effective_only else None,
            two_handing=two_handing,
            include_dlc=not no_dlc,
            max_weight=max_weight,
        )
        sort_by = parse_sort_by(sort_text)
    except ValueError as e:
        raise click.UsageError(str(e))

    regulation = _load(shared)
    result = build_weapon_rows(
        regulation,
        version,
        attributes=attributes,
        upgrade_level=upgrade_level,
        criteria=criteria,
        two_handing=two_handing,
        sort_by=sort_by,
        reverse=reverse,
        offset=offset,
        limit=limit,
    )

    WeaponTableReporter().emit(
        rows=result.rows,
        total=result.total,
        attributes=attributes,
        options=ReportOptions(affinity_options=version.affinity_options),
    )


# ---------- Subcommand: codec export ----------
@cli.command("export")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=str),
    default="-",
    show_default=True,
    help="Where to write the encoded weapon list ('-' for stdout).",
)
@click.pass_obj
def cmd_export(shared: Dict[str, Any], output: str):
    """Write all weapons in the compact wire format."""
    logger = shared["logger"]
    regulation = _load(shared)
    payload = Loader(logger).dump_weapon_list(list(regulation.weapons))

    with click.open_file(output, "w", encoding="utf-8") as f:
        json.dump(payload, f, separators=(",", ":"))
    if output != "-":
        logger.info(f"✅ Wrote {len(regulation.weapons)} weapons to {output}")


# ---------- Subcommand: scaling curve ----------
@cli.command("curve")
@click.argument("curve_id", type=int)
@click.option("--step", type=click.IntRange(min=1), default=10, show_default=True)
@click.option("--max-value", type=click.IntRange(1, 148), default=99, show_default=True)
@click.option("--from-dataset", is_flag=True, help="Use the regulation dataset's curves instead of the built-ins.")
@click.pass_obj
def cmd_curve(shared: Dict[str, Any], curve_id: int, step: int, max_value: int, from_dataset: bool):
    """Print the coefficient of a scaling curve across attribute values."""
    curves = _load(shared).curves if from_dataset else BUILTIN_CURVES
    if curve_id not in curves:
        raise click.BadParameter(
            f"unknown curve {curve_id}; known: {', '.join(map(str, curves.ids))}", param_hint="CURVE_ID"
        )

    click.secho(f"Curve {curve_id}", fg="blue", bold=True)
    values = sorted({1, *range(step, max_value + 1, step), max_value})
    for value in values:
        click.echo(f"  {value:>3}: {curves.coefficient(curve_id, value):.4f}")


def main() -> None:
    cli(prog_name="weapon-calc")


if __name__ == "__main__":
    main()
