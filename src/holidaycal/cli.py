"""Typer CLI for holidaycal."""

from __future__ import annotations

import datetime
import json
import logging
import sys

import typer

from holidaycal.config import load_config, parse_observed
from holidaycal.errors import HolidayError
from holidaycal.presets import PRESETS, NamedRule, get_preset, holiday_name, holidays_for_year
from holidaycal.resolvers import Resolver, resolve
from holidaycal.rules import ObservedRule

app = typer.Typer(
    name="holidaycal",
    help="Public holiday rules: list holidays, check dates and resolve Easter-based dates.",
    add_completion=False,
)

OBSERVED_CHOICES = [r.value for r in ObservedRule]


def _parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD date string."""
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format {value!r}. Use YYYY-MM-DD.") from None


def _current_year() -> int:
    return datetime.date.today().year


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


def _collect_rules(
    country: str | None,
    config: str | None,
    observed: str | None,
) -> tuple[str, list[NamedRule], ObservedRule]:
    """Gather ``(title, rules, policy)`` from a preset and/or a config file."""
    title_parts: list[str] = []
    rules: list[NamedRule] = []
    policy: ObservedRule | None = None

    if config is not None:
        cfg = load_config(config)
        rules.extend(cfg.all_holidays())
        policy = cfg.observed
        title_parts.append(config)

    if country is not None or config is None:
        preset = get_preset(country or "us")
        rules = list(preset.holidays) + rules
        if policy is None:
            policy = preset.observed
        title_parts.insert(0, preset.description)

    if observed is not None:
        policy = parse_observed(observed)

    # A config may repeat a preset also named with --country.
    rules = list(dict.fromkeys(rules))
    return " + ".join(title_parts), rules, policy or ObservedRule.EXACT


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def holidays(
    country: str | None = typer.Option(
        None,
        "--country",
        "-c",
        help=f"Country preset ({', '.join(sorted(PRESETS))}). Defaults to 'us' without --config.",
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        min=datetime.MINYEAR,
        max=datetime.MAXYEAR,
        help="Year to list holidays for. Defaults to the current year.",
    ),
    observed: str | None = typer.Option(
        None,
        "--observed",
        "-o",
        help=f"Weekend policy for fixed-date holidays ({', '.join(OBSERVED_CHOICES)}).",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to JSON config file with custom holidays.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON.",
    ),
) -> None:
    """List holidays for a country preset and/or config file."""
    resolved_year = year if year is not None else _current_year()

    try:
        title, rules, policy = _collect_rules(country, config, observed)
        found = holidays_for_year(rules, resolved_year, observed=policy)
    except HolidayError as exc:
        raise _fail(exc) from None

    if output_json:
        output = {
            "title": title,
            "year": resolved_year,
            "observed": policy.value,
            "holidays": [
                {"date": d.isoformat(), "weekday": d.strftime("%A"), "name": name}
                for d, name in found
            ],
        }
        json.dump(output, sys.stdout, indent=2)
        typer.echo()
        return

    typer.echo(f"  {title} — {resolved_year}")
    typer.echo()
    for d, name in found:
        typer.echo(f"    {d.strftime('%a, %b %d'):>12}  {name}")


@app.command()
def check(
    date: str = typer.Argument(..., help="Date to check (YYYY-MM-DD)."),
    country: str | None = typer.Option(
        None,
        "--country",
        "-c",
        help=f"Country preset ({', '.join(sorted(PRESETS))}). Defaults to 'us' without --config.",
    ),
    observed: str | None = typer.Option(
        None,
        "--observed",
        "-o",
        help=f"Weekend policy for fixed-date holidays ({', '.join(OBSERVED_CHOICES)}).",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to JSON config file with custom holidays.",
    ),
) -> None:
    """Check whether a date is a holiday."""
    d = _parse_date(date)

    try:
        _title, rules, policy = _collect_rules(country, config, observed)
        name = holiday_name(rules, d, observed=policy)
    except HolidayError as exc:
        raise _fail(exc) from None

    if name is None:
        typer.echo(f"{d.isoformat()} ({d.strftime('%a')}) is not a holiday")
    else:
        typer.echo(f"{d.isoformat()} ({d.strftime('%a')}) is a holiday: {name}")


@app.command()
def easter(
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        min=datetime.MINYEAR,
        max=datetime.MAXYEAR,
        help="Year to resolve. Defaults to the current year.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON.",
    ),
) -> None:
    """Show the dates every built-in resolver yields for a year."""
    resolved_year = year if year is not None else _current_year()

    try:
        dates = {
            r.value: datetime.date(resolved_year, *resolve(r, resolved_year)) for r in Resolver
        }
    except HolidayError as exc:
        raise _fail(exc) from None

    if output_json:
        json.dump({k: v.isoformat() for k, v in dates.items()}, sys.stdout, indent=2)
        typer.echo()
        return

    typer.echo(f"  Resolved dates — {resolved_year}")
    typer.echo()
    for key, d in dates.items():
        typer.echo(f"    {key:<18} {d.strftime('%a, %b %d')}")


@app.command()
def presets() -> None:
    """List the available country presets."""
    for code in sorted(PRESETS):
        preset = PRESETS[code]
        typer.echo(
            f"  {code:<4} {preset.description} "
            f"({len(preset.holidays)} holidays, observed: {preset.observed.value})"
        )


def main() -> None:
    """Entry point for the CLI."""
    app()

