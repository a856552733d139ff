"""Command line interface for the N2YO satellite tracking API.

Usage:
    n2yo [--api-key KEY] [--verbose] COMMAND [OPTIONS]

Examples:
    # TLE for the ISS
    n2yo tle --sat ISS

    # Next two minutes of positions seen from Ithaca, NY
    n2yo positions --sat 25544 --lat 42.44 --lng -76.50 --seconds 120

    # Visible passes over the next 3 days in local time
    n2yo visualpasses --sat ISS --lat 42.44 --lng -76.50 --days 3 --tz America/New_York

    # Amateur radio satellites within 70 degrees of zenith
    n2yo above --lat 42.44 --lng -76.50 --radius 70 --category 18
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import click
import typer

from n2yo._catalog import get_all_categories, lookup_satellite_id
from n2yo._client import N2YOClient
from n2yo._errors import InvalidParameterError, N2YOError, RateLimitError
from n2yo._geo import calculate_distance
from n2yo.config import resolve_api_key

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = typer.Typer(
    name="n2yo",
    help="CLI for the N2YO satellite tracking API.",
    no_args_is_help=True,
    add_completion=False,
)

# ── Shared options ───────────────────────────────────────────────────────────

SatOpt = Annotated[str, typer.Option("--sat", help="Satellite name (e.g. ISS) or NORAD ID")]
LatOpt = Annotated[
    float, typer.Option("--lat", min=-90, max=90, help="Observer latitude (-90 to 90)")
]
LngOpt = Annotated[
    float, typer.Option("--lng", min=-180, max=180, help="Observer longitude (-180 to 180)")
]
AltOpt = Annotated[
    float, typer.Option("--alt", min=-1000, max=10000, help="Observer altitude in meters")
]
DaysOpt = Annotated[int, typer.Option("--days", min=1, max=10, help="Prediction window in days (1-10)")]
TzOpt = Annotated[str, typer.Option("--tz", help="Time zone for output (e.g. America/New_York)")]


def _make_client(api_key: str) -> N2YOClient:
    return N2YOClient(api_key)


def _api_key(ctx: typer.Context) -> str:
    key = resolve_api_key(ctx.obj.get("api_key") if ctx.obj else None)
    if key:
        return key
    key = typer.prompt("Enter your N2YO API key", hide_input=True, default="", show_default=False)
    if not key:
        typer.echo("Error: API key required", err=True)
        raise typer.Exit(code=1)
    logger.debug("Using API key from user prompt")
    return key


def _resolve_satellite(sat: str) -> int:
    """Return the NORAD ID for a common name or numeric string."""
    sat_id = lookup_satellite_id(sat)
    if sat_id is not None:
        return sat_id
    try:
        sat_id = int(sat)
    except ValueError:
        raise typer.BadParameter(
            f"Unknown satellite '{sat}' or invalid NORAD ID", param_hint="--sat"
        ) from None
    if sat_id <= 0:
        raise typer.BadParameter(f"Invalid NORAD ID '{sat}'", param_hint="--sat")
    return sat_id


def _run(ctx: typer.Context, action: Callable[[N2YOClient], Awaitable[T]]) -> T:
    """Run *action* with a fresh client, exiting 1 on any client error."""
    api_key = _api_key(ctx)

    async def _main() -> T:
        async with _make_client(api_key) as client:
            return await action(client)

    try:
        return asyncio.run(_main())
    except RateLimitError as e:
        typer.echo(f"Error: Rate limit exceeded ({e})", err=True)
    except InvalidParameterError as e:
        typer.echo(f"Error: Invalid parameter: {e}", err=True)
    except N2YOError as e:
        typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="N2YO API key (or set N2YO_API_KEY env var)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False,
) -> None:
    """Query satellite TLEs, positions, passes and objects overhead."""
    ctx.obj = {"api_key": api_key}
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


@app.command()
def tle(ctx: typer.Context, sat: SatOpt) -> None:
    """Retrieve the TLE for a satellite."""
    sat_id = _resolve_satellite(sat)
    result = _run(ctx, lambda client: client.get_tle(sat_id))
    typer.echo(f"TLE for {result.info.satname} (NORAD {result.info.satid})")
    typer.echo(result.tle.replace("\r\n", "\n"))


@app.command()
def positions(
    ctx: typer.Context,
    sat: SatOpt,
    lat: LatOpt,
    lng: LngOpt,
    alt: AltOpt = 0.0,
    seconds: Annotated[
        int, typer.Option("--seconds", min=1, max=300, help="Seconds of prediction (1-300)")
    ] = 60,
) -> None:
    """Predict future satellite positions."""
    sat_id = _resolve_satellite(sat)

    async def _action(client: N2YOClient):
        result = await client.get_positions(sat_id, lat, lng, alt, seconds)
        rows = [(client.utc_to_local(p.timestamp, "UTC"), p) for p in result.positions]
        return result, rows

    result, rows = _run(ctx, _action)
    if not rows:
        typer.echo("No positions returned for the specified parameters.")
        return
    typer.echo(f"Positions for {result.info.satname} (NORAD {result.info.satid}):")
    for when, p in rows:
        distance = calculate_distance(lat, lng, p.satlatitude, p.satlongitude)
        typer.echo(
            f"Time: {when}, Lat: {p.satlatitude:.2f}, Lng: {p.satlongitude:.2f}, "
            f"Alt: {p.sataltitude:.2f} km, Distance: {distance:.2f} km"
        )


@app.command()
def visualpasses(
    ctx: typer.Context,
    sat: SatOpt,
    lat: LatOpt,
    lng: LngOpt,
    alt: AltOpt = 0.0,
    days: DaysOpt = 1,
    min_visibility: Annotated[
        float,
        typer.Option(
            "--min-visibility",
            click_type=click.FloatRange(min=0, min_open=True),
            help="Minimum pass duration in seconds",
        ),
    ] = 300.0,
    tz: TzOpt = "UTC",
) -> None:
    """Predict visual passes for a satellite."""
    sat_id = _resolve_satellite(sat)

    async def _action(client: N2YOClient):
        result = await client.get_visual_passes(sat_id, lat, lng, alt, days, min_visibility)
        rows = [
            (client.utc_to_local(p.start_utc, tz), client.utc_to_local(p.end_utc, tz), p)
            for p in result.passes
        ]
        return result, rows

    result, rows = _run(ctx, _action)
    typer.echo(f"Visual passes for {result.info.satname} (NORAD {result.info.satid}):")
    if not rows:
        typer.echo("No visual passes found for the specified parameters.")
        return
    for start, end, p in rows:
        mag = p.mag if p.mag is not None else "N/A"
        typer.echo(
            f"Start: {start} {tz}, End: {end}, Duration: {p.duration}s, "
            f"Max Elevation: {p.max_el}°, Magnitude: {mag}"
        )


@app.command()
def radiopasses(
    ctx: typer.Context,
    sat: SatOpt,
    lat: LatOpt,
    lng: LngOpt,
    alt: AltOpt = 0.0,
    days: DaysOpt = 1,
    min_elevation: Annotated[
        float, typer.Option("--min-elevation", min=0, help="Minimum max elevation in degrees")
    ] = 0.0,
    tz: TzOpt = "UTC",
) -> None:
    """Predict radio passes for a satellite."""
    sat_id = _resolve_satellite(sat)

    async def _action(client: N2YOClient):
        result = await client.get_radio_passes(sat_id, lat, lng, alt, days, min_elevation)
        rows = [
            (client.utc_to_local(p.start_utc, tz), client.utc_to_local(p.end_utc, tz), p)
            for p in result.passes
        ]
        return result, rows

    result, rows = _run(ctx, _action)
    typer.echo(f"Radio passes for {result.info.satname} (NORAD {result.info.satid}):")
    if not rows:
        typer.echo("No radio passes found for the specified parameters.")
        return
    for start, end, p in rows:
        typer.echo(f"Start: {start} {tz}, End: {end}, Max Elevation: {p.max_el}°")


@app.command()
def above(
    ctx: typer.Context,
    lat: LatOpt,
    lng: LngOpt,
    alt: AltOpt = 0.0,
    radius: Annotated[
        float, typer.Option("--radius", min=0, max=90, help="Search radius in degrees (0-90)")
    ] = 90.0,
    category: Annotated[
        int, typer.Option("--category", min=0, max=56, help="Satellite category ID (0 for all)")
    ] = 1,
) -> None:
    """List satellites above a location."""
    result = _run(ctx, lambda client: client.get_above(lat, lng, alt, radius, category))
    typer.echo(f"Satellites above (Category: {result.info.category or 'All'}):")
    if not result.above:
        typer.echo("No satellites found above the specified location.")
        return
    for s in result.above:
        distance = calculate_distance(lat, lng, s.satlat, s.satlng)
        typer.echo(
            f"{s.satname} (NORAD {s.satid}): Lat: {s.satlat:.2f}, Lng: {s.satlng:.2f}, "
            f"Alt: {s.satalt:.2f} km, Distance: {distance:.2f} km"
        )


@app.command()
def categories() -> None:
    """List satellite category IDs accepted by 'above'."""
    for cat_id, name in get_all_categories():
        typer.echo(f"{cat_id:>3}  {name}")


if __name__ == "__main__":
    app()
