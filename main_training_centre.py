"""Mini README: Entry point CLI for OrientaTrainer.

This script exposes a Typer CLI to launch the FastAPI service and to manage
beacons or generate practice routes straight from a terminal. Settings come
from ``ORIENTATRAINER_*`` environment variables when available.
"""

from __future__ import annotations

import asyncio
import random
from typing import Optional

import typer
import uvicorn

from orientatrainer.beacons import BeaconStore, JsonFileBackend
from orientatrainer.configuration import get_settings
from orientatrainer.errors import NoCandidatesError, StorageError, ValidationError
from orientatrainer.geocoding import NominatimGeocoder, resolve_origin
from orientatrainer.logging_utils import configure_root_logger, level_for_environment
from orientatrainer.route_planning import RoutePlanner
from orientatrainer.utils.geodesy import Coordinate

cli = typer.Typer(help="Record beacons and generate orienteering practice routes.")


@cli.callback()
def main() -> None:
    """Apply the log level for the configured environment before any command."""

    configure_root_logger(level_for_environment(get_settings().environment))


def _store() -> BeaconStore:
    settings = get_settings()
    return BeaconStore(JsonFileBackend(settings.data_directory), key=settings.beacon_storage_key)


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port

    # Browsers cannot open 0.0.0.0, so point operators at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting OrientaTrainer on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "orientatrainer.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command("list-beacons")
def list_beacons() -> None:
    """Print saved beacons in the order they were added."""

    try:
        beacons = _store().list()
    except StorageError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    if not beacons:
        typer.echo("No beacons saved yet.")
        return
    for beacon in beacons:
        typer.echo(
            f"{beacon.id}\t{beacon.name}\t{beacon.lat:.6f}\t{beacon.lng:.6f}\t{beacon.date_added.isoformat()}"
        )


@cli.command("add-beacon")
def add_beacon(
    lat: float = typer.Argument(..., help="Latitude in decimal degrees."),
    lng: float = typer.Argument(..., help="Longitude in decimal degrees."),
) -> None:
    """Save a beacon at LAT LNG."""

    try:
        beacon = _store().add(Coordinate.validated(lat, lng))
    except ValidationError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=2) from error
    typer.echo(f"Added {beacon.name} ({beacon.id})")


@cli.command("remove-beacon")
def remove_beacon(beacon_id: str = typer.Argument(..., help="Identifier of the beacon.")) -> None:
    """Delete a beacon by id; unknown ids are ignored."""

    _store().remove(beacon_id)
    typer.echo(f"Removed {beacon_id}")


@cli.command()
def generate(
    max_hop: float = typer.Option(..., "--max-hop", help="Maximum distance between consecutive beacons in metres."),
    count: int = typer.Option(5, help="Number of beacons wanted in the route."),
    lat: Optional[float] = typer.Option(None, help="Origin latitude."),
    lng: Optional[float] = typer.Option(None, help="Origin longitude."),
    location: Optional[str] = typer.Option(None, help="Place name to geocode as the origin."),
    seed: Optional[int] = typer.Option(None, help="Seed for a reproducible route."),
) -> None:
    """Generate a practice route from saved beacons."""

    settings = get_settings()
    fallback = Coordinate(lat=settings.default_center_lat, lng=settings.default_center_lng)
    planner = RoutePlanner(
        _store(),
        catchment_radius=settings.catchment_radius_m,
        default_center=fallback,
        default_zoom=settings.default_zoom,
    )

    label: Optional[str] = None
    try:
        if location:
            geocoder = NominatimGeocoder(
                settings.geocoder_url,
                user_agent=settings.geocoder_user_agent,
                timeout=settings.geocoder_timeout_seconds,
            )
            resolved = asyncio.run(
                resolve_origin(
                    geocoder, location, fallback=fallback, timeout=settings.geocoder_timeout_seconds
                )
            )
            if resolved.notice:
                typer.echo(f"Note: {resolved.notice}")
            origin: Optional[Coordinate] = resolved.position
            label = resolved.label
        elif lat is not None or lng is not None:
            origin = Coordinate.validated(lat, lng)
        else:
            origin = None
        plan = planner.plan(
            planner.request(origin, max_hop, count),
            rng=random.Random(seed) if seed is not None else None,
            location_label=label,
        )
    except ValidationError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=2) from error
    except (NoCandidatesError, StorageError) as error:
        typer.echo(f"Warning: {error}", err=True)
        raise typer.Exit(code=1) from error

    sheet = plan.print_sheet()
    typer.echo(
        f"Route with {sheet['beacon_count']} beacons, {sheet['total_distance_m']:.0f} m total"
        f" (max hop {max_hop:g} m, generated {sheet['generated_on']})"
    )
    for entry in sheet["beacons"]:
        hop = entry["hop_from_previous_m"]
        hop_text = "start" if hop is None else f"+{hop:.0f} m"
        typer.echo(f"{entry['number']:>2}. {entry['name']}\t{entry['lat']:.6f}\t{entry['lng']:.6f}\t{hop_text}")
    for notice in plan.notices:
        typer.echo(f"Note: {notice}")


if __name__ == "__main__":
    cli()
