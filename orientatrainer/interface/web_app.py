"""Mini README: FastAPI-powered web service for OrientaTrainer.

Structure:
    * create_application - application factory wiring routes and templates.
    * Session state - a single ``TrainerState`` replaced after each action.

The service exposes the beacon store, interprets map clicks, generates
practice routes (optionally from a place name resolved by the geocoder) and
renders a printable route sheet. The browser map widget consumes the marker
and framing payloads returned here.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from ..beacons import BeaconStore, JsonFileBackend
from ..configuration import OrientaTrainerSettings, get_settings
from ..errors import NoCandidatesError, StorageError, ValidationError
from ..geocoding import GeocoderClient, NominatimGeocoder, resolve_origin
from ..logging_utils import configure_root_logger, get_logger, level_for_environment
from ..route_planning import RoutePlanner, compute_framing
from ..route_planning.builder import RandomSource
from ..state import TrainerState, apply_map_click, generate_plan
from ..utils.geodesy import Coordinate
from ..utils.markers import MapClickMode, beacon_markers, parse_click, start_marker

LOGGER = get_logger(__name__)


def create_application(
    store: Optional[BeaconStore] = None,
    geocoder: Optional[GeocoderClient] = None,
    settings: Optional[OrientaTrainerSettings] = None,
    rng: Optional[RandomSource] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    app = FastAPI(title="OrientaTrainer", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    if store is None:
        store = BeaconStore(JsonFileBackend(settings.data_directory), key=settings.beacon_storage_key)
    if geocoder is None:
        geocoder = NominatimGeocoder(
            settings.geocoder_url,
            user_agent=settings.geocoder_user_agent,
            timeout=settings.geocoder_timeout_seconds,
        )
    default_center = Coordinate(lat=settings.default_center_lat, lng=settings.default_center_lng)
    planner = RoutePlanner(
        store,
        catchment_radius=settings.catchment_radius_m,
        default_center=default_center,
        default_zoom=settings.default_zoom,
        rng=rng,
    )

    session: Dict[str, TrainerState] = {"state": TrainerState()}

    def _beacon_payload() -> Dict[str, Any]:
        try:
            beacons = store.list()
        except StorageError as error:
            raise HTTPException(status_code=500, detail=str(error)) from error
        framing = compute_framing(beacons, default_center=default_center, default_zoom=settings.default_zoom)
        return {
            "count": len(beacons),
            "beacons": [beacon.as_dict() for beacon in beacons],
            "markers": beacon_markers(beacons),
            "start_marker": start_marker(session["state"].origin),
            "framing": framing.as_dict(),
        }

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/beacons")
    async def list_beacons() -> JSONResponse:
        """Return every saved beacon with markers and map framing."""

        payload = _beacon_payload()
        LOGGER.debug("Returning %s beacons", payload["count"])
        return JSONResponse(payload)

    @app.post("/beacons")
    async def add_beacon(lat: float = Form(...), lng: float = Form(...)) -> JSONResponse:
        """Save a beacon at the given coordinate."""

        try:
            beacon = store.add(Coordinate.validated(lat, lng))
        except ValidationError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        return JSONResponse(beacon.as_dict(), status_code=201)

    @app.get("/beacons/{beacon_id}")
    async def get_beacon(beacon_id: str) -> JSONResponse:
        """Return a single beacon, or 404 when it is not stored."""

        try:
            beacon = store.get(beacon_id)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except StorageError as error:
            raise HTTPException(status_code=500, detail=str(error)) from error
        return JSONResponse(beacon.as_dict())

    @app.delete("/beacons/{beacon_id}")
    async def delete_beacon(beacon_id: str) -> JSONResponse:
        """Delete a beacon; unknown identifiers are accepted silently."""

        store.remove(beacon_id)
        return JSONResponse({"removed": beacon_id, "count": len(store.list())})

    @app.post("/map-click")
    async def map_click(
        lat: float = Form(...),
        lng: float = Form(...),
        mode: str = Form(MapClickMode.RECORD_BEACON.value),
    ) -> JSONResponse:
        """Interpret a click on the map as a new beacon or a new route origin."""

        try:
            click_mode = MapClickMode.from_str(mode)
            position = parse_click({"lat": lat, "lng": lng})
        except ValueError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        state, beacon = apply_map_click(session["state"], store, position, click_mode)
        session["state"] = state
        LOGGER.info("Map click handled as %s", click_mode.value)
        return JSONResponse(
            {
                "mode": click_mode.value,
                "beacon": beacon.as_dict() if beacon else None,
                "origin": state.origin.as_dict() if state.origin else None,
                "notices": list(state.notices),
            }
        )

    @app.post("/training")
    async def generate_training(
        max_hop_distance: float = Form(...),
        desired_count: int = Form(...),
        lat: Optional[float] = Form(None),
        lng: Optional[float] = Form(None),
        location: Optional[str] = Form(None),
        seed: Optional[int] = Form(None),
    ) -> JSONResponse:
        """Generate a practice route from a place name, a coordinate or the current origin."""

        origin: Optional[Coordinate] = None
        label: Optional[str] = None
        notices = []
        try:
            if location and location.strip():
                resolved = await resolve_origin(
                    geocoder,
                    location,
                    fallback=default_center,
                    timeout=settings.geocoder_timeout_seconds,
                )
                origin, label = resolved.position, resolved.label
                if resolved.notice:
                    notices.append(resolved.notice)
            elif lat is not None or lng is not None:
                origin = Coordinate.validated(lat, lng)

            state = generate_plan(
                session["state"],
                planner,
                max_hop_distance=max_hop_distance,
                desired_count=desired_count,
                origin=origin,
                location_label=label,
                extra_notices=tuple(notices),
                rng=random.Random(seed) if seed is not None else None,
            )
        except ValidationError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        except NoCandidatesError as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        except StorageError as error:
            raise HTTPException(status_code=500, detail=str(error)) from error

        plan = state.plan
        if plan is None:
            raise HTTPException(status_code=500, detail="Route generation produced no plan")
        session["state"] = state
        return JSONResponse(plan.as_dict())

    @app.get("/training")
    async def current_training() -> JSONResponse:
        """Return the most recently generated plan."""

        plan = session["state"].plan
        if plan is None:
            raise HTTPException(status_code=404, detail="No training has been generated yet")
        return JSONResponse(plan.as_dict())

    @app.post("/training/clear")
    async def clear_training() -> JSONResponse:
        """Discard the generated plan while keeping the chosen origin."""

        session["state"] = session["state"].cleared()
        return JSONResponse({"notices": list(session["state"].notices)})

    @app.get("/training/print", response_class=HTMLResponse)
    async def print_training(request: Request) -> HTMLResponse:
        """Render the current plan as a printable route sheet."""

        plan = session["state"].plan
        if plan is None:
            raise HTTPException(status_code=404, detail="No training has been generated yet")
        return templates.TemplateResponse(
            request,
            "route_sheet.html",
            {"sheet": plan.print_sheet(), "framing": plan.framing.as_dict()},
        )

    return app
