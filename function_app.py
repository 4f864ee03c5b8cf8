"""Azure Functions entry point — Land Overlap Dashboard.

Registers the HTTP functions that feed the dashboard front end using
the Python v2 programming model.

All business logic lives in the land_overlap package. This file is purely
the wiring layer between Azure Functions bindings and application code.
"""

from __future__ import annotations

import json
import logging

import azure.functions as func

from land_overlap.core.config import DashboardConfig
from land_overlap.core.exceptions import OverlapError
from land_overlap.orchestrators.dashboard import (
    DashboardSession,
    parse_selection,
    recompute,
    validate_selection,
)

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger("land_overlap.function_app")

_session: DashboardSession | None = None


def _get_session() -> DashboardSession:
    """Build the worker-wide session once; sources are static files."""
    global _session  # noqa: PLW0603
    if _session is None:
        session = DashboardSession(DashboardConfig.from_env())
        session.load_sources()
        _session = session
    return _session


def _json_response(body: object, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        mimetype="application/json",
    )


def _startup_error_response(exc: OverlapError) -> func.HttpResponse:
    """Structured 503 (retryable) or 500 for a session that could not be built."""
    logger.error("Dashboard session unavailable | code=%s | %s", exc.code, exc)
    return _json_response(exc.to_error_dict(), status_code=503 if exc.retryable else 500)


# ---------------------------------------------------------------------------
# HTTP: dashboard state for a region selection
# ---------------------------------------------------------------------------


@app.function_name("dashboard")
@app.route(route="dashboard", methods=["GET"])
def dashboard(req: func.HttpRequest) -> func.HttpResponse:
    """Return filtered layers, intersections, areas and chart tables as JSON.

    Query parameters:
        regions: Comma-separated region codes (e.g. ``AM,PA``).  Omitted
            or blank means no filter.
    """
    try:
        session = _get_session()
    except OverlapError as exc:
        return _startup_error_response(exc)
    config = session.config

    try:
        selection = validate_selection(
            parse_selection(req.params.get("regions")),
            config.known_region_codes,
        )
    except OverlapError as exc:
        logger.warning("Rejected dashboard request: %s", exc)
        return _json_response(exc.to_error_dict(), status_code=400)

    # Recompute per request; the shared session selection is left untouched.
    state = recompute(
        session.parcels,
        session.territories,
        selection,
        config=config,
    )
    return _json_response(state.to_dict())


@app.function_name("regions")
@app.route(route="regions", methods=["GET"])
def regions(req: func.HttpRequest) -> func.HttpResponse:  # noqa: ARG001
    """Return the known region codes offered as filter checkboxes."""
    try:
        session = _get_session()
    except OverlapError as exc:
        return _startup_error_response(exc)
    return _json_response({"regions": list(session.config.known_region_codes)})
