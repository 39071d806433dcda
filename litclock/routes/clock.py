"""Clock endpoints.

GET /                       - HTML quote for the current time
GET /{hour}/{minute}        - HTML quote for a given time
GET /json                   - JSON quote for the current time
GET /json/{hour}/{minute}   - JSON quote for a given time

Routers are thin: selection lives in services. Hours and minutes outside the
clock face are normalized by the lookup (25:75 reads as 1:15).
"""

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import HTMLResponse

from litclock.schemas import QuoteResponse
from litclock.services.clock import ClockState
from litclock.services.render import render_html

router = APIRouter()


class ClockNotReady(RuntimeError):
    """Raised when a request arrives before the lifespan built the state."""


def get_clock_state(request: Request) -> ClockState:
    """Dependency returning the shared read-only clock state."""
    state = getattr(request.app.state, "clock", None)
    if state is None:
        raise ClockNotReady("Quote index not loaded")
    return state


def _html(state: ClockState, hour: int, minute: int) -> HTMLResponse:
    quote = state.lookup.lookup(hour, minute)
    return HTMLResponse(render_html(quote, hour, minute, state.template))


@router.get("/", response_class=HTMLResponse)
async def html_clock(state: ClockState = Depends(get_clock_state)) -> HTMLResponse:
    """Quote for the current wall-clock time as HTML."""
    hour, minute = state.now()
    return _html(state, hour, minute)


@router.get("/json", response_model=QuoteResponse)
async def json_clock(state: ClockState = Depends(get_clock_state)) -> QuoteResponse:
    """Quote for the current wall-clock time as JSON."""
    hour, minute = state.now()
    return QuoteResponse.from_quote(state.lookup.lookup(hour, minute))


@router.get("/json/{hour}/{minute}", response_model=QuoteResponse)
async def custom_json_clock(
    hour: int = Path(ge=0, description="Hour, any non-negative value (normalized to 1-12)"),
    minute: int = Path(ge=0, description="Minute, any non-negative value (normalized to 0-59)"),
    state: ClockState = Depends(get_clock_state),
) -> QuoteResponse:
    """Quote for an explicit time as JSON."""
    return QuoteResponse.from_quote(state.lookup.lookup(hour, minute))


@router.get("/{hour}/{minute}", response_class=HTMLResponse)
async def custom_html_clock(
    hour: int = Path(ge=0, description="Hour, any non-negative value (normalized to 1-12)"),
    minute: int = Path(ge=0, description="Minute, any non-negative value (normalized to 0-59)"),
    state: ClockState = Depends(get_clock_state),
) -> HTMLResponse:
    """Quote for an explicit time as HTML."""
    return _html(state, hour, minute)
