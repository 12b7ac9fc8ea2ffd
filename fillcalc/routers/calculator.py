"""
Calculator API — the form state travels in the same query parameters the
page keeps in its URL, so a shared link can be computed server-side.

GET  /api/calculate  — hydrate from query parameters, calculate
POST /api/calculate  — calculate a FormState body
GET  /api/state      — hydrated FormState + canonical query string
POST /api/share      — canonical query string + share URL for a FormState
"""

from fastapi import APIRouter, Request

from .. import calculator
from ..schemas import CalculationResponse, FormState, ShareResponse, StateResponse
from ..url_sync import hydrate_state, serialize_state, share_url

router = APIRouter(tags=["calculator"])


def _respond(state: FormState) -> CalculationResponse:
    outcome = calculator.calculate(state)
    formatted = None
    if outcome.result is not None:
        formatted = calculator.format_result(
            outcome.result, has_density=bool(state.density.strip())
        )
    return CalculationResponse(
        state=state,
        query=serialize_state(state),
        result=outcome.result,
        formatted=formatted,
        errors=outcome.errors,
        warnings=outcome.warnings,
    )


@router.get("/calculate", response_model=CalculationResponse)
def calculate_from_link(request: Request):
    """Validation problems come back as errors in the body, not HTTP errors."""
    return _respond(hydrate_state(str(request.query_params)))


@router.post("/calculate", response_model=CalculationResponse)
def calculate_form(state: FormState):
    return _respond(state)


@router.get("/state", response_model=StateResponse)
def read_state(request: Request):
    state = hydrate_state(str(request.query_params))
    return StateResponse(state=state, query=serialize_state(state))


@router.post("/share", response_model=ShareResponse)
def share(state: FormState):
    return ShareResponse(query=serialize_state(state), url=share_url(state))
