"""Formula evaluation endpoint."""

from fastapi import APIRouter

from cabinet_engine.domain.formula import evaluate_formula
from cabinet_engine.web.schemas.requests import EvaluateRequestSchema
from cabinet_engine.web.schemas.responses import EvaluateResponseSchema

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponseSchema)
async def evaluate(request: EvaluateRequestSchema) -> EvaluateResponseSchema:
    """Evaluate a formula against the given variables.

    A failing formula is not an HTTP error: the response has ``ok`` false,
    ``value`` null and the failure in ``error``.
    """
    result = evaluate_formula(request.formula, request.variables)
    return EvaluateResponseSchema(
        formula=result.formula,
        ok=result.ok,
        value=result.value if result.ok else None,
        error=result.error,
    )
