"""
Router: POST /evaluate
Stateless round: formula + ordered binding lines → result.
Each request owns its bindings context.
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_equation_parser, get_settings
from api.schemas import EvaluateRequest, EvaluateResponse
from session import evaluate_once

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse)
async def evaluate_formula(
    body: EvaluateRequest,
    parser=Depends(get_equation_parser),
    settings=Depends(get_settings),
) -> EvaluateResponse:
    outcome = evaluate_once(body.text, body.bindings, parser=parser, settings=settings)
    return EvaluateResponse(
        formula=str(outcome.formula),
        bindings={name: str(term) for name, term in outcome.bindings.items()},
        result=str(outcome.result),
        result_term=outcome.result,
    )
