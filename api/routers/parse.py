"""
Router: POST /parse
Parses one formula and returns the equation plus the compiled formula.
"""
from fastapi import APIRouter, Depends

from adapters.evaluator.formula import Evaluator
from api.dependencies import get_equation_parser, get_settings
from api.schemas import ParseRequest, ParseResponse

router = APIRouter(prefix="/parse", tags=["parse"])


@router.post("", response_model=ParseResponse)
async def parse_formula(
    body: ParseRequest,
    parser=Depends(get_equation_parser),
    settings=Depends(get_settings),
) -> ParseResponse:
    equation = parser.parse(body.text)
    evaluator = Evaluator.from_equation(equation, settings.decimal_precision)
    return ParseResponse(
        equation=str(equation),
        left=equation.left,
        right=equation.right,
        formula=str(evaluator),
        formula_term=evaluator.formula,
    )
