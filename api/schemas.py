"""
schemas.py — FastAPI request/response models.
Kept apart from contracts.py so the API can evolve independently.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from contracts import Term


# ─────────────────────────── /parse ──────────────────────────────

class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    equation: str                 # rendered `left = right`
    left: Optional[Term] = None
    right: Optional[Term] = None
    formula: str                  # rearranged and folded, rendered
    formula_term: Term


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str
    bindings: list[str] = Field(default_factory=list)  # "name = expr", applied in order


class EvaluateResponse(BaseModel):
    formula: str
    bindings: dict[str, str]
    result: str
    result_term: Term


# ─────────────────────────── errors / health ─────────────────────

class ErrorResponse(BaseModel):
    detail: str
    code: str


class HealthResponse(BaseModel):
    status: str
    version: str
