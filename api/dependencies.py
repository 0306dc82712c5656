"""
dependencies.py — FastAPI Dependency Injection.
Each dependency returns its adapter from Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.equation_parser.precedence_parser import PrecedenceEquationParser
from config import Settings


def get_equation_parser(request: Request) -> PrecedenceEquationParser:
    return request.app.state.equation_parser


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
