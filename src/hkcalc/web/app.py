"""
HTTP boundary: landing page plus the assignment endpoint.
"""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel

from hkcalc.inputs.parser import ParseError, parse
from hkcalc.models.types import UnknownVariant, Variant
from hkcalc.rules.engine import evaluate
from hkcalc.rules.tables import DEFAULT_RULES, RuleSet

logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).resolve().parent / "static" / "index.html"


class AssignmentRequest(BaseModel):
    input: str
    substitution: str


def create_app(rules: RuleSet = DEFAULT_RULES) -> FastAPI:
    app = FastAPI(title="hkcalc", version="0.1.0")

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        return HTMLResponse(INDEX_HTML.read_text(encoding="utf-8"))

    @app.post("/api/assignment", response_class=PlainTextResponse)
    def assignment(req: AssignmentRequest) -> PlainTextResponse:
        try:
            variant = Variant.parse(req.substitution)
        except UnknownVariant as e:
            logger.warning("Rejected request: %s", e)
            raise HTTPException(status_code=404, detail=str(e))

        try:
            inp = parse(req.input)
        except ParseError as e:
            logger.warning("Rejected request: %s", e)
            raise HTTPException(status_code=400, detail=str(e))

        out = evaluate(variant, inp, rules)
        if out is None:
            logger.warning(
                "Unclassifiable input for %s: (%s, %s, %s)",
                variant.value, inp.a, inp.b, inp.c,
            )
            raise HTTPException(
                status_code=422,
                detail="Input matches no category for this substitution",
            )

        return PlainTextResponse(str(out))

    return app


app = create_app()
