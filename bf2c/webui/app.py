from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from pydantic import BaseModel, Field, validator

from bf2c.generator import EofPolicy, GeneratorOptions
from bf2c.interpreter import DEFAULT_MAX_STEPS, BrainfuckInterpreter, StepLimitExceeded, TapeBoundsError
from bf2c.transpiler import BrainfuckToCTranspiler, Malformed
from bf2c.validator import BracketError

logger = logging.getLogger(__name__)


# one character per byte, matching RunResponse.output
def _string_to_input_bytes(data: str) -> List[int]:
    return list(data.encode("latin-1"))


def _error_to_dict(error: BracketError) -> dict:
    return {
        "ok": False,
        "kind": error.kind.value,
        "message": str(error),
        "index": error.index,
        "offset": error.offset,
    }


class TranspileRequest(BaseModel):
    code: str
    tape_size: Optional[int] = Field(default=None, ge=30000)
    eof_policy: Optional[str] = None

    @validator("eof_policy")
    def validate_eof_policy(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        normalized = value.lower()
        allowed = {policy.value for policy in EofPolicy}
        if normalized not in allowed:
            raise ValueError(f"eof_policy must be one of {sorted(allowed)}")
        return normalized


class TranspileResponse(BaseModel):
    ok: bool
    code: str
    command_count: int


class RunRequest(BaseModel):
    code: str
    input: str = ""
    max_steps: int = Field(default=DEFAULT_MAX_STEPS, ge=1)

    @validator("input")
    def validate_input(cls, value: str) -> str:
        try:
            value.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ValueError("input must only contain characters U+0000 to U+00FF") from exc
        return value


class RunResponse(BaseModel):
    output: str


def create_app(transpiler: Optional[BrainfuckToCTranspiler] = None) -> FastAPI:
    app = FastAPI(title="bf2c API", version="0.1.0")
    app.state.transpiler = transpiler or BrainfuckToCTranspiler()

    def _transpiler_for(request: Request, payload: TranspileRequest) -> BrainfuckToCTranspiler:
        base: BrainfuckToCTranspiler = request.app.state.transpiler
        if payload.tape_size is None and payload.eof_policy is None:
            return base
        options = GeneratorOptions(
            tape_size=payload.tape_size or base.options.tape_size,
            indent=base.options.indent,
            eof_policy=payload.eof_policy or base.options.eof_policy,
            bounds_exit_status=base.options.bounds_exit_status,
        )
        return BrainfuckToCTranspiler(options)

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/api/transpile", response_model=TranspileResponse)
    def transpile_source(payload: TranspileRequest, request: Request) -> TranspileResponse:
        result = _transpiler_for(request, payload).transpile(payload.code)
        if isinstance(result, Malformed):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_error_to_dict(result.error),
            )
        return TranspileResponse(ok=True, code=result.code, command_count=len(result.commands))

    @app.post("/api/run", response_model=RunResponse)
    def run_source(payload: RunRequest, request: Request) -> RunResponse:
        transpiler: BrainfuckToCTranspiler = request.app.state.transpiler
        result = transpiler.transpile(payload.code)
        if isinstance(result, Malformed):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_error_to_dict(result.error),
            )

        interpreter = BrainfuckInterpreter(
            tape_size=transpiler.options.tape_size,
            eof_policy=transpiler.options.eof_policy,
        )
        try:
            output = interpreter.run(
                result.commands,
                input_data=_string_to_input_bytes(payload.input),
                max_steps=payload.max_steps,
            )
        except (TapeBoundsError, StepLimitExceeded) as exc:
            logger.info("run aborted: %s", exc)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        return RunResponse(output=output.decode("latin-1"))

    return app


__all__ = ["create_app"]
