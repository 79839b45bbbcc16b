"""Named remote procedures over HTTP.

Queries are served on ``GET {prefix}/{name}?input=<json>`` and mutations on
``POST {prefix}/{name}`` with a JSON body. Every response is either an
:class:`RpcResult` or an :class:`ErrorEnvelope`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from prompt_curator.core.exceptions import StorageError, ValidationError
from prompt_curator.core.logging import LogContext, build_log_event
from prompt_curator.database.db import get_db
from prompt_curator.schemas import wire
from prompt_curator.schemas.common import ErrorEnvelope, RpcResult
from prompt_curator.services.prompt_service import PromptService

logger = logging.getLogger(__name__)

QUERY = "query"
MUTATION = "mutation"

Handler = Callable[[PromptService, Any], Any]


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: str
    handler: Handler
    input_model: type[BaseModel] | None = None


class RpcError(Exception):
    """A failed call, already mapped onto an error code and HTTP status."""

    def __init__(
        self,
        error_code: str,
        detail: str,
        status_code: int,
        issues: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(detail)
        self.error_code = error_code
        self.detail = detail
        self.status_code = status_code
        self.issues = issues or []


class ProcedureRegistry:
    """Maps procedure names onto validated handler calls."""

    def __init__(self) -> None:
        self._procedures: dict[str, Procedure] = {}

    def _register(self, name: str, kind: str, input_model: type[BaseModel] | None) -> Callable[[Handler], Handler]:
        def inner(handler: Handler) -> Handler:
            if name in self._procedures:
                raise ValueError(f"Procedure already registered: {name}")
            self._procedures[name] = Procedure(name=name, kind=kind, handler=handler, input_model=input_model)
            return handler

        return inner

    def query(self, name: str, input_model: type[BaseModel] | None = None) -> Callable[[Handler], Handler]:
        return self._register(name, QUERY, input_model)

    def mutation(self, name: str, input_model: type[BaseModel] | None = None) -> Callable[[Handler], Handler]:
        return self._register(name, MUTATION, input_model)

    @property
    def names(self) -> list[str]:
        return sorted(self._procedures)

    def get(self, name: str) -> Procedure | None:
        return self._procedures.get(name)

    def resolve(self, name: str, kind: str) -> Procedure:
        procedure = self.get(name)
        if procedure is None:
            raise RpcError("NOT_FOUND", f"No procedure named '{name}'.", status.HTTP_404_NOT_FOUND)
        if procedure.kind != kind:
            method = "GET" if procedure.kind == QUERY else "POST"
            raise RpcError(
                "METHOD_NOT_SUPPORTED",
                f"'{name}' is a {procedure.kind}; call it with {method}.",
                status.HTTP_405_METHOD_NOT_ALLOWED,
            )
        return procedure

    def call(self, procedure: Procedure, payload: Any, session: Session) -> Any:
        """Validate ``payload`` then run the handler; returns a JSON-safe value."""
        context = LogContext(procedure=procedure.name, kind=procedure.kind)
        started = time.perf_counter()
        try:
            validated = wire.decode(procedure.input_model, payload) if procedure.input_model else None
            context = replace(context, prompt_id=getattr(validated, "id", None))
            result = procedure.handler(PromptService(db=session), validated)
        except ValidationError as exc:
            logger.info("rpc.call.rejected", extra=build_log_event("rpc.call.rejected", context, detail=str(exc)))
            raise RpcError("BAD_REQUEST", str(exc), status.HTTP_400_BAD_REQUEST, issues=exc.issues) from exc
        except StorageError as exc:
            logger.error("rpc.call.failed", extra=build_log_event("rpc.call.failed", context, error=str(exc)))
            raise RpcError(
                "INTERNAL_SERVER_ERROR",
                "Storage operation failed.",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            ) from exc

        logger.info(
            "rpc.call.completed",
            extra=build_log_event(
                "rpc.call.completed",
                context,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            ),
        )
        return wire.encode(result)


def _error_response(procedure: str, exc: RpcError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error_code=exc.error_code,
        detail=exc.detail,
        procedure=procedure,
        issues=exc.issues,
    )
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump())


def _dispatch(registry: ProcedureRegistry, name: str, kind: str, raw: str | bytes | None, session: Session) -> JSONResponse:
    try:
        procedure = registry.resolve(name, kind)
        payload = wire.parse_json(raw)
        data = registry.call(procedure, payload, session)
    except ValidationError as exc:
        return _error_response(name, RpcError("BAD_REQUEST", str(exc), status.HTTP_400_BAD_REQUEST, exc.issues))
    except RpcError as exc:
        return _error_response(name, exc)
    except Exception:
        logger.exception("rpc.call.crashed", extra={"event": "rpc.call.crashed", "procedure": name})
        return _error_response(
            name,
            RpcError("INTERNAL_SERVER_ERROR", "Internal server error.", status.HTTP_500_INTERNAL_SERVER_ERROR),
        )
    return JSONResponse(content=RpcResult(data=data).model_dump())


def build_rpc_router(registry: ProcedureRegistry, prefix: str) -> APIRouter:
    """Expose every registered procedure under ``prefix``."""
    router = APIRouter(prefix=prefix, tags=["rpc"])

    @router.get("/{procedure}")
    def call_query(
        procedure: str,
        raw_input: str | None = Query(default=None, alias="input"),
        session: Session = Depends(get_db),
    ) -> JSONResponse:
        return _dispatch(registry, procedure, QUERY, raw_input, session)

    @router.post("/{procedure}")
    async def call_mutation(
        procedure: str,
        request: Request,
        session: Session = Depends(get_db),
    ) -> JSONResponse:
        body = await request.body()
        return await run_in_threadpool(_dispatch, registry, procedure, MUTATION, body, session)

    return router
