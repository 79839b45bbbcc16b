"""HTTP proxy for the prompt procedures."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

from prompt_curator.core.config import get_config
from prompt_curator.core.exceptions import RemoteCallError
from prompt_curator.schemas import wire
from prompt_curator.schemas.prompts import (
    CreatePromptInput,
    DeletePromptInput,
    GetPromptInput,
    HealthStatus,
    Prompt,
    UpdatePromptInput,
)

logger = logging.getLogger(__name__)


class PromptCuratorClient:
    """Calls the RPC server and decodes its results into contract models.

    Every failure (transport, HTTP status, error envelope or an unreadable
    body) surfaces as :class:`RemoteCallError`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        cfg = get_config()
        self.base_url = (base_url or cfg.API_BASE_URL).rstrip("/")
        self.timeout = timeout or cfg.CLIENT_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _query(self, procedure: str, payload: Any = None) -> Any:
        params = {"input": json.dumps(payload)} if payload is not None else None
        return self._send(procedure, "GET", params=params)

    def _mutation(self, procedure: str, payload: Any) -> Any:
        return self._send(procedure, "POST", json=payload)

    def _send(self, procedure: str, method: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/{procedure}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as exc:
            logger.warning(
                "rpc.client.transport_failed",
                extra={"event": "rpc.client.transport_failed", "procedure": procedure, "error": str(exc)},
            )
            raise RemoteCallError(str(exc), procedure=procedure) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteCallError(
                f"Unreadable response (HTTP {response.status_code}).",
                procedure=procedure,
                error_code="BAD_RESPONSE",
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict) or response.status_code >= 400 or body.get("status") != "ok":
            envelope = body if isinstance(body, dict) else {}
            raise RemoteCallError(
                envelope.get("detail") or f"HTTP {response.status_code}",
                procedure=procedure,
                error_code=envelope.get("error_code") or "HTTP_ERROR",
                status_code=response.status_code,
                issues=envelope.get("issues"),
            )
        return body.get("data")

    def healthcheck(self) -> HealthStatus:
        return wire.decode(HealthStatus, self._query("healthcheck"))

    def get_prompts(self) -> list[Prompt]:
        data = self._query("getPrompts") or []
        return [wire.decode(Prompt, item) for item in data]

    def get_prompt(self, prompt_id: int) -> Prompt | None:
        payload = GetPromptInput(id=prompt_id)
        return wire.decode_optional(Prompt, self._query("getPrompt", wire.encode_input(payload)))

    def create_prompt(self, payload: CreatePromptInput) -> Prompt:
        return wire.decode(Prompt, self._mutation("createPrompt", wire.encode_input(payload)))

    def update_prompt(self, payload: UpdatePromptInput) -> Prompt | None:
        return wire.decode_optional(Prompt, self._mutation("updatePrompt", wire.encode_input(payload)))

    def delete_prompt(self, prompt_id: int) -> bool:
        payload = DeletePromptInput(id=prompt_id)
        return bool(self._mutation("deletePrompt", wire.encode_input(payload)))
