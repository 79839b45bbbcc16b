"""RPC surface of the Prompt Curator server."""

from __future__ import annotations

from fastapi import APIRouter

from prompt_curator.api.procedures import registry
from prompt_curator.api.rpc import build_rpc_router
from prompt_curator.core.config import get_config


def get_api_router() -> APIRouter:
    return build_rpc_router(registry, get_config().RPC_PREFIX)
