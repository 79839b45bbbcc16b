"""Application entrypoint for the Prompt Curator RPC server."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prompt_curator.api import get_api_router
from prompt_curator.core.config import get_config
from prompt_curator.core.startup import bootstrap
from prompt_curator.database.init_db import init_db


def create_app() -> FastAPI:
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.CORS_ORIGINS),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.include_router(get_api_router())

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "rpc_prefix": cfg.RPC_PREFIX}

    return app


# Expose ASGI app for `uvicorn prompt_curator.main:app`.
app = create_app()


def run() -> None:
    bootstrap()
    init_db()
    cfg = get_config()
    uvicorn.run(app, host=cfg.SERVER_HOST, port=cfg.SERVER_PORT, log_config=None)


if __name__ == "__main__":
    run()
