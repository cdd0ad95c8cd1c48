"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from topopath.config import settings
from topopath.engine.errors import DecodeError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.topopath_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _decode_error_handler(request: Request, exc: DecodeError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"error_kind": exc.kind, "detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="TopoPath",
        description="Shared-arc topology decoder: arcs -> rings -> vector path commands",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Whole-document failures (bad transform, unknown object); per-geometry ones stay in the body
    app.add_exception_handler(DecodeError, _decode_error_handler)

    from topopath.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
