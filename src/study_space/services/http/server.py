from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...api import call_api, get_api_functions
from ...errors import (
    AINotConfiguredError,
    BlobNotFoundError,
    NoRowsAffectedError,
    RecordNotFoundError,
    SupabaseNotConfiguredError,
)
from ...logging import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Study Space Local API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _status_for(exc: Exception) -> int:
    if isinstance(exc, (RecordNotFoundError, BlobNotFoundError, NoRowsAffectedError)):
        return 404
    if isinstance(exc, (SupabaseNotConfiguredError, AINotConfiguredError)):
        return 503
    return 400


@app.get("/api/functions")
async def list_api_functions() -> JSONResponse:
    return JSONResponse({"functions": [func.describe() for func in get_api_functions()]})


@app.post("/api/functions/{function_name}")
async def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    names = {func.name for func in get_api_functions()}
    if function_name not in names:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=f"API function '{function_name}' is not registered.")
    try:
        result = call_api(function_name, **request.arguments)
    except Exception as exc:  # noqa: BLE001
        status = _status_for(exc)
        logger.warning("API function %s failed (%s): %s", function_name, status, exc, exc_info=status == 400)
        raise HTTPException(status_code=status, detail=str(exc)) from exc
    logger.debug("API function %s executed successfully", function_name)
    return JSONResponse({"name": function_name, "result": result})


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Study Space API on http://%s:%s", host, port)
    asyncio.run(serve(app, config))
