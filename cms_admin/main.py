from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from .api.api import api_router
from .db.database import create_tables
from fastapi.responses import JSONResponse
import logging
import json
import traceback

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    await create_tables()
    yield

logger = logging.getLogger(__name__)

REDACTED_HEADERS = {"authorization", "cookie"}

def loggable_headers(request: Request) -> dict:
    """Request headers with credentials masked"""
    return {
        name: "[REDACTED]" if name.lower() in REDACTED_HEADERS else value
        for name, value in request.headers.items()
    }

def loggable_body(body: bytes) -> str | None:
    """Request body with password fields masked"""
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return body.decode(errors="replace")
    if isinstance(payload, dict) and "password" in payload:
        payload["password"] = "[REDACTED]"
    return json.dumps(payload)

app = FastAPI(title="CMS comment moderation", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    body = await request.body()
    request_info = {
        "url": str(request.url),
        "method": request.method,
        "headers": loggable_headers(request),
        "body": loggable_body(body),
        "path_params": request.path_params,
        "query_params": dict(request.query_params)
    }

    try:
        response = await call_next(request)

        if response.status_code >= 400:
            response_body = b""
            async for chunk in response.body_iterator:
                response_body += chunk

            logger.error(
                f"Request failed with status {response.status_code}\n"
                f"Request: {json.dumps(request_info, indent=2)}\n"
                f"Response: {response_body.decode()}\n"
            )
            return JSONResponse(
                content=json.loads(response_body),
                status_code=response.status_code,
                headers=dict(response.headers)
            )

        return response

    except Exception as e:
        logger.error(
            f"Request failed with exception\n"
            f"Request: {json.dumps(request_info, indent=2)}\n"
            f"Error: {str(e)}\n"
            f"Traceback: {traceback.format_exc()}"
        )
        raise

app.include_router(api_router, prefix="/api")
