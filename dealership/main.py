import asyncio
import logging

from fastapi import FastAPI, Request, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from dealership.api.v1.api_router import api_router
from dealership.core.cron_runner import run_sold_cleanup_cron_loop
from dealership.core.logging_config import setup_logging
from dealership.core.startup import ensure_default_admin

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Dealership API",
    description="Used-car listings, EMI calculator, sell inquiries and admin dashboard",
    version="1.0.0",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await ensure_default_admin()
    # sold-listing cleanup runs in the background for the life of the process
    app.state.sold_cleanup_cron_task = asyncio.create_task(run_sold_cleanup_cron_loop())


@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "sold_cleanup_cron_task", None)
    if task and not task.done():
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass  # expected on cancel


def _serializable_validation_errors(errors: list) -> list:
    """Convert validation error dicts to JSON-serializable form (ctx may hold an Exception)."""
    out = []
    for e in errors:
        item = {"type": e.get("type"), "loc": e.get("loc"), "msg": e.get("msg")}
        if "ctx" in e and e["ctx"]:
            item["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
        out.append(item)
    return out


@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors_serializable = _serializable_validation_errors(exc.errors())
    logger.info(
        "Validation error 422: method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        errors_serializable,
    )
    return JSONResponse(
        status_code=422,
        content={"message": "Validation error", "errors": errors_serializable},
    )


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "message": "Validation error",
            "errors": _serializable_validation_errors(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )
