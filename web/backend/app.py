import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from objective_ledger.exceptions import InvalidInput
from web.backend.routers import objectives

logger = logging.getLogger("objective_ledger.api")


def _invalid_input_from(exc: RequestValidationError) -> InvalidInput:
    errors = exc.errors()
    if not errors:
        return InvalidInput("Invalid request")
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "header")]
    field = loc[-1] if loc else None
    return InvalidInput(first.get("msg", "Invalid request"), field=field)


def create_app() -> FastAPI:
    app = FastAPI(title="Objective Ledger API", version="1.0")

    raw_origins = os.getenv("OBJECTIVE_LEDGER_ALLOWED_ORIGINS", "*")
    allow_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    allow_credentials = "*" not in allow_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 请求体校验失败与 ledger 的 InvalidInput 使用同一种 400 响应
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = _invalid_input_from(exc)
        logger.info("Rejected request %s %s: %s", request.method, request.url.path, error.message)
        return JSONResponse(status_code=error.http_status, content={"detail": error.to_dict()})

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": "Objective Ledger",
            "counter": objectives.get_ledger().counter.current(),
        }

    app.include_router(objectives.router, prefix="/api/v1/objectives", tags=["objectives"])
    logger.info("Objective Ledger API initialised")

    return app


app = create_app()
