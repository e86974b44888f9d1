import logging
import time
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.errors import AppError, ValidationError
from app.routers import health, outfits, profile, recommendations, wardrobe, weather
from app.llm.base import ProviderRegistry
from app.llm.gemini_provider import GeminiProvider
from app.llm.openai_provider import OpenAIProvider

app = FastAPI(title=settings.APP_NAME)

# CORS
origins = settings.cors_origin_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

prefix = settings.API_PREFIX
app.include_router(health.router, prefix=prefix)
app.include_router(wardrobe.router, prefix=prefix)
app.include_router(recommendations.router, prefix=prefix)
app.include_router(outfits.router, prefix=prefix)
app.include_router(weather.router, prefix=prefix)
app.include_router(profile.router, prefix=prefix)

# LLM providers; keys are checked on first call
ProviderRegistry.register("gemini", GeminiProvider())
ProviderRegistry.register("openai", OpenAIProvider())

logger = logging.getLogger("app.requests")
error_logger = logging.getLogger("uvicorn.error")


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        error_logger.error("%s %s failed code=%s reason=%s", request.method, request.url.path, exc.code, exc.message)
    body = {"success": False, "error": exc.message}
    if isinstance(exc, ValidationError):
        body["validation_errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation failed", "validation_errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV}
