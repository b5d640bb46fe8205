# finance_analyzer/main.py
import uvicorn
import os
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from finance_analyzer.core.auth import add_auth_gateway
from finance_analyzer.core.config import settings
from finance_analyzer.core.database import create_db_and_tables
from finance_analyzer.core.exceptions import FinanceAnalyzerError
from finance_analyzer.schemas.common import ApiResponse
from finance_analyzer.api.v1.routes import (
    auth,
    categories,
    files,
    transactions,
    users,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    openapi_tags=[
        {"name": "Authentication", "description": "Login and signup, no token required"},
        {"name": "User Management", "description": "User profile and settings operations"},
        {"name": "files", "description": "CSV transaction imports and upload history"},
    ],
)

# Middleware added last runs first: CORS wraps the auth gateway
add_auth_gateway(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(ApiResponse.error(message), by_alias=True, exclude_none=True),
        headers=headers,
    )

@app.exception_handler(FinanceAnalyzerError)
async def domain_exception_handler(request: Request, exc: FinanceAnalyzerError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return _error_response(exc.status_code, exc.message, headers)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(loc) for loc in first["loc"] if loc != "body")
        message = f"{field}: {first['msg']}" if field else first["msg"]
    else:
        message = "Invalid request"
    return _error_response(status.HTTP_400_BAD_REQUEST, message)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION,
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)
app.include_router(categories.router, prefix=settings.API_PREFIX)
app.include_router(transactions.router, prefix=settings.API_PREFIX)
app.include_router(files.router, prefix=settings.API_PREFIX)

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Create missing tables; schema changes go through Alembic"""
    await create_db_and_tables()
    logger.info(f"✅ Database ready ({settings.ENVIRONMENT})")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("finance_analyzer.main:app", host="0.0.0.0", port=port, reload=False)
