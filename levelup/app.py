"""
LevelUp web application.

Serves the wrestler dashboard pages and the frame annotation API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from levelup import __version__, config, database
from levelup.middleware import SecurityHeadersMiddleware
from levelup.routes import annotations_router, pages_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("levelup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    pool = await database.create_pool()
    if pool is not None:
        database.set_db_pool(pool)

    yield

    # Shutdown
    if pool is not None:
        await pool.close()
        database.set_db_pool(None)


app = FastAPI(title=config.APP_NAME, version=__version__, lifespan=lifespan)

# Security middleware
app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware (must be last to apply first)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pages_router)
app.include_router(annotations_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are client errors (400) with a readable message."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(problems) or "Invalid request"}
    )


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "database": "configured" if database.db_pool is not None else "not configured"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
