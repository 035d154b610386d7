"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from errors import InvalidInputError, StorageUnavailableError
from journal.lexicon import LEXICON_VERSION
from web.deps import get_config
from web.routes import analyze, ers, journal, mood

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("web.startup", lexicon_version=LEXICON_VERSION)
    yield
    logger.info("web.shutdown")


app = FastAPI(
    title="Paceful",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
    logger.error("web.storage_unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


# Mount routes
app.include_router(analyze.router)
app.include_router(journal.router)
app.include_router(mood.router)
app.include_router(ers.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "lexicon_version": LEXICON_VERSION}
