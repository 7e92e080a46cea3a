import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contacts.errors import ContactError
from contacts.router import router as contacts_router
from core import settings
from core.db import Database, StoreError
from core.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One store handle per process, shared by all requests.
    database = Database.from_env()
    await database.connect()
    app.state.db = database
    try:
        yield
    finally:
        await database.close()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    if not settings.http_logging_enabled():
        return await call_next(request)
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "http_request method=%s path=%s status=%s duration_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


@app.exception_handler(ContactError)
async def contact_error_handler(request: Request, exc: ContactError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(
        "store_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"message": "internal server error"})


app.include_router(contacts_router, tags=["contacts"])


@app.get("/health")
async def health(request: Request) -> dict:
    await request.app.state.db.fetch_one("SELECT 1 AS ok")
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    uvicorn.run("main:app", host=settings.host(), port=settings.port())


if __name__ == "__main__":
    run()
