import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.api.endpoints import router
from app.core.config import settings
from app.core.tracing import instrument_app, setup_tracing, shutdown_tracing
from app.shared.correlation import CorrelationMiddleware
from app.shared.errors import InsightError, get_correlation_id, insight_error_response, internal_error
from app.shared.logging_config import setup_logging

setup_logging(service_name=settings.SERVICE_NAME)
logger = logging.getLogger("Insights.Main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_tracing()
    yield
    shutdown_tracing()


app = FastAPI(
    title="Journal Insight Service",
    description="Weekly AI insights over journal entries and goals",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationMiddleware)
instrument_app(app)


@app.exception_handler(InsightError)
async def handle_insight_error(request: Request, exc: InsightError):
    logger.warning("Insight request failed: %s", exc.message, extra={"code": exc.code.value})
    return insight_error_response(exc, correlation_id=get_correlation_id(request))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return internal_error(correlation_id=get_correlation_id(request))


app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"message": "Journal Insight Service Running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
