import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from prompt_studio.core.config import settings
from prompt_studio.core.observability import init_observability
from prompt_studio.studio.routes.api import router as studio_api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa
    # Initialize Observability (Arize Phoenix) if enabled
    if settings.OBSERVABILITY_ENABLED:
        init_observability()

    yield


app = FastAPI(lifespan=lifespan)

app.include_router(studio_api_router, prefix="/studio", tags=["studio"])


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
