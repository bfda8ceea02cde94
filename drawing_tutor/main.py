"""
FastAPI entry point for the Drawing Tutorial service.

- Registers the tutorial router
- Mounts /uploads/ and /generated/ for serving originals and artifacts
- Serves frontend HTML at /
- Creates the storage directories on startup
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from drawing_tutor import config
from drawing_tutor.api.tutorial import router as tutorial_router
from drawing_tutor.schemas import HealthResponse

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
logger = logging.getLogger(__name__)

FRONTEND_HTML = Path(__file__).resolve().parent.parent / "frontend" / "index.html"

# StaticFiles refuses to mount a missing directory
for _dir in (config.UPLOAD_DIR, config.GENERATED_DIR):
    _dir.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    for directory in (config.UPLOAD_DIR, config.GENERATED_DIR):
        directory.mkdir(parents=True, exist_ok=True)
    logger.info("Starting up — uploads=%s generated=%s", config.UPLOAD_DIR, config.GENERATED_DIR)
    if not config.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set — tutorial generation will fail")
    yield


app = FastAPI(
    title="Drawing Tutorial",
    description="Upload an image → get a pencil reference sketch and a step-by-step drawing tutorial.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(config.UPLOAD_URL_PREFIX, StaticFiles(directory=str(config.UPLOAD_DIR)), name="uploads")
app.mount(config.GENERATED_URL_PREFIX, StaticFiles(directory=str(config.GENERATED_DIR)), name="generated")

app.include_router(tutorial_router)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def serve_frontend() -> HTMLResponse:
    if FRONTEND_HTML.exists():
        return HTMLResponse(content=FRONTEND_HTML.read_text(encoding="utf-8"))
    return HTMLResponse(content="<h1>Drawing Tutorial</h1><p>Frontend not found.</p>")


@app.get("/api/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> dict:
    return {"status": "OK", "message": "Drawing tutorial API is running"}


def run() -> None:
    """Console entry point: ``drawing-tutor``."""
    import uvicorn

    logger.info("Server is running on port %d", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
