from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
import asyncio
import logging
import os
from urllib.parse import urlparse, urlunparse

from app.core.config import settings, FRONTEND_ORIGINS
from app.core.errors import error_response, register_exception_handlers
from app.core.logging_config import setup_logging
from app.db.init_db import init_db
from app.posts.routes import router as posts_router
from app.weather.routes import router as weather_router

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Brunch Blog API",
    description="Blog personal con tema de colores según el clima",
    version="1.0.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONTEND_ORIGINS,
    allow_credentials="*" not in FRONTEND_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])
app.include_router(weather_router, prefix="/api/weather", tags=["weather"])

# Static files (vista del navegador)
static_dir = settings.STATIC_DIR
if os.path.isdir(static_dir):
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


def _mask_db_url(url: str) -> str:
    try:
        u = urlparse(url)
        netloc = u.netloc
        if "@" in netloc:
            creds, host = netloc.split("@", 1)
            user = creds.split(":", 1)[0] if ":" in creds else creds
            netloc = f"{user}:***@{host}"
        return urlunparse(u._replace(netloc=netloc))
    except ValueError:
        return "unknown"


@app.on_event("startup")
async def on_startup():
    # Log minimal info to verify DB URL source without leaking secrets
    logger.info(f"[startup] Using DATABASE_URL: {_mask_db_url(settings.DATABASE_URL or '')}")
    try:
        await asyncio.to_thread(init_db)
    except Exception as e:
        # La API de clima sigue disponible aunque la base no responda
        logger.error(f"[startup] Schema bootstrap failed: {e}")


def _index_response():
    index_path = os.path.join(static_dir, "index.html")
    if os.path.isfile(index_path):
        return FileResponse(index_path)
    return error_response(404, "Not found")


@app.get("/")
async def root():
    return _index_response()


@app.get("/post/{post_id}")
async def post_page(post_id: str):
    """La vista es una SPA: las rutas de detalle también sirven index.html"""
    return _index_response()


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
