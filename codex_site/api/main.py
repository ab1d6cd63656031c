"""
CODEX SITE : FastAPI app
Démarrer : uvicorn codex_site.api.main:app --reload --port 8001
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from block_builder import __version__ as block_builder_version
from block_builder.registry import BLOCK_TYPES
from block_builder.router import router as blocks_router

from .routes import admin_pages, pages

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="CODEX SITE : Pages à blocs", version="1.0.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialisée (SQLite), %d types de blocs enregistrés", len(BLOCK_TYPES))


@app.get("/health")
def health():
    return {"status": "ok", "block_builder": block_builder_version}


# ── Routers ──
# pages publiques en dernier : /{locale}/{slug} capture tout chemin à deux segments
app.include_router(blocks_router)
app.include_router(admin_pages.router)
app.include_router(pages.router)
