"""
Admin pages : édition des pages et de leur séquence de blocs.
Protégé par ADMIN_TOKEN (?token= ou cookie admin_token).

GET    /api/admin/pages                           → liste
POST   /api/admin/pages                           → création
GET    /api/admin/pages/{page_id}                 → page + blocs (invisibles compris)
PATCH  /api/admin/pages/{page_id}                 → titre / description / statut
DELETE /api/admin/pages/{page_id}
PUT    /api/admin/pages/{page_id}/blocks          → remplace la séquence
POST   /api/admin/pages/{page_id}/blocks          → dépose un type depuis la palette
POST   /api/admin/pages/{page_id}/blocks/move     → déplace un bloc sur un autre
PATCH  /api/admin/pages/{page_id}/blocks/{id}     → fusionne des champs
DELETE /api/admin/pages/{page_id}/blocks/{id}
GET    /api/admin/pages/{page_id}/preview         → HTML (brouillons compris)
"""
import logging
import os
from typing import Any, Iterable, List, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from block_builder.editor import BlockEditor, DragSubject
from block_builder.envelope import deserialize_blocks, serialize_blocks
from block_builder.renderer.html import render_page
from block_builder.sanitize import sanitize_block_data, sanitize_canonical_block

from ...database import (
    db_create_page, db_delete_page, db_get_page, db_get_page_by_slug, db_list_pages,
    db_load_block_records, db_replace_blocks, db_update_page, get_db,
)
from ...models import (
    SUPPORTED_LOCALES, BlockInsert, BlockMove, BlockPatch, BlocksReplace, PageCreate, PageDB, PageUpdate,
)
from .pages import page_summary

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin/pages", tags=["Admin pages"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _check_token(request: Request) -> str:
    token = (request.query_params.get("token")
             or request.cookies.get("admin_token", ""))
    if token != os.getenv("ADMIN_TOKEN", "changeme"):
        raise HTTPException(403, "Accès refusé")
    return token


def _get_page(db: Session, page_id: str) -> PageDB:
    page = db_get_page(db, page_id)
    if not page:
        raise HTTPException(404, "Page introuvable")
    return page


def _load(db: Session, page_id: str) -> Tuple[PageDB, BlockEditor]:
    page = _get_page(db, page_id)
    return page, BlockEditor(deserialize_blocks(db_load_block_records(page)))


def _clean(records: Iterable[Any]) -> List[dict]:
    """Payload client → enveloppes prêtes à stocker (normalisées, assainies, validées)."""
    return serialize_blocks(deserialize_blocks(records, clean=sanitize_canonical_block))


def _save(db: Session, page: PageDB, editor: BlockEditor) -> None:
    db_replace_blocks(db, page, serialize_blocks(editor.blocks))


def _detail(page: PageDB, editor: BlockEditor) -> dict:
    return {**page_summary(page), "blocks": [b.to_record() for b in editor.blocks]}


# ── Pages ──────────────────────────────────────────────────────────────────────

@router.get("")
def list_pages(request: Request, locale: str = "", db: Session = Depends(get_db)):
    _check_token(request)
    return [page_summary(p) for p in db_list_pages(db, locale or None)]


@router.post("", status_code=201)
def create_page(req: PageCreate, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    if req.locale not in SUPPORTED_LOCALES:
        raise HTTPException(400, f"Locale '{req.locale}' non supportée ({', '.join(SUPPORTED_LOCALES)})")
    if db_get_page_by_slug(db, req.slug, req.locale, published_only=False):
        raise HTTPException(409, f"La page '{req.slug}' [{req.locale}] existe déjà")

    page = db_create_page(db, PageDB(
        slug=req.slug, locale=req.locale, title=req.title,
        description=req.description, status=req.status.value,
    ))
    if req.blocks:
        db_replace_blocks(db, page, _clean(req.blocks))
    log.info("Page créée : %s [%s]", page.slug, page.locale)
    page, editor = _load(db, page.id)
    return _detail(page, editor)


@router.get("/{page_id}")
def get_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page, editor = _load(db, page_id)
    return _detail(page, editor)


@router.patch("/{page_id}")
def update_page(page_id: str, req: PageUpdate, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page(db, page_id)
    changes = req.model_dump(exclude_none=True)
    if "status" in changes:
        changes["status"] = req.status.value
    page = db_update_page(db, page, **changes)
    return page_summary(page)


@router.delete("/{page_id}")
def delete_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page(db, page_id)
    db_delete_page(db, page)
    log.info("Page supprimée : %s", page_id)
    return {"deleted": page_id}


# ── Blocs ──────────────────────────────────────────────────────────────────────

@router.put("/{page_id}/blocks")
def replace_blocks(page_id: str, req: BlocksReplace, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page(db, page_id)
    records = _clean(req.blocks)
    dropped = len(req.blocks) - len(records)
    if dropped:
        log.warning("Page %s : %d bloc(s) irrécupérable(s) ignoré(s)", page.slug, dropped)
    db_replace_blocks(db, page, records)
    page, editor = _load(db, page_id)
    return {**_detail(page, editor), "dropped": dropped}


@router.post("/{page_id}/blocks", status_code=201)
def insert_block(page_id: str, req: BlockInsert, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page, editor = _load(db, page_id)
    editor.begin_drag(DragSubject.palette(req.type))
    block = editor.drop(req.target_id)
    _save(db, page, editor)
    return {"block": block.to_record(), "index": editor.index_of(block.id)}


@router.post("/{page_id}/blocks/move")
def move_block(page_id: str, req: BlockMove, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page, editor = _load(db, page_id)
    if not editor.begin_drag(DragSubject.block(req.source_id)):
        raise HTTPException(404, "Bloc introuvable")
    if editor.index_of(req.target_id) < 0:
        editor.cancel_drag()
        raise HTTPException(404, "Bloc cible introuvable")
    moved = editor.drop(req.target_id)
    if moved is not None:
        _save(db, page, editor)
    return {"moved": moved is not None, "order": [b.id for b in editor.blocks]}


@router.patch("/{page_id}/blocks/{block_id}")
def patch_block(page_id: str, block_id: str, req: BlockPatch, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page, editor = _load(db, page_id)
    if editor.get(block_id) is None:
        raise HTTPException(404, "Bloc introuvable")
    if not editor.update(block_id, sanitize_block_data(req.fields)):
        raise HTTPException(422, "Champs invalides pour ce type de bloc")
    _save(db, page, editor)
    return {"block": editor.get(block_id).to_record()}


@router.delete("/{page_id}/blocks/{block_id}")
def delete_block(page_id: str, block_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page, editor = _load(db, page_id)
    if not editor.delete(block_id):
        raise HTTPException(404, "Bloc introuvable")
    _save(db, page, editor)
    return {"deleted": block_id}


@router.get("/{page_id}/preview", response_class=HTMLResponse)
def preview_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    _check_token(request)
    page = _get_page(db, page_id)
    return HTMLResponse(render_page(page.title, db_load_block_records(page), lang=page.locale,
                                    description=page.description))
