"""
Pages publiques : seules les pages publiées sont visibles.
GET /api/pages/{slug}?locale=en  → page + blocs canoniques filtrés / ordonnés
GET /{locale}/{slug}             → HTML rendu
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from block_builder.renderer.html import prepare_blocks, render_page

from ...database import db_get_page_by_slug, db_load_block_records, get_db
from ...models import DEFAULT_LOCALE, SUPPORTED_LOCALES, PageDB

router = APIRouter(tags=["Pages"])


def page_summary(page: PageDB) -> dict:
    return {
        "id":          page.id,
        "slug":        page.slug,
        "locale":      page.locale,
        "title":       page.title,
        "description": page.description,
        "status":      page.status,
        "updated_at":  page.updated_at.isoformat() if page.updated_at else None,
    }


def _published(db: Session, slug: str, locale: str) -> PageDB:
    if locale not in SUPPORTED_LOCALES:
        raise HTTPException(404, f"Locale '{locale}' non supportée")
    page = db_get_page_by_slug(db, slug, locale, published_only=True)
    if not page:
        raise HTTPException(404, "Page introuvable")
    return page


@router.get("/api/pages/{slug}")
def get_page(slug: str, locale: str = Query(DEFAULT_LOCALE), db: Session = Depends(get_db)):
    page = _published(db, slug, locale)
    return {**page_summary(page), "blocks": prepare_blocks(db_load_block_records(page))}


@router.get("/{locale}/{slug}", response_class=HTMLResponse)
def page_html(locale: str, slug: str, db: Session = Depends(get_db)):
    page = _published(db, slug, locale)
    return HTMLResponse(render_page(page.title, db_load_block_records(page), lang=page.locale,
                                    description=page.description))
