"""SQLite : init + session + CRUD helpers"""
import json, logging, os
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, BlockDB, PageDB, PublishStatus

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "codex_site.db"))
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db():
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: Optional[str]) -> Any:
    try:
        return json.loads(s or "{}")
    except ValueError:
        log.warning("JSON de bloc illisible, remplacé par {}")
        return {}

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Page ──
def db_create_page(db: Session, obj: PageDB) -> PageDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_page(db: Session, page_id: str) -> Optional[PageDB]:
    return db.query(PageDB).filter_by(id=page_id).first()

def db_get_page_by_slug(db: Session, slug: str, locale: str, published_only: bool = True) -> Optional[PageDB]:
    q = db.query(PageDB).filter_by(slug=slug, locale=locale)
    if published_only:
        q = q.filter_by(status=PublishStatus.PUBLISHED.value)
    return q.first()

def db_list_pages(db: Session, locale: Optional[str] = None) -> List[PageDB]:
    q = db.query(PageDB)
    if locale: q = q.filter_by(locale=locale)
    return q.order_by(PageDB.slug, PageDB.locale).all()

def db_update_page(db: Session, page: PageDB, **kwargs) -> PageDB:
    for k, v in kwargs.items():
        setattr(page, k, v)
    page.updated_at = datetime.utcnow()
    db.commit(); db.refresh(page); return page

def db_delete_page(db: Session, page: PageDB) -> None:
    db.delete(page); db.commit()


# ── Blocks ──
def db_load_block_records(page: PageDB) -> List[dict]:
    """Enveloppes stockées de la page, triées par `order`."""
    return [
        {"type": b.type, "data": jl(b.data), "order": b.order}
        for b in sorted(page.blocks, key=lambda b: b.order or 0)
    ]

def db_replace_blocks(db: Session, page: PageDB, records: Iterable[dict]) -> PageDB:
    """Remplace toute la séquence : suppression puis recréation, `order` = index."""
    page.blocks.clear()
    db.flush()
    for index, record in enumerate(records):
        page.blocks.append(BlockDB(
            type=record.get("type") or "",
            data=jd(record.get("data", {})),
            order=index,
        ))
    page.updated_at = datetime.utcnow()
    db.commit(); db.refresh(page)
    log.info("Page %s : %d bloc(s) enregistré(s)", page.slug, len(page.blocks))
    return page
