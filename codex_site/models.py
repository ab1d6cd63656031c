"""
Data models : Page, Block
SQLAlchemy (SQLite) + schémas de requête Pydantic v2 + Enums
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


SUPPORTED_LOCALES = ("en", "de", "fr")
DEFAULT_LOCALE    = "en"


# ── ENUMS ──────────────────────────────────────────────────────────────

class PublishStatus(str, Enum):
    DRAFT     = "draft"
    IN_REVIEW = "inReview"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class PageDB(Base):
    __tablename__ = "pages"
    __table_args__ = (sa.UniqueConstraint("slug", "locale", name="uq_pages_slug_locale"),)

    id:          Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    slug:        Mapped[str]           = mapped_column(sa.String, nullable=False, index=True)
    locale:      Mapped[str]           = mapped_column(sa.String, nullable=False, default=DEFAULT_LOCALE)
    title:       Mapped[str]           = mapped_column(sa.String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    status:      Mapped[str]           = mapped_column(sa.String, default=PublishStatus.DRAFT.value)
    created_at:  Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:  Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    blocks: Mapped[List["BlockDB"]] = relationship(
        "BlockDB", back_populates="page", cascade="all, delete-orphan", order_by="BlockDB.order",
    )


class BlockDB(Base):
    """Enveloppe stockée : {type, data, order}. `id` est celui de la ligne, pas du bloc."""
    __tablename__ = "blocks"
    id:      Mapped[str] = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    page_id: Mapped[str] = mapped_column(sa.String, sa.ForeignKey("pages.id"), nullable=False, index=True)
    type:    Mapped[str] = mapped_column(sa.String, nullable=False)
    data:    Mapped[str] = mapped_column(sa.Text, default="{}")  # JSON
    order:   Mapped[int] = mapped_column(sa.Integer, default=0)

    page: Mapped["PageDB"] = relationship("PageDB", back_populates="blocks")


# ── PYDANTIC : requêtes ────────────────────────────────────────────────

class PageCreate(BaseModel):
    slug:        str = Field(..., min_length=1, pattern=r"^[a-z0-9][a-z0-9\-]*$")
    locale:      str = DEFAULT_LOCALE
    title:       str = Field(..., min_length=1)
    description: Optional[str] = None
    status:      PublishStatus = PublishStatus.DRAFT
    blocks:      List[Any] = []


class PageUpdate(BaseModel):
    title:       Optional[str] = None
    description: Optional[str] = None
    status:      Optional[PublishStatus] = None


class BlocksReplace(BaseModel):
    blocks: List[Any]


class BlockInsert(BaseModel):
    type:      str
    target_id: Optional[str] = None


class BlockMove(BaseModel):
    source_id: str
    target_id: str


class BlockPatch(BaseModel):
    fields: Dict[str, Any]
