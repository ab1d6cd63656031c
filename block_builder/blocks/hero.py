"""Bloc Hero : eyebrow + headline + subcopy + CTAs + badges."""
from typing import List, Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockModel, CTA


class HeroMedia(BlockModel):
    kind: Literal["image", "video"]
    src: str
    alt: str


class HeroBadge(BlockModel):
    label: str
    icon: Optional[str] = None


class HeroBlock(BaseBlock):
    type: Literal["hero"] = "hero"
    eyebrow: Optional[str] = None
    headline: str = Field(min_length=3)
    subcopy: Optional[str] = None
    media: Optional[HeroMedia] = None
    primary_cta: Optional[CTA] = Field(default=None, alias="primaryCTA")
    secondary_cta: Optional[CTA] = Field(default=None, alias="secondaryCTA")
    badges: Optional[List[HeroBadge]] = None
