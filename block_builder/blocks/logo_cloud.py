"""Bloc LogoCloud : logos clients / partenaires."""
from typing import List, Literal, Optional
from .base import BaseBlock, BlockModel


class Brand(BlockModel):
    name: str
    logo: str
    url: Optional[str] = None


class LogoCloudBlock(BaseBlock):
    type: Literal["logoCloud"] = "logoCloud"
    title: Optional[str] = None
    brands: List[Brand]
