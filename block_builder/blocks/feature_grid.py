"""Bloc FeatureGrid : grille de 2 à 4 colonnes."""
from typing import List, Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockModel


class FeatureItem(BlockModel):
    icon: Optional[str] = None
    title: str
    body: str


class FeatureGridBlock(BaseBlock):
    type: Literal["featureGrid"] = "featureGrid"
    heading: Optional[str] = None
    columns: int = Field(default=3, ge=2, le=4)
    items: List[FeatureItem] = Field(min_length=1)
