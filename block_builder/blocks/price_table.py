"""Bloc PriceTable : plans tarifaires avec CTA."""
from typing import List, Literal
from pydantic import Field
from .base import BaseBlock, BlockModel, CTA


class PricePlan(BlockModel):
    name: str
    price: str
    period: str
    features: List[str] = Field(default_factory=list)
    cta: CTA


class PriceTableBlock(BaseBlock):
    type: Literal["priceTable"] = "priceTable"
    plans: List[PricePlan]
