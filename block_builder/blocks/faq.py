"""Bloc FAQ : paires question / réponse."""
from typing import List, Literal
from pydantic import Field
from .base import BaseBlock, BlockModel


class FAQItem(BlockModel):
    q: str
    a: str


class FAQBlock(BaseBlock):
    type: Literal["faq"] = "faq"
    items: List[FAQItem] = Field(min_length=1)
