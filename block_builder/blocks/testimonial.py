"""Bloc Testimonial : citation + auteur + métrique optionnelle."""
from typing import Literal, Optional
from .base import BaseBlock, BlockModel


class TestimonialAuthor(BlockModel):
    name: str
    role: Optional[str] = None
    company: Optional[str] = None
    avatar: Optional[str] = None
    logo: Optional[str] = None


class TestimonialMetric(BlockModel):
    label: str
    value: str


class TestimonialBlock(BaseBlock):
    type: Literal["testimonial"] = "testimonial"
    quote: str
    author: TestimonialAuthor
    metric: Optional[TestimonialMetric] = None
