"""Bloc Comparison : critères + colonnes gauche / droite."""
from typing import List, Literal
from .base import BaseBlock


class ComparisonBlock(BaseBlock):
    type: Literal["comparison"] = "comparison"
    criteria: List[str]
    left: List[str]
    right: List[str]
