"""Bloc Metrics : chiffres clés."""
from typing import List, Literal, Optional
from .base import BaseBlock, BlockModel


class MetricItem(BlockModel):
    label: str
    value: str
    help_text: Optional[str] = None


class MetricsBlock(BaseBlock):
    type: Literal["metrics"] = "metrics"
    items: List[MetricItem]
