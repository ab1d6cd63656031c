"""Bloc RichText : HTML (assaini au rendu) ou JSON portable text."""
from typing import Any, Literal
from .base import BaseBlock


class RichTextBlock(BaseBlock):
    type: Literal["richText"] = "richText"
    content: Any
