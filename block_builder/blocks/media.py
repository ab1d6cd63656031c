"""Bloc Media : image ou vidéo avec légende."""
from typing import Literal, Optional
from .base import BaseBlock


class MediaBlock(BaseBlock):
    type: Literal["media"] = "media"
    kind: Literal["image", "video"]
    src: str
    alt: str
    caption: Optional[str] = None
    poster: Optional[str] = None
