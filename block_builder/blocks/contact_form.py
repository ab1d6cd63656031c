"""Bloc ContactForm : formulaire identifié par formKey (soumission hors bloc)."""
from typing import Literal, Optional
from .base import BaseBlock


class ContactFormBlock(BaseBlock):
    type: Literal["contactForm"] = "contactForm"
    form_key: str
    heading: Optional[str] = None
    subcopy: Optional[str] = None
    success_copy: Optional[str] = None
    privacy_note: Optional[str] = None
