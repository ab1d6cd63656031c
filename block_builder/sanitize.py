"""
Assainissement des payloads de blocs avant sauvegarde / rendu.

- déballe les couches `.data` ajoutées par l'éditeur (tant que la couche suivante ressemble à un bloc)
- passe au crible bleach toute chaîne contenant du HTML, et les champs rich text
  dès qu'ils contiennent un chevron
"""
import copy
import re
from typing import Any

import bleach

ALLOWED_RICH_TEXT_TAGS = [
    "div", "span", "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "a", "img", "ul", "ol", "li", "strong", "em", "br", "u", "s",
    "blockquote", "code", "pre", "hr", "section", "article",
    "header", "footer", "nav", "aside", "main", "figure", "figcaption",
    "table", "thead", "tbody", "tr", "th", "td",
]
ALLOWED_RICH_TEXT_ATTRIBUTES = [
    "href", "src", "alt", "title", "class", "id", "target", "rel",
    "width", "height", "loading", "decoding", "fetchpriority",
]
ALLOWED_RICH_TEXT_PROTOCOLS = ["http", "https", "mailto", "tel"]

RICH_TEXT_KEYS = {"content", "description", "body", "text", "html"}
MAX_EDITOR_UNWRAP = 10

_HTML_TAG = re.compile(r"<[^>]*>")


def sanitize_rich_text(html: Any) -> str:
    if not html:
        return ""
    return bleach.clean(
        str(html),
        tags=ALLOWED_RICH_TEXT_TAGS,
        attributes=ALLOWED_RICH_TEXT_ATTRIBUTES,
        protocols=ALLOWED_RICH_TEXT_PROTOCOLS,
        strip=True,
    )


def _looks_like_block(node: Any) -> bool:
    return isinstance(node, dict) and (
        isinstance(node.get("type"), str)
        or isinstance(node.get("visible"), bool)
        or isinstance(node.get("id"), str)
    )


def _unwrap_editor_layers(node: dict) -> dict:
    current = node
    depth = 0
    while isinstance(current.get("data"), dict) and depth < MAX_EDITOR_UNWRAP:
        nested = current["data"]
        if not _looks_like_block(nested):
            break
        current = nested
        depth += 1
    return current


def _sanitize(value: Any) -> Any:
    if isinstance(value, str):
        return sanitize_rich_text(value) if _HTML_TAG.search(value) else value
    if isinstance(value, list):
        return [_sanitize(v) for v in value]
    if isinstance(value, dict):
        cleaned = {}
        for key, v in value.items():
            # champs rich text : le moindre chevron suffit (balise tronquée comprise)
            if isinstance(key, str) and key.lower() in RICH_TEXT_KEYS and isinstance(v, str) and "<" in v:
                cleaned[key] = sanitize_rich_text(v)
            else:
                cleaned[key] = _sanitize(v)
        return cleaned
    return value


def sanitize_block_data(block: Any) -> Any:
    """Copie assainie d'un bloc (l'entrée n'est pas modifiée). Non-objet → retourné tel quel."""
    if not isinstance(block, dict):
        return block
    return _sanitize(copy.deepcopy(_unwrap_editor_layers(block)))


def sanitize_canonical_block(block: dict) -> dict:
    """Copie assainie d'un bloc déjà normalisé : pas de déballage, l'identité reste en place."""
    return _sanitize(copy.deepcopy(block))
