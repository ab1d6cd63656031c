"""
Block Builder : modèle de contenu par blocs, éditeur d'ordonnancement, rendu.

Usage:
    >>> from block_builder import BlockEditor, deserialize_blocks, serialize_blocks, render_blocks
    >>> editor = BlockEditor(deserialize_blocks(stored_records))
    >>> editor.insert_from_palette("hero", 0)
    >>> records = serialize_blocks(editor.blocks)
    >>> html = render_blocks(records)

Router FastAPI prêt à monter :
    >>> from block_builder.router import router
    >>> app.include_router(router)
"""
__version__ = "0.1.0"

# ── Schéma ──────────────────────────────────────────────────────────────────
from .blocks import (
    BaseBlock, BlockModel, CTA,
    HeroBlock, FeatureGridBlock, TestimonialBlock, LogoCloudBlock, MetricsBlock,
    RichTextBlock, FAQBlock, PriceTableBlock, ComparisonBlock, ContactFormBlock, MediaBlock,
)

# ── Registry / factory ──────────────────────────────────────────────────────
from .registry import (
    BLOCK_TYPES, BlockVariant, FieldSpec,
    register, unregister, is_valid_type, get_variant, all_variants,
    fields_for, parse_block, catalog,
)
from .factory import create_block, new_block_id

# ── Éditeur / persistance ───────────────────────────────────────────────────
from .editor import BlockEditor, DragState, DragSubject
from .envelope import serialize_blocks, deserialize_blocks, sort_records, record_order
from .normalizer import normalize_block, extract_deepest_valid_content, has_non_empty_content
from .sanitize import sanitize_block_data, sanitize_canonical_block, sanitize_rich_text

# ── Rendu ───────────────────────────────────────────────────────────────────
from .renderer import render_block, render_blocks, render_page, render_placeholder, prepare_blocks

__all__ = [
    "__version__",
    # Schéma
    "BaseBlock", "BlockModel", "CTA",
    "HeroBlock", "FeatureGridBlock", "TestimonialBlock", "LogoCloudBlock", "MetricsBlock",
    "RichTextBlock", "FAQBlock", "PriceTableBlock", "ComparisonBlock", "ContactFormBlock", "MediaBlock",
    # Registry / factory
    "BLOCK_TYPES", "BlockVariant", "FieldSpec",
    "register", "unregister", "is_valid_type", "get_variant", "all_variants",
    "fields_for", "parse_block", "catalog",
    "create_block", "new_block_id",
    # Éditeur / persistance
    "BlockEditor", "DragState", "DragSubject",
    "serialize_blocks", "deserialize_blocks", "sort_records", "record_order",
    "normalize_block", "extract_deepest_valid_content", "has_non_empty_content",
    "sanitize_block_data", "sanitize_canonical_block", "sanitize_rich_text",
    # Rendu
    "render_block", "render_blocks", "render_page", "render_placeholder", "prepare_blocks",
]
