"""
Registry des variants : source unique pour l'éditeur, la factory et le renderer.

Chaque type de bloc déclare :
  - son modèle Pydantic (forme du payload, champs requis / optionnels)
  - ses métadonnées de palette (label, icône, description, catégorie)
  - ses valeurs par défaut non vides (utilisées par la factory)

Un type absent du registry n'est jamais une erreur : il est traité comme
"non implémenté" par le renderer et validé contre BaseBlock.
"""
import types
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel

from .blocks import (
    BaseBlock,
    HeroBlock, FeatureGridBlock, TestimonialBlock, LogoCloudBlock, MetricsBlock,
    RichTextBlock, FAQBlock, PriceTableBlock, ComparisonBlock, ContactFormBlock, MediaBlock,
)

Category = Literal["content", "layout", "media", "forms"]


@dataclass(frozen=True)
class BlockVariant:
    block_type: str
    model: Type[BaseBlock]
    label: str
    icon: str = "▫️"
    description: str = ""
    category: Category = "content"
    defaults: Dict[str, Any] = field(default_factory=dict)


class FieldSpec(BaseModel):
    """Description d'un champ de payload (génération de formulaire côté admin)."""
    name: str
    required: bool
    kind: str
    default: Any = None


_BUILTIN_VARIANTS = [
    BlockVariant(
        "hero", HeroBlock, "Hero Section", "🦸",
        "Large banner with headline, text, and CTA buttons", "content",
        {"headline": "Your Headline Here", "subcopy": "Add a short supporting sentence here."},
    ),
    BlockVariant(
        "featureGrid", FeatureGridBlock, "Feature Grid", "⚡",
        "Grid of features with icons and descriptions", "layout",
        {
            "columns": 3,
            "items": [
                {"title": f"Feature {n}", "body": f"Description for feature {n}"}
                for n in (1, 2, 3)
            ],
        },
    ),
    BlockVariant(
        "testimonial", TestimonialBlock, "Testimonial", "💬",
        "Customer testimonial with photo and quote", "content",
        {"quote": "Add your testimonial quote here", "author": {"name": "Customer Name"}},
    ),
    BlockVariant(
        "logoCloud", LogoCloudBlock, "Logo Cloud", "🏢",
        "Grid of client or partner logos", "content",
        {"title": "Trusted by", "brands": [{"name": "Brand name", "logo": "/images/logo-placeholder.svg"}]},
    ),
    BlockVariant(
        "metrics", MetricsBlock, "Metrics", "📊",
        "Display key statistics or numbers", "content",
        {"items": [{"label": "Projects delivered", "value": "100+"}, {"label": "Client satisfaction", "value": "98%"}]},
    ),
    BlockVariant(
        "richText", RichTextBlock, "Rich Text", "📝",
        "Formatted text with headings and paragraphs", "content",
        {"content": "Add your content here..."},
    ),
    BlockVariant(
        "faq", FAQBlock, "FAQ", "❓",
        "Frequently asked questions", "content",
        {"items": [{"q": "Your question here?", "a": "Your answer here."}]},
    ),
    BlockVariant(
        "priceTable", PriceTableBlock, "Pricing Table", "💰",
        "Comparison table of pricing plans", "content",
        {"plans": [{
            "name": "Starter", "price": "€0", "period": "month",
            "features": ["First feature"], "cta": {"label": "Choose plan", "href": "/contact"},
        }]},
    ),
    BlockVariant(
        "comparison", ComparisonBlock, "Comparison", "⚖️",
        "Side-by-side comparison table", "layout",
        {"criteria": ["Criterion"], "left": ["Option A"], "right": ["Option B"]},
    ),
    BlockVariant(
        "contactForm", ContactFormBlock, "Contact Form", "✉️",
        "Lead capture form", "forms",
        {"formKey": "contact", "heading": "Get in touch"},
    ),
    BlockVariant(
        "media", MediaBlock, "Media", "🖼️",
        "Image or video with caption", "media",
        {"kind": "image", "src": "/images/placeholder.jpg", "alt": "Placeholder image"},
    ),
]

_REGISTRY: Dict[str, BlockVariant] = {v.block_type: v for v in _BUILTIN_VARIANTS}

BLOCK_TYPES = tuple(_REGISTRY)


def register(variant: BlockVariant) -> None:
    """Ajoute (ou remplace) un type de bloc."""
    _REGISTRY[variant.block_type] = variant


def unregister(block_type: str) -> None:
    _REGISTRY.pop(block_type, None)


def is_valid_type(block_type: Any) -> bool:
    return isinstance(block_type, str) and block_type in _REGISTRY


def get_variant(block_type: Any) -> Optional[BlockVariant]:
    if not isinstance(block_type, str):
        return None
    return _REGISTRY.get(block_type)


def all_variants() -> List[BlockVariant]:
    return list(_REGISTRY.values())


def _kind(annotation: Any) -> str:
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        return _kind(args[0]) if len(args) == 1 else "any"
    if origin is Literal:
        return "enum"
    if origin in (list, List):
        return "list"
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return "object"
    return {str: "string", int: "integer", bool: "boolean", float: "number"}.get(annotation, "any")


def fields_for(block_type: str) -> List[FieldSpec]:
    """
    Champs de payload d'un type (identité de BaseBlock exclue), noms du fil.
    Type inconnu → liste vide.
    """
    variant = get_variant(block_type)
    if variant is None:
        return []

    specs = []
    for name, info in variant.model.model_fields.items():
        if name in BaseBlock.model_fields:
            continue
        wire_name = info.alias or name
        specs.append(FieldSpec(
            name=wire_name,
            required=info.is_required(),
            kind=_kind(info.annotation),
            default=variant.defaults.get(wire_name),
        ))
    return specs


def parse_block(data: dict) -> BaseBlock:
    """
    Valide un bloc canonique contre son variant (BaseBlock pour un type inconnu).
    Lève pydantic.ValidationError si la forme ne correspond pas au type.
    """
    variant = get_variant(data.get("type"))
    model = variant.model if variant else BaseBlock
    return model.model_validate(data)


def catalog() -> List[dict]:
    """Palette : métadonnées + JSON schema de chaque type enregistré."""
    return [
        {
            "type":        v.block_type,
            "label":       v.label,
            "icon":        v.icon,
            "description": v.description,
            "category":    v.category,
            "fields":      [f.model_dump() for f in fields_for(v.block_type)],
            "schema":      v.model.model_json_schema(by_alias=True),
        }
        for v in _REGISTRY.values()
    ]
