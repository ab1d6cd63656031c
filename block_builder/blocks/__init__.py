"""
Blocs : exports publics des 11 variants (union étiquetée par `type`).
"""
from .base import BaseBlock, BlockModel, CTA
from .hero import HeroBlock, HeroMedia, HeroBadge
from .feature_grid import FeatureGridBlock, FeatureItem
from .testimonial import TestimonialBlock, TestimonialAuthor, TestimonialMetric
from .logo_cloud import LogoCloudBlock, Brand
from .metrics import MetricsBlock, MetricItem
from .rich_text import RichTextBlock
from .faq import FAQBlock, FAQItem
from .price_table import PriceTableBlock, PricePlan
from .comparison import ComparisonBlock
from .contact_form import ContactFormBlock
from .media import MediaBlock

__all__ = [
    # Base
    "BaseBlock", "BlockModel", "CTA",
    # Hero
    "HeroBlock", "HeroMedia", "HeroBadge",
    # FeatureGrid
    "FeatureGridBlock", "FeatureItem",
    # Testimonial
    "TestimonialBlock", "TestimonialAuthor", "TestimonialMetric",
    # LogoCloud
    "LogoCloudBlock", "Brand",
    # Metrics
    "MetricsBlock", "MetricItem",
    # RichText
    "RichTextBlock",
    # FAQ
    "FAQBlock", "FAQItem",
    # PriceTable
    "PriceTableBlock", "PricePlan",
    # Comparison
    "ComparisonBlock",
    # ContactForm
    "ContactFormBlock",
    # Media
    "MediaBlock",
]
