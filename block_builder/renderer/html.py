"""
Renderer HTML : blocs stockés → blocs canoniques filtrés / ordonnés → HTML.

Dispatch par `type` via une table fixe. Entrée absente ou à None (type connu,
vue pas encore livrée) → placeholder visible, jamais d'exception : un bloc
cassé ne doit pas faire tomber la page.
"""
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from markupsafe import escape

from ..envelope import record_order
from ..normalizer import normalize_block
from ..sanitize import sanitize_rich_text

log = logging.getLogger(__name__)

View = Callable[[Mapping[str, Any]], str]


# ── Helpers ─────────────────────────────────────────────────────────────────

def _e(value: Any) -> str:
    return "" if value is None else str(escape(value))


def _classes(block: Mapping[str, Any], *names: str) -> str:
    classes = list(names)
    if block.get("className"):
        classes.append(str(block["className"]))
    return _e(" ".join(classes))


def _id_attr(block: Mapping[str, Any]) -> str:
    return f' id="block-{_e(block.get("id"))}"' if block.get("id") else ""


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, dict) else {}


def _cta(cta: Any, css: str) -> str:
    cta = _dict(cta)
    if not cta.get("label"):
        return ""
    return f'<a href="{_e(cta.get("href") or "#")}" class="{css}">{_e(cta["label"])}</a>'


def _heading(block: Mapping[str, Any], prefix: str, default: Optional[str] = None) -> str:
    heading = block.get("heading") or block.get("title") or default
    if not heading:
        return ""
    subtitle = block.get("subtitle") or block.get("subheading")
    sub = f'<p class="{prefix}__subtitle">{_e(subtitle)}</p>' if subtitle else ""
    return f'<div class="{prefix}__header"><h2 class="{prefix}__title">{_e(heading)}</h2>{sub}</div>'


# ── Vues par type ───────────────────────────────────────────────────────────

def render_hero(b: Mapping[str, Any]) -> str:
    eyebrow = f'<p class="hero__eyebrow">{_e(b["eyebrow"])}</p>\n    ' if b.get("eyebrow") else ""
    subcopy = f'\n    <p class="hero__subcopy">{_e(b["subcopy"])}</p>' if b.get("subcopy") else ""

    # `cta` : ancien nom du CTA principal encore présent en base
    primary   = _cta(b.get("primaryCTA") or b.get("cta"), "btn btn-primary")
    secondary = _cta(b.get("secondaryCTA"), "btn btn-secondary")
    cta_group = f'\n    <div class="hero__cta-group">{primary}{secondary}</div>' if (primary or secondary) else ""

    badges = "".join(
        f'<span class="hero__badge">{_e(_dict(badge).get("label"))}</span>'
        for badge in _list(b.get("badges")) if _dict(badge).get("label")
    )
    badges_html = f'\n    <div class="hero__badges">{badges}</div>' if badges else ""

    media = _dict(b.get("media"))
    media_html = ""
    if media.get("src"):
        if media.get("kind") == "video":
            media_html = f'\n  <video class="hero__media" src="{_e(media["src"])}" autoplay muted loop playsinline></video>'
        else:
            media_html = f'\n  <img class="hero__media" src="{_e(media["src"])}" alt="{_e(media.get("alt"))}">'

    return f"""<section class="{_classes(b, "hero")}"{_id_attr(b)}>
  <div class="hero__content">
    {eyebrow}<h1 class="hero__headline">{_e(b.get("headline") or "")}</h1>{subcopy}{cta_group}{badges_html}
  </div>{media_html}
</section>"""


def render_feature_grid(b: Mapping[str, Any]) -> str:
    # `features` : ancien nom de `items`
    items = _list(b.get("items")) or _list(b.get("features"))
    columns = b.get("columns") if b.get("columns") in (2, 3, 4) else 3

    cards = ""
    for item in items:
        item = _dict(item)
        icon = f'<span class="features__icon">{_e(item["icon"])}</span>' if item.get("icon") else ""
        body = item.get("body") or item.get("description") or ""
        card = f"""<div class="features__card">
  {icon}<h3 class="features__card-title">{_e(item.get("title"))}</h3>
  <p class="features__card-body">{_e(body)}</p>
</div>"""
        link = item.get("link") or item.get("href")
        cards += f'<a href="{_e(link)}" class="features__link">{card}</a>' if link else card

    return f"""<section class="{_classes(b, "features", f"features--cols-{columns}")}"{_id_attr(b)}>
  <div class="container">
    {_heading(b, "features")}
    <div class="features__grid">{cards}</div>
  </div>
</section>"""


def render_testimonial(b: Mapping[str, Any]) -> str:
    author = b.get("author")
    # ancienne forme : author = "Nom", role / company au niveau du bloc
    if isinstance(author, str):
        author = {"name": author, "role": b.get("role"), "company": b.get("company")}
    author = _dict(author)

    role = ", ".join(_e(part) for part in (author.get("role"), author.get("company")) if part)
    role_html = f'<div class="testimonial__role">{role}</div>' if role else ""
    avatar = f'<img src="{_e(author["avatar"])}" alt="{_e(author.get("name"))}" class="testimonial__avatar">' if author.get("avatar") else ""

    metric = _dict(b.get("metric"))
    metric_html = ""
    if metric.get("value"):
        metric_html = f"""
    <div class="testimonial__metric"><span class="testimonial__metric-value">{_e(metric["value"])}</span> {_e(metric.get("label"))}</div>"""

    return f"""<section class="{_classes(b, "testimonial")}"{_id_attr(b)}>
  <blockquote class="testimonial__quote">
    <p>&ldquo;{_e(b.get("quote") or "")}&rdquo;</p>
    <footer class="testimonial__author">{avatar}<div class="testimonial__name">{_e(author.get("name"))}</div>{role_html}</footer>{metric_html}
  </blockquote>
</section>"""


def render_logo_cloud(b: Mapping[str, Any]) -> str:
    logos = ""
    for brand in _list(b.get("brands")) or _list(b.get("logos")):
        brand = _dict(brand)
        # `logos[{src, alt, href}]` : ancienne forme
        src  = brand.get("logo") or brand.get("src")
        name = brand.get("name") or brand.get("alt") or ""
        url  = brand.get("url") or brand.get("href")
        if not src:
            continue
        img = f'<img src="{_e(src)}" alt="{_e(name)}" class="logos__img">'
        if url:
            img = f'<a href="{_e(url)}" target="_blank" rel="noopener noreferrer">{img}</a>'
        logos += f'<div class="logos__item">{img}</div>'

    return f"""<section class="{_classes(b, "logos")}"{_id_attr(b)}>
  <div class="container">
    {_heading(b, "logos")}
    <div class="logos__grid">{logos}</div>
  </div>
</section>"""


def render_metrics(b: Mapping[str, Any]) -> str:
    items_html = ""
    for item in _list(b.get("items")) or _list(b.get("metrics")):
        item = _dict(item)
        help_text = item.get("helpText") or item.get("description")
        help_html = f'<div class="metrics__help">{_e(help_text)}</div>' if help_text else ""
        items_html += f"""<div class="metrics__item">
  <div class="metrics__value">{_e(item.get("value"))}</div>
  <div class="metrics__label">{_e(item.get("label"))}</div>
  {help_html}
</div>"""

    return f"""<section class="{_classes(b, "metrics")}"{_id_attr(b)}>
  <div class="container">
    {_heading(b, "metrics")}
    <div class="metrics__grid">{items_html}</div>
  </div>
</section>"""


def _portable_text(content: List[Any]) -> str:
    paragraphs = []
    for node in content:
        if isinstance(node, str):
            paragraphs.append(node)
            continue
        node = _dict(node)
        text = node.get("text") or "".join(
            str(_dict(child).get("text", "")) for child in _list(node.get("children"))
        )
        if text:
            paragraphs.append(text)
    return "".join(f"<p>{_e(p)}</p>" for p in paragraphs)


def render_rich_text(b: Mapping[str, Any]) -> str:
    content = b.get("content")
    if isinstance(content, str):
        body = sanitize_rich_text(content)
    elif isinstance(content, list):
        body = _portable_text(content)
    else:
        body = ""

    return f"""<section class="{_classes(b, "rich-text")}"{_id_attr(b)}>
  <div class="container">
    {_heading(b, "rich-text")}
    <div class="rich-text__body">{body}</div>
  </div>
</section>"""


def render_faq(b: Mapping[str, Any]) -> str:
    items_html = ""
    for item in _list(b.get("items")):
        item = _dict(item)
        question = item.get("q") or item.get("question") or ""
        answer   = item.get("a") or item.get("answer") or ""
        items_html += f"""<details class="faq__item">
  <summary class="faq__question">{_e(question)}</summary>
  <div class="faq__answer">{_e(answer)}</div>
</details>"""

    return f"""<section class="{_classes(b, "faq")}"{_id_attr(b)}>
  <div class="container">
    {_heading(b, "faq", "Frequently Asked Questions")}
    <div class="faq__list">{items_html}</div>
  </div>
</section>"""


def render_price_table(b: Mapping[str, Any]) -> str:
    cards_html = ""
    for plan in _list(b.get("plans")):
        plan = _dict(plan)
        popular  = bool(plan.get("popular"))
        featured = " pricing__card--featured" if popular else ""
        badge    = '<span class="pricing__badge">Most Popular</span>' if popular else ""
        period   = f'<span class="pricing__period">/ {_e(plan["period"])}</span>' if plan.get("period") else ""
        feats    = "".join(f"<li>{_e(f)}</li>" for f in _list(plan.get("features")))
        cards_html += f"""<div class="pricing__card{featured}">
  {badge}
  <div class="pricing__name">{_e(plan.get("name"))}</div>
  <div class="pricing__price">{_e(plan.get("price"))}{period}</div>
  <ul class="pricing__features">{feats}</ul>
  {_cta(plan.get("cta"), "pricing__cta")}
</div>"""

    return f"""<section class="{_classes(b, "pricing")}"{_id_attr(b)}>
  <div class="container">
    {_heading(b, "pricing")}
    <div class="pricing__grid">{cards_html}</div>
  </div>
</section>"""


def render_contact_form(b: Mapping[str, Any]) -> str:
    form_key = b.get("formKey") or "contact"
    subcopy  = f'<p class="contact__subcopy">{_e(b["subcopy"])}</p>' if b.get("subcopy") else ""
    privacy  = f'<p class="contact__privacy">{_e(b["privacyNote"])}</p>' if b.get("privacyNote") else ""
    success  = b.get("successCopy") or "Thank you for your message!"

    return f"""<section class="{_classes(b, "contact")}"{_id_attr(b)}>
  <div class="container">
    <h2 class="contact__heading">{_e(b.get("heading") or "Get in touch")}</h2>
    {subcopy}
    <form class="contact__form" method="post" action="/api/contact/submit" data-success="{_e(success)}">
      <input type="hidden" name="formKey" value="{_e(form_key)}">
      <label>Name * <input type="text" name="name" required></label>
      <label>Email * <input type="email" name="email" required></label>
      <label>Message * <textarea name="message" rows="5" required></textarea></label>
      <button type="submit" class="btn btn-primary">Send message</button>
    </form>
    {privacy}
  </div>
</section>"""


def render_media(b: Mapping[str, Any]) -> str:
    src = b.get("src")
    if not src:
        return ""
    # `type` est pris par le tag du bloc : le genre du média est `kind`
    kind = b.get("kind") or "image"
    if kind == "video":
        poster = f' poster="{_e(b["poster"])}"' if b.get("poster") else ""
        inner  = f'<video src="{_e(src)}"{poster} controls class="media__video"></video>'
    else:
        inner = f'<img src="{_e(src)}" alt="{_e(b.get("alt"))}" class="media__img">'
    caption = f'<figcaption class="media__caption">{_e(b["caption"])}</figcaption>' if b.get("caption") else ""

    return f"""<figure class="{_classes(b, "media", f"media--{kind}")}"{_id_attr(b)}>
  {inner}
  {caption}
</figure>"""


_VIEWS: Dict[str, Optional[View]] = {
    "hero":        render_hero,
    "featureGrid": render_feature_grid,
    "testimonial": render_testimonial,
    "logoCloud":   render_logo_cloud,
    "metrics":     render_metrics,
    "richText":    render_rich_text,
    "faq":         render_faq,
    "priceTable":  render_price_table,
    "comparison":  None,
    "contactForm": render_contact_form,
    "media":       render_media,
}


# ── Dispatch ────────────────────────────────────────────────────────────────

def render_placeholder(block_type: Any) -> str:
    return (
        '<div class="block-placeholder">\n'
        f'  <p>Block type "{_e(block_type)}" not implemented yet</p>\n'
        "</div>"
    )


def render_block(block: Mapping[str, Any]) -> str:
    """Rend un bloc canonique ; type inconnu ou vue en échec → placeholder."""
    block_type = block.get("type")
    view = _VIEWS.get(block_type) if isinstance(block_type, str) else None
    if view is None:
        return render_placeholder(block_type)
    try:
        return view(block)
    except Exception:
        log.exception("Rendu du bloc %s (%s) en échec", block.get("id"), block_type)
        return render_placeholder(block_type)


def prepare_blocks(records: Iterable[Any]) -> List[dict]:
    """
    Normalise, écarte les irrécupérables et les invisibles, trie par `order`
    de l'enregistrement d'origine (tri stable, absent → 0).
    """
    entries = []
    for record in records:
        block = normalize_block(record)
        if block is None:
            continue
        if block.get("visible") is False:
            continue
        entries.append((record_order(record), block))
    entries.sort(key=lambda entry: entry[0])
    return [block for _, block in entries]


def render_blocks(records: Iterable[Any]) -> str:
    return "\n".join(render_block(block) for block in prepare_blocks(records))


def render_page(
    title: str,
    records: Iterable[Any],
    lang: str = "en",
    description: Optional[str] = None,
    extra_head: str = "",
) -> str:
    """Génère le HTML complet d'une page."""
    desc = f'\n  <meta name="description" content="{_e(description)}">' if description else ""
    return f"""<!DOCTYPE html>
<html lang="{_e(lang)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{_e(title)}</title>{desc}
  {extra_head}
</head>
<body>
<main>
{render_blocks(records)}
</main>
</body>
</html>"""
