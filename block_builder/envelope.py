"""
Enveloppe de stockage : frontière entre la séquence en mémoire et la persistance.

    sérialisé : {"type": ..., "data": <bloc canonique complet, id/type inclus>, "order": index}
    désérialisé : tri par `order`, normalisation, validation contre le registry
"""
import logging
import math
from typing import Any, Callable, Iterable, List, Optional

from pydantic import ValidationError

from .blocks import BaseBlock
from .normalizer import normalize_block
from .registry import parse_block

log = logging.getLogger(__name__)


def record_order(record: Any) -> float:
    """`order` d'un enregistrement stocké ; absent, invalide ou non fini (NaN, ±inf) → 0."""
    if not isinstance(record, dict):
        return 0
    order = record.get("order", 0)
    if isinstance(order, bool) or not isinstance(order, (int, float)):
        return 0
    if isinstance(order, float) and not math.isfinite(order):
        return 0
    return order


def sort_records(records: Iterable[Any]) -> List[Any]:
    """Tri stable par `order` croissant (l'ordre d'arrivée départage)."""
    return sorted(records, key=record_order)


def serialize_blocks(blocks: Iterable[BaseBlock]) -> List[dict]:
    return [
        {"type": block.type, "data": block.to_record(), "order": index}
        for index, block in enumerate(blocks)
    ]


def deserialize_blocks(
    records: Iterable[Any],
    clean: Optional[Callable[[dict], dict]] = None,
) -> List[BaseBlock]:
    """
    Enregistrements stockés (enveloppe ou canoniques) → séquence de blocs.

    Un bloc irrécupérable est ignoré. Un bloc récupéré mais hors forme de son
    variant (données legacy) est conservé tel quel en BaseBlock pour ne rien
    perdre à la prochaine sauvegarde. `id` est unique dans la séquence : seule
    la première occurrence est gardée.

    `clean` s'applique au bloc canonique, après normalisation et avant validation.
    """
    blocks = []
    seen = set()
    for record in sort_records(records):
        canonical = normalize_block(record)
        if canonical is None:
            continue
        if clean is not None:
            canonical = clean(canonical)
        block = _load_block(canonical)
        if block is None:
            continue
        if block.id in seen:
            log.warning("Bloc ignoré : id %r en double (%s)", block.id, block.type)
            continue
        seen.add(block.id)
        blocks.append(block)
    return blocks


def _load_block(canonical: dict) -> Optional[BaseBlock]:
    try:
        return parse_block(canonical)
    except ValidationError as e:
        log.warning(
            "Bloc %s (%s) hors schéma, conservé sans validation : %d erreur(s)",
            canonical.get("id"), canonical.get("type"), e.error_count(),
        )
    try:
        return BaseBlock.model_validate(canonical)
    except ValidationError:
        log.warning("Bloc ignoré : identité invalide (id=%r, type=%r)", canonical.get("id"), canonical.get("type"))
        return None
