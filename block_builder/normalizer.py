"""
Normalizer : enregistrement stocké (forme ambiguë) → bloc canonique ou None.

Formes reconnues :
  1. canonique   {id, type, ...payload}            sans champ `data`
  2. enveloppe   {id?, type, order, data: {...}}   `data` éventuellement ré-emballé
  3. autre       déballage borné de `.data` jusqu'à trouver {id, type}

Politique de l'enveloppe : on garde le nœud le plus profond qui porte un
contenu réel ; sinon le nœud le moins profond, identité complétée.

Pure (l'entrée n'est jamais modifiée) et totale (aucune exception ne sort).
"""
import logging
from typing import Any, Optional

log = logging.getLogger(__name__)

MAX_UNWRAP_DEPTH = 5

TEXT_FIELDS  = ("headline", "title", "content", "quote", "subcopy", "eyebrow")
ARRAY_FIELDS = ("items", "features", "badges", "brands")
CTA_FIELDS   = ("cta", "primaryCTA")


def _filled(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _coalesce(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def has_non_empty_content(node: Any) -> bool:
    """Vrai si le nœud porte au moins un texte, une liste ou un label de CTA non vide."""
    if not isinstance(node, dict):
        return False
    if any(_filled(node.get(f)) for f in TEXT_FIELDS):
        return True
    if any(isinstance(node.get(f), list) and len(node[f]) > 0 for f in ARRAY_FIELDS):
        return True
    for f in CTA_FIELDS:
        cta = node.get(f)
        if isinstance(cta, dict) and _filled(cta.get("label")):
            return True
    return False


def _with_identity(node: dict, fallback_id: Any, fallback_type: Any) -> dict:
    return {
        **node,
        "id":   _coalesce(node.get("id"), fallback_id),
        "type": _coalesce(node.get("type"), fallback_type),
    }


def _with_visibility(node: dict) -> dict:
    visible = node.get("visible")
    return {**node, "visible": visible if isinstance(visible, bool) else True}


def extract_deepest_valid_content(
    node: Any,
    fallback_id: Any = None,
    fallback_type: Any = None,
    depth: int = 0,
) -> Any:
    """
    Descend dans les `data` imbriqués.

    - nœud avec contenu ET (type ou id) → retourné tel quel
    - sinon, si `data` est un objet → récursion ; résultat retenu s'il a du contenu
    - sinon → nœud courant, id/type complétés par les valeurs de repli
    """
    if not isinstance(node, dict):
        return node

    if has_non_empty_content(node) and (node.get("type") or node.get("id")):
        return node

    nested = node.get("data")
    if isinstance(nested, dict) and depth < MAX_UNWRAP_DEPTH:
        # les valeurs de repli de l'appelant descendent telles quelles
        deeper = extract_deepest_valid_content(nested, fallback_id, fallback_type, depth + 1)
        if has_non_empty_content(deeper):
            return deeper

    return _with_identity(node, fallback_id, fallback_type)


def _is_canonical(record: dict) -> bool:
    return bool(record.get("type")) and bool(record.get("id")) and record.get("data") is None


def _is_envelope(record: dict) -> bool:
    return bool(record.get("type")) and "order" in record and isinstance(record.get("data"), dict)


def _normalize(record: Any) -> Optional[dict]:
    if not isinstance(record, dict):
        log.warning("Bloc ignoré : enregistrement non objet (%s)", type(record).__name__)
        return None

    # 1. Déjà canonique
    if _is_canonical(record):
        return _with_visibility(record)

    # 2. Enveloppe {type, order, data}
    if _is_envelope(record):
        content = extract_deepest_valid_content(record["data"], record.get("id"), record.get("type"))
        if not isinstance(content, dict):
            return None
        content = _with_identity(content, record.get("id"), record.get("type"))
        if not content["id"] or not content["type"]:
            log.warning("Bloc ignoré : enveloppe sans identité récupérable (type=%r)", record.get("type"))
            return None
        return _with_visibility(content)

    # 3. Forme inconnue : déballage borné
    current = record
    unwraps = 0
    while isinstance(current.get("data"), dict) and unwraps < MAX_UNWRAP_DEPTH:
        current = current["data"]
        unwraps += 1

    if current.get("type") and current.get("id"):
        return _with_visibility(current)

    log.warning("Bloc ignoré : aucun {type, id} après %d déballage(s) : clés %s", unwraps, sorted(record))
    return None


def normalize_block(record: Any) -> Optional[dict]:
    """
    Retourne le bloc canonique (id, type, visible garantis) ou None si irrécupérable.
    Ne lève jamais : une erreur interne est journalisée et donne None.
    """
    try:
        return _normalize(record)
    except Exception:
        log.exception("Normalisation du bloc impossible")
        return None
