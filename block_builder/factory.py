"""
Factory : nouveau bloc valide depuis la palette.
"""
import copy
import logging
import uuid

from .blocks import BaseBlock
from .registry import get_variant

log = logging.getLogger(__name__)


def new_block_id() -> str:
    return str(uuid.uuid4())


def create_block(block_type: str) -> BaseBlock:
    """
    Crée un bloc neuf : id unique, visible, valeurs par défaut non vides du registry.

    Type inconnu → bloc minimal {id, type, visible} (jamais d'exception :
    la palette doit toujours pouvoir insérer quelque chose).
    """
    variant = get_variant(block_type)
    if variant is None:
        log.warning("create_block : type %r non enregistré, bloc minimal créé", block_type)
        return BaseBlock(id=new_block_id(), type=str(block_type), visible=True)

    payload = copy.deepcopy(variant.defaults)
    payload.update(id=new_block_id(), type=variant.block_type, visible=True)
    return variant.model.model_validate(payload)
