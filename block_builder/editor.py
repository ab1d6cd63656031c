"""
Éditeur de blocs : moteur d'ordonnancement d'une page en cours d'édition.

Seul composant qui modifie la séquence. Synchrone, un seul propriétaire,
la dernière mutation l'emporte.

Glisser-déposer en deux temps :
    IDLE --begin_drag(sujet)--> DRAGGING --drop(cible) | cancel_drag()--> IDLE
Pendant DRAGGING, toute autre mutation est refusée.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from .blocks import BaseBlock
from .factory import create_block
from .registry import parse_block

log = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("id", "type")


class DragState(str, Enum):
    IDLE     = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSubject:
    """Ce qui est glissé : un bloc existant ou un type depuis la palette."""
    block_id: Optional[str] = None
    palette_type: Optional[str] = None

    @classmethod
    def block(cls, block_id: str) -> "DragSubject":
        return cls(block_id=block_id)

    @classmethod
    def palette(cls, block_type: str) -> "DragSubject":
        return cls(palette_type=block_type)

    @property
    def from_palette(self) -> bool:
        return self.palette_type is not None


class BlockEditor:
    """
    Séquence ordonnée des blocs d'une page.

    Usage:
        >>> editor = BlockEditor(deserialize_blocks(records))
        >>> editor.insert_from_palette("hero", 0)
        >>> editor.reorder(a.id, b.id)
        >>> records = serialize_blocks(editor.blocks)
    """

    def __init__(self, blocks: Optional[Iterable[BaseBlock]] = None):
        self._blocks: List[BaseBlock] = []
        for block in blocks or []:
            if self.index_of(block.id) >= 0:
                log.warning("Bloc %r en double ignoré : les ids sont uniques dans la séquence", block.id)
                continue
            self._blocks.append(block)
        self._subject: Optional[DragSubject] = None
        self.selected_id: Optional[str] = None

    # ── Lecture ─────────────────────────────────────────────────────────────

    @property
    def blocks(self) -> Tuple[BaseBlock, ...]:
        return tuple(self._blocks)

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._subject is not None else DragState.IDLE

    @property
    def subject(self) -> Optional[DragSubject]:
        return self._subject

    def __len__(self) -> int:
        return len(self._blocks)

    def index_of(self, block_id: Optional[str]) -> int:
        for index, block in enumerate(self._blocks):
            if block.id == block_id:
                return index
        return -1

    def get(self, block_id: str) -> Optional[BaseBlock]:
        index = self.index_of(block_id)
        return self._blocks[index] if index >= 0 else None

    @property
    def selected(self) -> Optional[BaseBlock]:
        return self.get(self.selected_id) if self.selected_id else None

    # ── Mutations ───────────────────────────────────────────────────────────

    def _busy(self, operation: str) -> bool:
        if self._subject is not None:
            log.warning("%s refusé : glisser-déposer en cours (%s)", operation, self._subject)
            return True
        return False

    def insert_from_palette(self, block_type: str, target_index: Optional[int] = None) -> Optional[BaseBlock]:
        if self._busy("insert_from_palette"):
            return None
        return self._insert(block_type, target_index)

    def reorder(self, source_id: str, target_id: str) -> bool:
        if self._busy("reorder"):
            return False
        return self._move(source_id, target_id)

    def update(self, block_id: str, fields: Dict[str, Any]) -> bool:
        """
        Fusionne des champs (noms du fil) dans un bloc. `id` et `type` sont ignorés.
        Un bloc conforme à son variant doit le rester : sinon la fusion est rejetée.
        """
        if self._busy("update"):
            return False
        index = self.index_of(block_id)
        if index < 0:
            return False

        ignored = [k for k in fields if k in IMMUTABLE_FIELDS]
        if ignored:
            log.debug("update %s : champs immuables ignorés %s", block_id, ignored)
        changes = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}

        current = self._blocks[index]
        merged = {**current.to_record(), **changes}
        try:
            updated = parse_block(merged)
        except ValidationError as e:
            if type(current) is not BaseBlock:
                log.warning("update %s rejeté : %d erreur(s) de schéma", block_id, e.error_count())
                return False
            # bloc legacy ou type inconnu : déjà hors variant, fusion libre
            updated = BaseBlock.model_validate(merged)

        self._blocks[index] = updated
        return True

    def delete(self, block_id: str) -> bool:
        if self._busy("delete"):
            return False
        index = self.index_of(block_id)
        if index < 0:
            return False
        del self._blocks[index]
        if self.selected_id == block_id:
            self.selected_id = None
        return True

    def select(self, block_id: str) -> bool:
        if self.index_of(block_id) < 0:
            return False
        self.selected_id = block_id
        return True

    def clear_selection(self) -> None:
        self.selected_id = None

    # ── Glisser-déposer ─────────────────────────────────────────────────────

    def begin_drag(self, subject: DragSubject) -> bool:
        if self._subject is not None:
            log.warning("begin_drag refusé : %s déjà en cours", self._subject)
            return False
        if not subject.from_palette and self.index_of(subject.block_id) < 0:
            log.warning("begin_drag refusé : bloc %r absent", subject.block_id)
            return False
        self._subject = subject
        return True

    def drop(self, target_id: Optional[str] = None) -> Optional[BaseBlock]:
        """
        Valide le glisser-déposer en une seule mutation et revient à IDLE.

        - depuis la palette : insertion avant `target_id` (fin de liste si absent / inconnu)
        - bloc existant : déplacement à la place de `target_id` ; sans cible → aucune mutation
        Retourne le bloc inséré / déplacé, ou None si rien n'a changé.
        """
        subject, self._subject = self._subject, None
        if subject is None:
            return None

        if subject.from_palette:
            index = self.index_of(target_id) if target_id else -1
            return self._insert(subject.palette_type, index if index >= 0 else None)

        if target_id is None or not self._move(subject.block_id, target_id):
            return None
        return self.get(subject.block_id)

    def cancel_drag(self) -> None:
        self._subject = None

    # ── Internes ────────────────────────────────────────────────────────────

    def _insert(self, block_type: str, target_index: Optional[int]) -> BaseBlock:
        block = create_block(block_type)
        if target_index is None or not 0 <= target_index < len(self._blocks):
            self._blocks.append(block)
        else:
            self._blocks.insert(target_index, block)
        return block

    def _move(self, source_id: str, target_id: str) -> bool:
        if source_id == target_id:
            return False
        old_index = self.index_of(source_id)
        new_index = self.index_of(target_id)
        if old_index < 0 or new_index < 0:
            log.debug("reorder ignoré : %r ou %r absent", source_id, target_id)
            return False
        block = self._blocks.pop(old_index)
        self._blocks.insert(new_index, block)
        return True
