"""
Tests éditeur : insertion palette, réordonnancement, mise à jour, glisser-déposer
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from block_builder.blocks import BaseBlock
from block_builder.editor import BlockEditor, DragState, DragSubject
from block_builder.registry import parse_block


# ── Helpers ───────────────────────────────────────────────────────────────

def make_hero(block_id, headline="Welcome"):
    return parse_block({"id": block_id, "type": "hero", "headline": headline})


def ids(editor):
    return [b.id for b in editor.blocks]


@pytest.fixture
def editor():
    return BlockEditor([make_hero("a"), make_hero("b"), make_hero("c"), make_hero("d")])


# ── Insertion ─────────────────────────────────────────────────────────────

class TestInsert:
    @pytest.mark.parametrize("index", [0, 1, 2, 3])
    def test_preserve_le_reste(self, editor, index):
        before = ids(editor)
        block = editor.insert_from_palette("faq", index)
        after = ids(editor)
        assert len(after) == len(before) + 1
        assert after[index] == block.id
        assert [i for i in after if i != block.id] == before

    def test_sans_index_ajoute_en_fin(self, editor):
        block = editor.insert_from_palette("metrics")
        assert ids(editor)[-1] == block.id

    def test_index_hors_bornes_ajoute_en_fin(self, editor):
        block = editor.insert_from_palette("metrics", 99)
        assert ids(editor)[-1] == block.id

    def test_editeur_vide(self):
        editor = BlockEditor()
        block = editor.insert_from_palette("hero", 0)
        assert ids(editor) == [block.id]

    def test_type_inconnu_insere_bloc_minimal(self, editor):
        block = editor.insert_from_palette("unregisteredXyz", 0)
        assert type(block) is BaseBlock
        assert ids(editor)[0] == block.id


# ── Réordonnancement ──────────────────────────────────────────────────────

class TestReorder:
    def test_permutation_vers_l_avant(self, editor):
        assert editor.reorder("a", "c") is True
        assert ids(editor) == ["b", "c", "a", "d"]

    def test_permutation_vers_l_arriere(self, editor):
        assert editor.reorder("d", "b") is True
        assert ids(editor) == ["a", "d", "b", "c"]

    def test_meme_multiset(self, editor):
        editor.reorder("b", "d")
        assert sorted(ids(editor)) == ["a", "b", "c", "d"]
        assert ids(editor).index("b") == 3

    def test_no_op_meme_id(self, editor):
        assert editor.reorder("a", "a") is False
        assert ids(editor) == ["a", "b", "c", "d"]

    def test_id_inconnu(self, editor):
        assert editor.reorder("a", "zzz") is False
        assert editor.reorder("zzz", "a") is False
        assert ids(editor) == ["a", "b", "c", "d"]


# ── Mise à jour / suppression / sélection ─────────────────────────────────

class TestUpdate:
    def test_fusion_de_champs(self, editor):
        assert editor.update("a", {"headline": "New headline", "eyebrow": "New"}) is True
        record = editor.get("a").to_record()
        assert record["headline"] == "New headline"
        assert record["eyebrow"] == "New"

    def test_id_et_type_ignores(self, editor):
        assert editor.update("a", {"id": "other", "type": "faq", "subcopy": "x"}) is True
        block = editor.get("a")
        assert block.type == "hero"
        assert editor.get("other") is None

    def test_fusion_invalide_rejetee(self, editor):
        assert editor.update("a", {"headline": "x"}) is False
        assert editor.get("a").headline == "Welcome"

    def test_bloc_legacy_fusion_libre(self):
        legacy = BaseBlock.model_validate({"id": "l", "type": "hero", "title": "Old"})
        editor = BlockEditor([legacy])
        assert editor.update("l", {"title": "Still old"}) is True
        assert editor.get("l").to_record()["title"] == "Still old"

    def test_bloc_absent(self, editor):
        assert editor.update("zzz", {"headline": "Whatever"}) is False


class TestDeleteSelect:
    def test_delete_efface_la_selection(self, editor):
        editor.select("b")
        assert editor.selected.id == "b"
        assert editor.delete("b") is True
        assert editor.selected_id is None
        assert ids(editor) == ["a", "c", "d"]

    def test_delete_absent(self, editor):
        assert editor.delete("zzz") is False

    def test_select_absent(self, editor):
        assert editor.select("zzz") is False
        assert editor.selected is None


# ── Glisser-déposer ───────────────────────────────────────────────────────

class TestDragAndDrop:
    def test_palette_depose_sur_cible(self, editor):
        assert editor.begin_drag(DragSubject.palette("faq")) is True
        assert editor.state is DragState.DRAGGING
        block = editor.drop("c")
        assert editor.state is DragState.IDLE
        assert ids(editor) == ["a", "b", block.id, "c", "d"]

    def test_palette_sans_cible_ajoute_en_fin(self, editor):
        editor.begin_drag(DragSubject.palette("faq"))
        block = editor.drop()
        assert ids(editor)[-1] == block.id

    def test_deplacement_de_bloc(self, editor):
        editor.begin_drag(DragSubject.block("a"))
        moved = editor.drop("c")
        assert moved.id == "a"
        assert ids(editor) == ["b", "c", "a", "d"]

    def test_deplacement_sans_cible(self, editor):
        editor.begin_drag(DragSubject.block("a"))
        assert editor.drop(None) is None
        assert ids(editor) == ["a", "b", "c", "d"]
        assert editor.state is DragState.IDLE

    def test_mutations_refusees_pendant_le_drag(self, editor):
        editor.begin_drag(DragSubject.block("a"))
        assert editor.insert_from_palette("faq") is None
        assert editor.reorder("b", "c") is False
        assert editor.delete("b") is False
        assert editor.update("b", {"subcopy": "x"}) is False
        assert editor.begin_drag(DragSubject.block("b")) is False
        assert len(editor) == 4

    def test_cancel(self, editor):
        editor.begin_drag(DragSubject.block("a"))
        editor.cancel_drag()
        assert editor.state is DragState.IDLE
        assert editor.subject is None
        assert ids(editor) == ["a", "b", "c", "d"]

    def test_begin_drag_bloc_absent(self, editor):
        assert editor.begin_drag(DragSubject.block("zzz")) is False
        assert editor.state is DragState.IDLE

    def test_drop_sans_drag(self, editor):
        assert editor.drop("a") is None


# ── Unicité des ids ───────────────────────────────────────────────────────

class TestIdsUniques:
    def test_doublon_ignore_a_la_construction(self):
        editor = BlockEditor([make_hero("a", "First"), make_hero("a", "Second"), make_hero("b")])
        assert ids(editor) == ["a", "b"]
        assert editor.get("a").headline == "First"

    def test_doublon_plus_atteignable_apres_delete(self):
        editor = BlockEditor([make_hero("a", "First"), make_hero("a", "Second")])
        assert editor.delete("a") is True
        assert len(editor) == 0
