"""
Tests enveloppe de stockage : serialize_blocks / deserialize_blocks
"""
import sys, os, json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from block_builder.blocks import BaseBlock
from block_builder.envelope import deserialize_blocks, record_order, serialize_blocks, sort_records
from block_builder.factory import create_block
from block_builder.registry import BLOCK_TYPES, parse_block


class TestSerialize:
    def test_forme_enveloppe(self):
        block = parse_block({"id": "1", "type": "hero", "headline": "Welcome"})
        [record] = serialize_blocks([block])
        assert record == {
            "type": "hero",
            "data": {"id": "1", "type": "hero", "visible": True, "headline": "Welcome"},
            "order": 0,
        }

    def test_order_egal_index(self):
        records = serialize_blocks([create_block("faq") for _ in range(3)])
        assert [r["order"] for r in records] == [0, 1, 2]


class TestRoundTrip:
    def test_tous_les_types(self):
        blocks = [create_block(t) for t in BLOCK_TYPES]
        restored = deserialize_blocks(serialize_blocks(blocks))
        assert [b.to_record() for b in restored] == [b.to_record() for b in blocks]
        assert [type(b) for b in restored] == [type(b) for b in blocks]

    def test_bloc_masque_et_champs_optionnels(self):
        block = parse_block({
            "id": "h", "type": "hero", "headline": "Welcome", "visible": False,
            "primaryCTA": {"label": "Go", "href": "/go"}, "analyticsId": "hero-top",
        })
        [restored] = deserialize_blocks(serialize_blocks([block]))
        assert restored.to_record() == block.to_record()

    def test_ordre_apres_melange_des_enregistrements(self):
        blocks = [create_block("hero"), create_block("faq"), create_block("media")]
        records = list(reversed(serialize_blocks(blocks)))
        assert [b.id for b in deserialize_blocks(records)] == [b.id for b in blocks]


class TestDeserialize:
    def test_irrecuperable_ignore(self):
        records = [{"foo": "bar"}, {"type": "hero", "order": 0, "data": {"id": "1", "type": "hero", "headline": "Welcome"}}]
        assert [b.id for b in deserialize_blocks(records)] == ["1"]

    def test_legacy_hors_schema_conserve(self):
        records = [{"type": "hero", "order": 0, "data": {"id": "1", "type": "hero", "title": "Old hero"}}]
        [block] = deserialize_blocks(records)
        assert type(block) is BaseBlock
        assert block.to_record()["title"] == "Old hero"

    def test_canonique_accepte(self):
        [block] = deserialize_blocks([{"id": "1", "type": "faq", "items": [{"q": "Q?", "a": "A."}]}])
        assert block.type == "faq"


class TestOrder:
    def test_record_order(self):
        assert record_order({"order": 3}) == 3
        assert record_order({}) == 0
        assert record_order({"order": "3"}) == 0
        assert record_order({"order": True}) == 0
        assert record_order("nope") == 0

    def test_tri_stable(self):
        records = [{"id": "x", "order": 1}, {"id": "y"}, {"id": "z", "order": 0}]
        assert [r["id"] for r in sort_records(records)] == ["y", "z", "x"]

    def test_order_non_fini(self):
        assert record_order({"order": float("nan")}) == 0
        assert record_order({"order": float("inf")}) == 0
        assert record_order({"order": float("-inf")}) == 0

    def test_order_fractionnaire(self):
        records = [{"id": "a", "order": 0.7}, {"id": "b", "order": 0.2}]
        assert [r["id"] for r in sort_records(records)] == ["b", "a"]

    def test_deserialize_order_non_fini(self):
        records = json.loads(
            '[{"type":"hero","order":Infinity,"data":{"id":"1","type":"hero","headline":"Welcome"}},'
            ' {"type":"hero","order":NaN,"data":{"id":"2","type":"hero","headline":"Second"}},'
            ' {"type":"hero","order":-1,"data":{"id":"3","type":"hero","headline":"First"}}]'
        )
        assert [b.id for b in deserialize_blocks(records)] == ["3", "1", "2"]


class TestIdsUniques:
    def test_premiere_occurrence_gardee(self):
        records = [
            {"type": "hero", "order": 0, "data": {"id": "dup", "type": "hero", "headline": "First"}},
            {"type": "hero", "order": 1, "data": {"id": "dup", "type": "hero", "headline": "Second"}},
            {"type": "hero", "order": 2, "data": {"id": "other", "type": "hero", "headline": "Third"}},
        ]
        blocks = deserialize_blocks(records)
        assert [b.id for b in blocks] == ["dup", "other"]
        assert blocks[0].headline == "First"


class TestClean:
    def test_clean_apres_normalisation(self):
        seen = []

        def clean(block):
            seen.append(block)
            return {**block, "subcopy": "cleaned"}

        records = [{"id": "1", "type": "hero", "order": 0, "data": {"type": "hero", "headline": "Welcome"}}]
        [block] = deserialize_blocks(records, clean=clean)
        assert seen[0]["id"] == "1"
        assert block.subcopy == "cleaned"
