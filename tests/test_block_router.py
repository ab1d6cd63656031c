"""
Tests router block_builder : /blocks/*
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from block_builder.registry import BLOCK_TYPES


class TestCatalog:
    def test_catalog(self, client):
        r = client.get("/blocks/catalog")
        assert r.status_code == 200
        assert [b["type"] for b in r.json()["blocks"]] == list(BLOCK_TYPES)

    def test_fields(self, client):
        r = client.get("/blocks/hero/fields")
        assert r.status_code == 200
        names = [f["name"] for f in r.json()["fields"]]
        assert "headline" in names

    def test_fields_type_inconnu_404(self, client):
        assert client.get("/blocks/unregisteredXyz/fields").status_code == 404


class TestNew:
    def test_new_block(self, client):
        r = client.post("/blocks/new", json={"type": "faq"})
        assert r.status_code == 200
        body = r.json()
        assert body["type"] == "faq"
        assert body["visible"] is True
        assert body["items"]

    def test_new_type_inconnu(self, client):
        body = client.post("/blocks/new", json={"type": "unregisteredXyz"}).json()
        assert set(body) == {"id", "type", "visible"}


class TestNormalize:
    def test_normalize(self, client):
        records = [
            {"id": "x", "type": "hero", "order": 0, "data": {"headline": "", "subcopy": ""}},
            {"foo": "bar"},
        ]
        r = client.post("/blocks/normalize", json=records)
        assert r.status_code == 200
        assert r.json() == [
            {"headline": "", "subcopy": "", "id": "x", "type": "hero", "visible": True},
            None,
        ]


class TestValidate:
    def test_valide(self, client):
        body = client.post("/blocks/validate", json={"id": "1", "type": "hero", "headline": "Welcome"}).json()
        assert body == {"valid": True, "known_type": True}

    def test_invalide(self, client):
        body = client.post("/blocks/validate", json={"id": "1", "type": "hero", "headline": "x"}).json()
        assert body["valid"] is False
        assert body["errors"][0]["loc"] == "headline"

    def test_type_inconnu(self, client):
        body = client.post("/blocks/validate", json={"id": "1", "type": "unregisteredXyz"}).json()
        assert body == {"valid": True, "known_type": False}


class TestRender:
    def test_render_ordre_et_placeholder(self, client):
        records = [
            {"id": "1", "type": "hero", "order": 1, "data": {"headline": "Welcome"}},
            {"id": "2", "type": "hero", "order": 0, "data": {"headline": "First"}},
            {"id": "3", "type": "unregisteredXyz", "order": 2},
        ]
        r = client.post("/blocks/render", json=records)
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/html")
        html = r.text
        assert html.index("First") < html.index("Welcome")
        assert 'Block type "unregisteredXyz" not implemented yet' in html

    def test_render_order_non_fini(self, client):
        body = (
            '[{"id":"1","type":"hero","order":NaN,"data":{"headline":"Welcome"}},'
            ' {"id":"2","type":"hero","order":-1,"data":{"headline":"First"}}]'
        )
        r = client.post("/blocks/render", content=body, headers={"Content-Type": "application/json"})
        assert r.status_code == 200
        assert r.text.index("First") < r.text.index("Welcome")
