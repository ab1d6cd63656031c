"""
Tests assainissement : bleach + déballage des couches éditeur
"""
import sys, os, copy
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from block_builder.sanitize import sanitize_block_data, sanitize_rich_text


class TestSanitizeRichText:
    def test_script_supprime(self):
        assert "<script>" not in sanitize_rich_text("<p>Hi</p><script>alert(1)</script>")

    def test_balises_autorisees(self):
        html = '<h2>Title</h2><p><a href="https://example.com">link</a></p>'
        assert sanitize_rich_text(html) == html

    def test_style_et_handlers_supprimes(self):
        cleaned = sanitize_rich_text('<p style="color:red" onclick="x()">Hi</p>')
        assert cleaned == "<p>Hi</p>"

    def test_protocole_javascript(self):
        assert "javascript" not in sanitize_rich_text('<a href="javascript:alert(1)">x</a>')

    def test_vide(self):
        assert sanitize_rich_text("") == ""
        assert sanitize_rich_text(None) == ""


class TestSanitizeBlockData:
    def test_chaines_html_nettoyees_partout(self):
        block = {"id": "1", "type": "faq", "items": [{"q": "Q<script>x</script>", "a": "A"}]}
        cleaned = sanitize_block_data(block)
        assert "<script>" not in cleaned["items"][0]["q"]
        assert cleaned["items"][0]["a"] == "A"

    def test_texte_brut_intact(self):
        block = {"id": "1", "type": "hero", "headline": "Tom & Jerry", "content": "a & b"}
        assert sanitize_block_data(block) == block

    def test_deballage_couches_editeur(self):
        block = {"type": "hero", "visible": True, "data": {"id": "1", "type": "hero", "data": {"id": "1", "type": "hero", "headline": "Welcome"}}}
        assert sanitize_block_data(block) == {"id": "1", "type": "hero", "headline": "Welcome"}

    def test_data_non_bloc_conserve(self):
        block = {"id": "1", "type": "custom", "data": {"foo": "bar"}}
        assert sanitize_block_data(block) == block

    def test_entree_non_modifiee(self):
        block = {"id": "1", "type": "richText", "content": "<p>x</p><script>y</script>"}
        snapshot = copy.deepcopy(block)
        sanitize_block_data(block)
        assert block == snapshot

    def test_non_objet(self):
        assert sanitize_block_data("x") == "x"
        assert sanitize_block_data(None) is None
