"""Codex Site : pages à blocs : persistance SQLite + API publique / admin."""
