"""
Router FastAPI : endpoints block_builder.

GET  /blocks/catalog              → palette : types, métadonnées, champs, JSON schemas
GET  /blocks/{block_type}/fields  → champs de payload d'un type (404 si inconnu)
POST /blocks/new                  → {"type"} → bloc neuf avec valeurs par défaut
POST /blocks/normalize            → enregistrements stockés → blocs canoniques (ou null)
POST /blocks/validate             → bloc canonique → {"valid": bool, "errors"?}
POST /blocks/render               → enregistrements stockés → fragment HTML
"""
from typing import Any, List

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ValidationError

from .factory import create_block
from .normalizer import normalize_block
from .registry import catalog as registry_catalog, fields_for, is_valid_type, parse_block
from .renderer.html import render_blocks

router = APIRouter(prefix="/blocks", tags=["blocks"])


class NewBlockRequest(BaseModel):
    type: str


@router.get("/catalog", summary="Liste les types de blocs disponibles")
def catalog() -> JSONResponse:
    return JSONResponse({"blocks": registry_catalog()})


@router.get("/{block_type}/fields", summary="Champs de payload d'un type de bloc")
def block_fields(block_type: str) -> dict:
    if not is_valid_type(block_type):
        raise HTTPException(404, f"Type de bloc '{block_type}' inconnu")
    return {"type": block_type, "fields": [f.model_dump() for f in fields_for(block_type)]}


@router.post("/new", summary="Crée un bloc neuf (valeurs par défaut du type)")
def new_block(req: NewBlockRequest) -> dict:
    return create_block(req.type).to_record()


@router.post("/normalize", summary="Normalise des enregistrements stockés")
def normalize(records: List[Any] = Body(...)) -> list:
    """Un élément par enregistrement : bloc canonique, ou null si irrécupérable."""
    return [normalize_block(r) for r in records]


@router.post("/validate", summary="Valide un bloc canonique contre son type")
def validate(block: dict = Body(...)) -> dict:
    """Type inconnu : seule l'identité (id, type) est vérifiée."""
    try:
        parse_block(block)
        return {"valid": True, "known_type": is_valid_type(block.get("type"))}
    except ValidationError as e:
        errors = [
            {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        return {"valid": False, "errors": errors}


@router.post("/render", response_class=HTMLResponse, summary="Rend des blocs en fragment HTML")
def render(records: List[Any] = Body(...)) -> HTMLResponse:
    return HTMLResponse(content=render_blocks(records))
