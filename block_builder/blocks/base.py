"""
Blocs de base : identité commune + sous-objets partagés (CTA).
Noms camelCase sur le fil (stockage, API), snake_case côté Python.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BlockModel(BaseModel):
    """Modèle de payload : alias camelCase, champs inconnus conservés (données legacy)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class CTA(BlockModel):
    label: str
    href: str


class BaseBlock(BlockModel):
    """Bloc de base (classe parente de tous les variants, et forme minimale des types inconnus)."""
    id: str
    type: str
    visible: bool = True
    analytics_id: Optional[str] = None
    variant: Optional[str] = None
    class_name: Optional[str] = None

    def to_record(self) -> dict:
        """Forme canonique sérialisable (alias du fil, sans les None)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
