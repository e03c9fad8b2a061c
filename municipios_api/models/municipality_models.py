"""
Municipality models for IBGE data.
"""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


def normalize_keys(data: Any) -> Any:
    """
    Lower-case the top-level keys of a JSON object.

    IBGE field names are matched case-insensitively, so `Id`, `NOME` and
    `nome` all land on the same attribute. Non-dict values pass through
    untouched and are rejected by the model itself.
    """
    if isinstance(data, dict):
        return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
    return data


class _CaseInsensitiveModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _lower_keys(cls, data: Any) -> Any:
        return normalize_keys(data)


class Municipality(_CaseInsensitiveModel):
    """Brazilian municipality data from IBGE."""

    id: int = Field(..., description="IBGE municipality code")
    nome: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("nome", "name"),
        description="Municipality name",
    )

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        json_schema_extra={
            "example": {"id": 3170206, "nome": "Uberlândia"}
        },
    )


class MunicipalityUpdate(_CaseInsensitiveModel):
    """
    Payload for a full replacement of a stored municipality.

    `id` is accepted for symmetry with `Municipality` but is never applied:
    the stored identifier is immutable.
    """

    id: Optional[int] = Field(None, description="Ignored; the path id is kept")
    nome: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("nome", "name"),
        description="Municipality name",
    )

    def mutable_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})
