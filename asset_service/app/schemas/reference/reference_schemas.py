# app/schemas/reference/reference_schemas.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional

LEGACY_MARKER = "LEG"


class ParsedReference(BaseModel):
    prefix: str
    year: Optional[int] = None
    is_legacy: bool = False
    category_code: str
    discipline_code: str
    sequence: int

    model_config = {"frozen": True}

    @property
    def temporal_segment(self) -> str:
        return LEGACY_MARKER if self.is_legacy else f"{self.year:04d}"

    def compose(self) -> str:
        return (
            f"{self.prefix}-{self.temporal_segment}-{self.category_code}-"
            f"{self.discipline_code}-{self.sequence:04d}"
        )


class GenerateReferenceRequest(BaseModel):
    category_id: Optional[Any] = None
    discipline_id: Optional[Any] = None
    is_legacy: bool = False


class BatchGenerateRequest(BaseModel):
    items: List[GenerateReferenceRequest] = Field(default_factory=list)


class ReferenceOut(BaseModel):
    reference: str


class BatchReferenceOut(BaseModel):
    references: List[str]


class ReferenceDescription(BaseModel):
    reference: str
    description: str
