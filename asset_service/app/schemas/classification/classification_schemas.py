# app/schemas/classification/classification_schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from ...enum.classification_enum import QualityTier


class CategoryOut(BaseModel):
    id: int
    name: str
    iso_code: Optional[str] = None
    is_active: bool = True

    model_config = {"from_attributes": True}


class DisciplineOut(BaseModel):
    id: int
    name: str
    iso_code: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: bool = True

    model_config = {"from_attributes": True}


class EquipmentTypeOut(BaseModel):
    id: int
    name: str
    category_id: int
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True

    model_config = {"from_attributes": True}


class SubtypeOut(BaseModel):
    id: int
    name: str
    equipment_type_id: int
    code: Optional[str] = None
    technical_name: Optional[str] = None
    description: Optional[str] = None
    specifications_template: Optional[Dict[str, Any]] = None
    discipline_tags: Optional[str] = None
    is_active: bool = True

    model_config = {"from_attributes": True}


class SubtypeSuggestion(SubtypeOut):
    confidence: float


class SubtypeSuggestionListResponse(BaseModel):
    suggestions: List[SubtypeSuggestion]
    total: int


class SpecificationTemplate(BaseModel):
    subtype_id: int
    specifications: Dict[str, Any] = Field(default_factory=dict)


class BrandOut(BaseModel):
    id: int
    official_name: str
    quality_tier: QualityTier = QualityTier.standard
    country: Optional[str] = None
    is_active: bool = True

    model_config = {"from_attributes": True}


class ClassificationSelection(BaseModel):
    category_id: Any
    equipment_type_id: Optional[Any] = None
    subtype_id: Optional[Any] = None
    brand_id: Optional[Any] = None


class ValidationResult(BaseModel):
    category: CategoryOut
    equipment_type: Optional[EquipmentTypeOut] = None
    subtype: Optional[SubtypeOut] = None
    brand: Optional[BrandOut] = None
    # False for coarse (category-only or type-only) selections
    is_complete: bool = False


class OrphanReport(BaseModel):
    orphaned_equipment_types: int = 0
    orphaned_subtypes: int = 0

    @property
    def total(self) -> int:
        return self.orphaned_equipment_types + self.orphaned_subtypes


class ClassificationPath(BaseModel):
    category: Optional[CategoryOut] = None
    equipment_type: EquipmentTypeOut
    subtype: SubtypeOut


class AssetNameRequest(BaseModel):
    equipment_type_id: int
    subtype_id: int
    brand: Optional[str] = None
    model: Optional[str] = None


class GeneratedName(BaseModel):
    generated_name: str
    name_components: Dict[str, Any] = Field(default_factory=dict)
    from_catalog: bool = True


class EquipmentTypeListResponse(BaseModel):
    equipment_types: List[EquipmentTypeOut]
    total: int


class SubtypeListResponse(BaseModel):
    subtypes: List[SubtypeOut]
    total: int
