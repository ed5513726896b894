from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException

from shared.helpers.json_response_helper import success_response
from shared.core.schemas import JsonOutResult
from ...core.dependencies import get_asset_namer, get_classification_resolver
from ...crud.classification.asset_namer import AssetNamer
from ...crud.classification.classification_resolver import ClassificationResolver
from ...schemas.classification.classification_schemas import (
    AssetNameRequest, BrandOut, ClassificationPath, ClassificationSelection,
    EquipmentTypeListResponse, GeneratedName, OrphanReport, SpecificationTemplate,
    SubtypeListResponse, SubtypeSuggestionListResponse, ValidationResult)

router = APIRouter(
    prefix="/api/classification",
    tags=["classification"],
)


# ---------------- Dependent dropdowns ----------------

@router.get("/categories/{category_id}/equipment-types", response_model=JsonOutResult[EquipmentTypeListResponse])
def get_equipment_types(
    category_id: int,
    resolver: ClassificationResolver = Depends(get_classification_resolver)
):
    equipment_types = resolver.list_equipment_types(category_id)
    return success_response(EquipmentTypeListResponse(
        equipment_types=equipment_types, total=len(equipment_types)))


@router.get("/equipment-types/{equipment_type_id}/subtypes", response_model=JsonOutResult[SubtypeListResponse])
def get_subtypes(
    equipment_type_id: int,
    resolver: ClassificationResolver = Depends(get_classification_resolver)
):
    subtypes = resolver.list_subtypes(equipment_type_id)
    return success_response(SubtypeListResponse(subtypes=subtypes, total=len(subtypes)))


@router.get("/brands", response_model=JsonOutResult[List[BrandOut]])
def get_active_brands(resolver: ClassificationResolver = Depends(get_classification_resolver)):
    return success_response(resolver.list_active_brands())


@router.get("/orphans", response_model=JsonOutResult[OrphanReport])
def get_orphans(resolver: ClassificationResolver = Depends(get_classification_resolver)):
    return success_response(resolver.detect_orphans())


@router.get("/subtypes/{subtype_id}/hierarchy", response_model=JsonOutResult[ClassificationPath])
def get_hierarchy(
    subtype_id: int,
    resolver: ClassificationResolver = Depends(get_classification_resolver)
):
    path = resolver.get_hierarchy(subtype_id)
    if path is None:
        raise HTTPException(status_code=404, detail="Subtype not found")
    return success_response(path)


# ---------------- Validation / naming ----------------

@router.post("/validate", response_model=JsonOutResult[ValidationResult])
def validate_selection(
    selection: ClassificationSelection,
    resolver: ClassificationResolver = Depends(get_classification_resolver)
):
    result = resolver.validate_selection(
        selection.category_id,
        selection.equipment_type_id,
        selection.subtype_id,
        selection.brand_id,
    )
    return success_response(result, message="Classification is valid")


@router.post("/asset-name", response_model=JsonOutResult[GeneratedName])
def generate_asset_name(
    request: AssetNameRequest,
    namer: AssetNamer = Depends(get_asset_namer)
):
    return success_response(namer.generate_asset_name(
        request.equipment_type_id, request.subtype_id, request.brand, request.model))


@router.get("/subtypes/suggestions", response_model=JsonOutResult[SubtypeSuggestionListResponse])
def suggest_subtypes(
    asset_name: str,
    category_id: Optional[int] = None,
    discipline_id: Optional[int] = None,
    resolver: ClassificationResolver = Depends(get_classification_resolver)
):
    suggestions = resolver.suggest_subtypes(asset_name, category_id, discipline_id)
    return success_response(SubtypeSuggestionListResponse(
        suggestions=suggestions, total=len(suggestions)))


@router.get("/subtypes/{subtype_id}/specifications", response_model=JsonOutResult[SpecificationTemplate])
def get_specification_template(
    subtype_id: int,
    resolver: ClassificationResolver = Depends(get_classification_resolver)
):
    template = resolver.get_specification_template(subtype_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Subtype not found")
    return success_response(template)
