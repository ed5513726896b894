# app/schemas/assets/assets_schemas.py
from datetime import datetime
from pydantic import BaseModel
from typing import Any, Dict, Optional


class AssetCreate(BaseModel):
    name: Optional[str] = None
    category_id: int
    discipline_id: Optional[int] = None
    equipment_type_id: Optional[int] = None
    subtype_id: Optional[int] = None
    brand_id: Optional[int] = None
    model: Optional[str] = None
    is_legacy: bool = False


class AssetOut(BaseModel):
    id: int
    ref: str
    name: str
    category_id: Optional[int] = None
    discipline_id: Optional[int] = None
    equipment_type_id: Optional[int] = None
    subtype_id: Optional[int] = None
    brand_id: Optional[int] = None
    model: Optional[str] = None
    name_components: Optional[Dict[str, Any]] = None
    is_legacy: bool = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
