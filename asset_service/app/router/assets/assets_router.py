from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shared.core.database import get_asset_db as get_db
from shared.core.schemas import JsonOutResult
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.dependencies import get_asset_namer, get_classification_resolver, get_reference_codec
from ...crud.assets import assets_crud as crud
from ...crud.classification.asset_namer import AssetNamer
from ...crud.classification.classification_resolver import ClassificationResolver
from ...crud.reference.reference_codec import ReferenceCodec
from ...schemas.assets.assets_schemas import AssetCreate, AssetOut

router = APIRouter(
    prefix="/api/assets",
    tags=["assets"],
)


@router.post("/", response_model=JsonOutResult[AssetOut])
def create_asset(
    asset: AssetCreate,
    db: Session = Depends(get_db),
    resolver: ClassificationResolver = Depends(get_classification_resolver),
    codec: ReferenceCodec = Depends(get_reference_codec),
    namer: AssetNamer = Depends(get_asset_namer)
):
    return success_response(crud.create_asset(db, asset, resolver, codec, namer),
                            message="Asset created",
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.get("/{asset_id}", response_model=JsonOutResult[AssetOut])
def read_asset(asset_id: int, db: Session = Depends(get_db)):
    db_asset = crud.get_asset_by_id(db, asset_id)
    if not db_asset:
        raise HTTPException(status_code=404, detail="Asset not found")
    return success_response(AssetOut.model_validate(db_asset))
