import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from ...models.assets.assets import Asset
from ...schemas.assets.assets_schemas import AssetCreate, AssetOut
from ..classification.asset_namer import AssetNamer
from ..classification.classification_resolver import ClassificationResolver, optional_identifier
from ..reference.reference_codec import ReferenceCodec

logger = logging.getLogger(__name__)


def get_asset_by_id(db: Session, asset_id: int) -> Optional[Asset]:
    return db.query(Asset).filter(Asset.id == asset_id, Asset.is_deleted == False).first()


def ref_in_use(db: Session, ref: str) -> bool:
    return db.query(Asset.id).filter(Asset.ref == ref).first() is not None


def create_asset(
    db: Session,
    asset: AssetCreate,
    resolver: ClassificationResolver,
    codec: ReferenceCodec,
    namer: AssetNamer,
) -> AssetOut:
    selection = resolver.validate_selection(
        asset.category_id, asset.equipment_type_id, asset.subtype_id, asset.brand_id)

    discipline_id = optional_identifier("discipline_id", asset.discipline_id)
    if discipline_id is not None and resolver.store.get_discipline(discipline_id) is None:
        return error_response(
            message=f"Discipline {discipline_id} not found",
            status_code=AppStatusCode.NOT_FOUND,
            http_status=404
        )

    name_components = None
    name = asset.name.strip() if asset.name and asset.name.strip() else None
    if name is None:
        if not selection.is_complete:
            return error_response(
                message="Asset name is required unless equipment type and subtype are selected",
                status_code=AppStatusCode.INVALID_INPUT,
                http_status=400
            )
        generated = namer.generate_asset_name(
            asset.equipment_type_id,
            asset.subtype_id,
            brand=selection.brand.official_name if selection.brand else None,
            model=asset.model,
        )
        name = generated.generated_name
        name_components = generated.name_components

    try:
        ref = codec.generate(asset.category_id, discipline_id, asset.is_legacy)
        db_asset = Asset(
            ref=ref,
            name=name,
            category_id=asset.category_id,
            discipline_id=discipline_id,
            equipment_type_id=asset.equipment_type_id,
            subtype_id=asset.subtype_id,
            brand_id=asset.brand_id,
            model=asset.model,
            name_components=name_components,
            is_legacy=asset.is_legacy,
        )
        db.add(db_asset)
        db.commit()
    except IntegrityError:
        db.rollback()
        if not ref_in_use(db, ref):
            raise
        logger.warning("Asset reference %s collided on insert", ref,
                       extra={"reference": ref})
        return error_response(
            message="Asset reference already in use, please retry",
            status_code=AppStatusCode.DUPLICATE_ADD_ERROR,
            http_status=409
        )
    except Exception:
        db.rollback()
        raise

    db.refresh(db_asset)
    return AssetOut.model_validate(db_asset)
