from fastapi import Depends
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_asset_db as get_db
from ..crud.classification.asset_namer import AssetNamer
from ..crud.classification.catalog_store import CatalogStore
from ..crud.classification.classification_resolver import ClassificationResolver
from ..crud.reference.reference_codec import ReferenceCodec


def get_catalog_store(db: Session = Depends(get_db)) -> CatalogStore:
    return CatalogStore(db)


def get_classification_resolver(store: CatalogStore = Depends(get_catalog_store)) -> ClassificationResolver:
    return ClassificationResolver(
        store, require_full_classification=settings.REQUIRE_FULL_CLASSIFICATION)


def get_reference_codec(store: CatalogStore = Depends(get_catalog_store)) -> ReferenceCodec:
    return ReferenceCodec(store, org_code=settings.ASSET_ORG_CODE)


def get_asset_namer(store: CatalogStore = Depends(get_catalog_store)) -> AssetNamer:
    return AssetNamer(store)
