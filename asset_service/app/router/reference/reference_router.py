from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_asset_db as get_db
from shared.core.schemas import JsonOutResult
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.dependencies import get_reference_codec
from ...crud.reference.reference_codec import ReferenceCodec
from ...schemas.reference.reference_schemas import (
    BatchGenerateRequest, BatchReferenceOut, GenerateReferenceRequest,
    ParsedReference, ReferenceDescription, ReferenceOut)

router = APIRouter(
    prefix="/api/references",
    tags=["references"],
)


@router.post("/generate", response_model=JsonOutResult[ReferenceOut])
def generate_reference(
    request: GenerateReferenceRequest,
    db: Session = Depends(get_db),
    codec: ReferenceCodec = Depends(get_reference_codec)
):
    try:
        reference = codec.generate(
            request.category_id, request.discipline_id, request.is_legacy)
        # keep the reservation so the number is not handed out twice
        db.commit()
    except Exception:
        db.rollback()
        raise
    return success_response(ReferenceOut(reference=reference),
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/batch", response_model=JsonOutResult[BatchReferenceOut])
def batch_generate_references(
    request: BatchGenerateRequest,
    db: Session = Depends(get_db),
    codec: ReferenceCodec = Depends(get_reference_codec)
):
    try:
        references = codec.batch_generate(request.items)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return success_response(BatchReferenceOut(references=references),
                            status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.get("/parse/{code}", response_model=JsonOutResult[ParsedReference])
def parse_reference(code: str, codec: ReferenceCodec = Depends(get_reference_codec)):
    return success_response(codec.parse(code))


@router.get("/describe/{code}", response_model=JsonOutResult[ReferenceDescription])
def describe_reference(code: str, codec: ReferenceCodec = Depends(get_reference_codec)):
    return success_response(ReferenceDescription(reference=code, description=codec.describe(code)))
