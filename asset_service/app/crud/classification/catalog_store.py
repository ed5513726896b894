import logging
from typing import List, Optional

from sqlalchemy import Integer, cast, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from ...models.assets.assets import Asset
from ...models.classification.brands import Brand
from ...models.classification.categories import Category
from ...models.classification.disciplines import Discipline
from ...models.classification.equipment_types import EquipmentType
from ...models.classification.reference_sequences import ReferenceSequence
from ...models.classification.subtypes import Subtype
from ...schemas.classification.classification_schemas import (
    BrandOut, CategoryOut, DisciplineOut, EquipmentTypeOut, SubtypeOut)

logger = logging.getLogger(__name__)

# one retry when two requests create the same counter row at once
RESERVE_RETRIES = 1


def reference_prefix(prefix: str, temporal_segment: str, category_code: str, discipline_code: str) -> str:
    return f"{prefix}-{temporal_segment}-{category_code}-{discipline_code}-"


class CatalogStore:
    """Read/write access to the classification tables and reference counters.

    Every read returns typed records, never ORM rows, so callers cannot
    lazy-load across the hierarchy. Writes are flushed, not committed: the
    request that reserves a sequence number owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------------- single lookups ----------------

    def get_category(self, category_id: int) -> Optional[CategoryOut]:
        row = self.db.query(Category).filter(
            Category.id == category_id, Category.is_deleted == False).first()
        return CategoryOut.model_validate(row) if row else None

    def get_discipline(self, discipline_id: int) -> Optional[DisciplineOut]:
        row = self.db.query(Discipline).filter(
            Discipline.id == discipline_id, Discipline.is_deleted == False).first()
        return DisciplineOut.model_validate(row) if row else None

    def get_equipment_type(self, equipment_type_id: int) -> Optional[EquipmentTypeOut]:
        row = self.db.query(EquipmentType).filter(
            EquipmentType.id == equipment_type_id).first()
        return EquipmentTypeOut.model_validate(row) if row else None

    def get_subtype(self, subtype_id: int) -> Optional[SubtypeOut]:
        row = self.db.query(Subtype).filter(Subtype.id == subtype_id).first()
        return SubtypeOut.model_validate(row) if row else None

    def get_brand(self, brand_id: int) -> Optional[BrandOut]:
        row = self.db.query(Brand).filter(Brand.id == brand_id).first()
        return BrandOut.model_validate(row) if row else None

    def find_category_by_code(self, iso_code: str) -> Optional[CategoryOut]:
        row = (
            self.db.query(Category)
            .filter(Category.iso_code == iso_code, Category.is_deleted == False)
            .order_by(Category.id.asc())
            .first()
        )
        return CategoryOut.model_validate(row) if row else None

    def find_discipline_by_code(self, iso_code: str) -> Optional[DisciplineOut]:
        row = self.db.query(Discipline).filter(
            Discipline.iso_code == iso_code, Discipline.is_deleted == False).first()
        return DisciplineOut.model_validate(row) if row else None

    # ---------------- lists ----------------

    def list_equipment_types_by_category(self, category_id: int) -> List[EquipmentTypeOut]:
        rows = (
            self.db.query(EquipmentType)
            .filter(EquipmentType.category_id == category_id, EquipmentType.is_active == True)
            .order_by(EquipmentType.name.asc(), EquipmentType.id.asc())
            .all()
        )
        return [EquipmentTypeOut.model_validate(r) for r in rows]

    def list_subtypes_by_equipment_type(self, equipment_type_id: int) -> List[SubtypeOut]:
        rows = (
            self.db.query(Subtype)
            .filter(Subtype.equipment_type_id == equipment_type_id, Subtype.is_active == True)
            .order_by(Subtype.name.asc(), Subtype.id.asc())
            .all()
        )
        return [SubtypeOut.model_validate(r) for r in rows]

    def list_active_subtypes(self, category_id: Optional[int] = None) -> List[SubtypeOut]:
        query = (
            self.db.query(Subtype)
            .join(EquipmentType, Subtype.equipment_type_id == EquipmentType.id)
            .filter(Subtype.is_active == True)
        )
        if category_id is not None:
            query = query.filter(EquipmentType.category_id == category_id)
        rows = query.order_by(Subtype.name.asc(), Subtype.id.asc()).all()
        return [SubtypeOut.model_validate(r) for r in rows]

    def list_active_brands(self) -> List[BrandOut]:
        rows = (
            self.db.query(Brand)
            .filter(Brand.is_active == True)
            .order_by(Brand.official_name.asc())
            .all()
        )
        return [BrandOut.model_validate(r) for r in rows]

    # ---------------- reference sequences ----------------

    def _highest_used_in_assets(self, prefix: str) -> int:
        max_seq = (
            self.db.query(
                func.max(cast(func.substr(Asset.ref, len(prefix) + 1), Integer))
            )
            .filter(Asset.ref.like(f"{prefix}%"))
            .scalar()
        )
        return int(max_seq or 0)

    def _counter(self, prefix: str, temporal_segment: str, category_code: str, discipline_code: str, lock: bool = False):
        query = self.db.query(ReferenceSequence).filter(
            ReferenceSequence.prefix == prefix,
            ReferenceSequence.temporal_segment == temporal_segment,
            ReferenceSequence.category_code == category_code,
            ReferenceSequence.discipline_code == discipline_code,
        )
        if lock:
            query = query.with_for_update()
        return query.first()

    def get_highest_sequence(self, prefix: str, temporal_segment: str, category_code: str, discipline_code: str) -> int:
        counter = self._counter(
            prefix, temporal_segment, category_code, discipline_code)
        counted = counter.last_value if counter else 0
        used = self._highest_used_in_assets(reference_prefix(
            prefix, temporal_segment, category_code, discipline_code))
        return max(counted, used)

    def reserve_next_sequence(self, prefix: str, temporal_segment: str, category_code: str, discipline_code: str) -> int:
        """Atomically bump the tuple's counter and return the new value.

        The counter row is locked for the rest of the transaction, so two
        requests for the same tuple serialize here instead of both reading the
        same maximum. Codes already stamped on assets (imported or created
        before the counter existed) raise the floor.
        """
        ref_prefix = reference_prefix(
            prefix, temporal_segment, category_code, discipline_code)

        for attempt in range(RESERVE_RETRIES + 1):
            counter = self._counter(
                prefix, temporal_segment, category_code, discipline_code, lock=True)
            used = self._highest_used_in_assets(ref_prefix)

            if counter is not None:
                counter.last_value = max(counter.last_value, used) + 1
                self.db.flush()
                return counter.last_value

            savepoint = self.db.begin_nested()
            try:
                counter = ReferenceSequence(
                    prefix=prefix,
                    temporal_segment=temporal_segment,
                    category_code=category_code,
                    discipline_code=discipline_code,
                    last_value=used + 1,
                )
                self.db.add(counter)
                savepoint.commit()
                return counter.last_value
            except IntegrityError:
                savepoint.rollback()
                logger.info(
                    "Counter for %s created concurrently, retrying (attempt %d)", ref_prefix, attempt + 1)

        raise RuntimeError(f"Could not reserve a sequence number for {ref_prefix}")

    # ---------------- integrity audit ----------------

    def count_orphaned_equipment_types(self) -> int:
        parent = aliased(Category)
        return (
            self.db.query(func.count(EquipmentType.id))
            .outerjoin(parent, EquipmentType.category_id == parent.id)
            .filter(or_(parent.id == None, parent.is_deleted == True))
            .scalar()
        ) or 0

    def count_orphaned_subtypes(self) -> int:
        parent = aliased(EquipmentType)
        return (
            self.db.query(func.count(Subtype.id))
            .outerjoin(parent, Subtype.equipment_type_id == parent.id)
            .filter(parent.id == None)
            .scalar()
        ) or 0
