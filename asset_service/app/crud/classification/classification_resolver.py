import json
import logging
from typing import Any, List, Optional

from ...core.errors import (
    BrandNotAvailable, CategoryNotFound, EquipmentTypeNotInCategory,
    IncompleteClassification, InvalidIdentifier, SubtypeNotInEquipmentType)
from ...schemas.classification.classification_schemas import (
    BrandOut, ClassificationPath, EquipmentTypeOut, OrphanReport, SpecificationTemplate,
    SubtypeOut, SubtypeSuggestion, ValidationResult)
from .catalog_store import CatalogStore

logger = logging.getLogger(__name__)

SUGGESTION_THRESHOLD = 0.1
MAX_SUGGESTIONS = 5

# phrase in the asset name -> subtype codes it points at; checked in order
NAME_PATTERNS = (
    ("mig", ("MIG",)),
    ("tig", ("TIG",)),
    ("stick", ("STICK",)),
    ("arc", ("MIG", "TIG", "STICK", "FCAW")),
    ("flux", ("FCAW",)),
    ("plasma", ("PLASMA",)),
    ("spot", ("SPOT",)),
    ("angle grinder", ("ANGLE",)),
    ("die grinder", ("DIE",)),
    ("bench grinder", ("BENCH",)),
    ("straight grinder", ("STRAIGHT",)),
    ("grinder", ("ANGLE", "DIE", "BENCH", "STRAIGHT")),
    ("hammer drill", ("HAMMER",)),
    ("impact drill", ("IMPACT",)),
    ("rotary hammer", ("ROTARY",)),
    ("core drill", ("CORE",)),
    ("orbital sander", ("ORBITAL", "RO-SAND")),
    ("belt sander", ("BELT",)),
    ("disc sander", ("DISC",)),
    ("random orbital", ("RO-SAND",)),
)
COMMON_EQUIPMENT = ("welder", "welding", "grinder", "drill", "sander")

PATTERN_WEIGHT = 0.8
NAME_WORD_WEIGHT = 0.4
TECHNICAL_WORD_WEIGHT = 0.3
DISCIPLINE_WEIGHT = 0.2
COMMON_WEIGHT = 0.1


def parse_discipline_tags(value: Any) -> List[str]:
    """Discipline tags stored as a JSON array or as comma separated text."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(tag) for tag in value if tag]
    try:
        tags = json.loads(value)
    except ValueError:
        tags = value.split(",")
    if not isinstance(tags, list):
        return []
    return [str(tag).strip() for tag in tags if str(tag).strip()]


def _word_hits(text: Optional[str], asset_name: str) -> int:
    if not text:
        return 0
    return sum(1 for word in text.lower().split(" ")
               if len(word) > 3 and word in asset_name)


def score_subtype(asset_name: str, subtype: SubtypeOut, discipline_name: Optional[str] = None) -> float:
    """Confidence in [0, 1] that ``subtype`` fits an asset called ``asset_name``.

    ``asset_name`` is expected in lower case.
    """
    score = 0.0

    for phrase, codes in NAME_PATTERNS:
        if phrase in asset_name and subtype.code in codes:
            score += PATTERN_WEIGHT
            break

    score += NAME_WORD_WEIGHT * _word_hits(subtype.name, asset_name)
    score += TECHNICAL_WORD_WEIGHT * _word_hits(subtype.technical_name, asset_name)

    if discipline_name:
        discipline = discipline_name.lower()
        for tag in parse_discipline_tags(subtype.discipline_tags):
            tag = tag.lower()
            if tag in discipline or discipline in tag:
                score += DISCIPLINE_WEIGHT
                break

    if any(common in asset_name for common in COMMON_EQUIPMENT):
        score += COMMON_WEIGHT

    return round(min(score, 1.0), 2)


def require_identifier(field: str, value: Any) -> int:
    """Return ``value`` as an id, or raise InvalidIdentifier.

    Only real positive integers pass; bools, floats and numeric strings are
    rejected so a bad form value never reaches the database.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidIdentifier(field, value)
    return value


def optional_identifier(field: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    return require_identifier(field, value)


class ClassificationResolver:
    """Category -> equipment type -> subtype lookups, plus the cross-cutting brand.

    Lookups are permissive: an unknown parent gives an empty list, the same as
    a parent with no children, which keeps dependent dropdowns simple. Only
    :meth:`validate_selection` raises for hierarchy violations.
    """

    def __init__(self, store: CatalogStore, require_full_classification: bool = False):
        self.store = store
        self.require_full_classification = require_full_classification

    def list_equipment_types(self, category_id: Any) -> List[EquipmentTypeOut]:
        category_id = require_identifier("category_id", category_id)
        category = self.store.get_category(category_id)
        if category is None or not category.is_active:
            return []
        return self.store.list_equipment_types_by_category(category_id)

    def list_subtypes(self, equipment_type_id: Any) -> List[SubtypeOut]:
        equipment_type_id = require_identifier(
            "equipment_type_id", equipment_type_id)
        if self.store.get_equipment_type(equipment_type_id) is None:
            return []
        return self.store.list_subtypes_by_equipment_type(equipment_type_id)

    def list_active_brands(self) -> List[BrandOut]:
        return self.store.list_active_brands()

    def validate_selection(
        self,
        category_id: Any,
        equipment_type_id: Any = None,
        subtype_id: Any = None,
        brand_id: Any = None,
    ) -> ValidationResult:
        category_id = require_identifier("category_id", category_id)
        equipment_type_id = optional_identifier(
            "equipment_type_id", equipment_type_id)
        subtype_id = optional_identifier("subtype_id", subtype_id)
        brand_id = optional_identifier("brand_id", brand_id)

        category = self.store.get_category(category_id)
        if category is None:
            raise CategoryNotFound(category_id)

        equipment_type = None
        if equipment_type_id is not None:
            equipment_type = self.store.get_equipment_type(equipment_type_id)
            if equipment_type is None or equipment_type.category_id != category_id:
                raise EquipmentTypeNotInCategory(equipment_type_id, category_id)

        subtype = None
        if subtype_id is not None:
            subtype = self.store.get_subtype(subtype_id)
            if (
                subtype is None
                or equipment_type_id is None
                or subtype.equipment_type_id != equipment_type_id
            ):
                raise SubtypeNotInEquipmentType(subtype_id, equipment_type_id)

        brand = None
        if brand_id is not None:
            brand = self.store.get_brand(brand_id)
            if brand is None or not brand.is_active:
                raise BrandNotAvailable(brand_id)

        is_complete = equipment_type is not None and subtype is not None
        if self.require_full_classification and not is_complete:
            raise IncompleteClassification(
                "equipment_type_id" if equipment_type is None else "subtype_id")

        return ValidationResult(
            category=category,
            equipment_type=equipment_type,
            subtype=subtype,
            brand=brand,
            is_complete=is_complete,
        )

    def get_hierarchy(self, subtype_id: Any) -> Optional[ClassificationPath]:
        subtype_id = require_identifier("subtype_id", subtype_id)
        subtype = self.store.get_subtype(subtype_id)
        if subtype is None:
            return None
        equipment_type = self.store.get_equipment_type(
            subtype.equipment_type_id)
        if equipment_type is None:
            return None
        return ClassificationPath(
            category=self.store.get_category(equipment_type.category_id),
            equipment_type=equipment_type,
            subtype=subtype,
        )

    def suggest_subtypes(
        self,
        asset_name: Optional[str],
        category_id: Any = None,
        discipline_id: Any = None,
    ) -> List[SubtypeSuggestion]:
        """Rank active subtypes against a free-text asset name.

        Only scores above ``SUGGESTION_THRESHOLD`` are kept; the best
        ``MAX_SUGGESTIONS`` are returned, ties in subtype name order.
        """
        category_id = optional_identifier("category_id", category_id)
        discipline_id = optional_identifier("discipline_id", discipline_id)
        name = (asset_name or "").strip().lower()
        if not name:
            return []

        discipline_name = None
        if discipline_id is not None:
            discipline = self.store.get_discipline(discipline_id)
            discipline_name = discipline.name if discipline else None

        suggestions = []
        for subtype in self.store.list_active_subtypes(category_id):
            confidence = score_subtype(name, subtype, discipline_name)
            if confidence > SUGGESTION_THRESHOLD:
                suggestions.append(SubtypeSuggestion(
                    **subtype.model_dump(), confidence=confidence))

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        return suggestions[:MAX_SUGGESTIONS]

    def get_specification_template(self, subtype_id: Any) -> Optional[SpecificationTemplate]:
        subtype_id = require_identifier("subtype_id", subtype_id)
        subtype = self.store.get_subtype(subtype_id)
        if subtype is None:
            return None
        return SpecificationTemplate(
            subtype_id=subtype.id,
            specifications=subtype.specifications_template or {},
        )

    def detect_orphans(self) -> OrphanReport:
        report = OrphanReport(
            orphaned_equipment_types=self.store.count_orphaned_equipment_types(),
            orphaned_subtypes=self.store.count_orphaned_subtypes(),
        )
        if report.total:
            logger.warning(
                "Classification integrity: %d orphaned equipment types, %d orphaned subtypes",
                report.orphaned_equipment_types, report.orphaned_subtypes)
        return report
