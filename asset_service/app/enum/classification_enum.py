from enum import Enum


class QualityTier(str, Enum):

    premium = "premium"
    standard = "standard"
    economy = "economy"


class ClassificationErrorCode(str, Enum):

    invalid_identifier = "invalid_identifier"
    category_not_found = "category_not_found"
    equipment_type_not_in_category = "equipment_type_not_in_category"
    subtype_not_in_equipment_type = "subtype_not_in_equipment_type"
    brand_not_available = "brand_not_available"
    incomplete_classification = "incomplete_classification"


class ReferenceErrorCode(str, Enum):

    malformed_code = "malformed_code"
    sequence_exhausted = "sequence_exhausted"
