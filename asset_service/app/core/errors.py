from typing import Any

from ..enum.classification_enum import ClassificationErrorCode, ReferenceErrorCode


class ClassificationError(Exception):
    """Raised when a classification lookup or selection breaks the hierarchy."""

    code: ClassificationErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdentifier(ClassificationError):
    code = ClassificationErrorCode.invalid_identifier

    def __init__(self, field: str, value: Any):
        super().__init__(f"{field} must be a positive integer, got {value!r}")
        self.field = field
        self.value = value


class CategoryNotFound(ClassificationError):
    code = ClassificationErrorCode.category_not_found

    def __init__(self, category_id: int):
        super().__init__(f"Category {category_id} not found")
        self.category_id = category_id


class EquipmentTypeNotInCategory(ClassificationError):
    code = ClassificationErrorCode.equipment_type_not_in_category

    def __init__(self, equipment_type_id: int, category_id: int):
        super().__init__(
            f"Equipment type {equipment_type_id} does not belong to category {category_id}")
        self.equipment_type_id = equipment_type_id
        self.category_id = category_id


class SubtypeNotInEquipmentType(ClassificationError):
    code = ClassificationErrorCode.subtype_not_in_equipment_type

    def __init__(self, subtype_id: int, equipment_type_id: int | None):
        super().__init__(
            f"Subtype {subtype_id} does not belong to equipment type {equipment_type_id}")
        self.subtype_id = subtype_id
        self.equipment_type_id = equipment_type_id


class BrandNotAvailable(ClassificationError):
    code = ClassificationErrorCode.brand_not_available

    def __init__(self, brand_id: int):
        super().__init__(f"Brand {brand_id} is unknown or inactive")
        self.brand_id = brand_id


class IncompleteClassification(ClassificationError):
    code = ClassificationErrorCode.incomplete_classification

    def __init__(self, missing: str):
        super().__init__(f"Full classification required, missing {missing}")
        self.missing = missing


class ReferenceCodeError(Exception):
    """Raised when a reference code cannot be minted or read."""

    code: ReferenceErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedCode(ReferenceCodeError):
    code = ReferenceErrorCode.malformed_code

    def __init__(self, value: Any):
        super().__init__(f"Malformed reference code: {value!r}")
        self.value = value


class SequenceExhausted(ReferenceCodeError):
    code = ReferenceErrorCode.sequence_exhausted

    def __init__(self, prefix: str):
        super().__init__(
            f"Sequence space exhausted for {prefix}, no numbers left after 9999")
        self.prefix = prefix
