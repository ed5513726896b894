"""Asset reference codes: ``ORG-YEAR-CAT-DIS-SEQ``.

Example: ``CON-2025-EQ-ME-0001``. Legacy assets carry ``LEG`` instead of the
year. Category and discipline codes come from the catalog's ``iso_code``
columns; anything missing or unmapped is written as ``GN`` (general).
Sequence numbers run 0001..9999 separately for every prefix/year/category/
discipline combination.
"""
import logging
import re
from datetime import date
from typing import Any, Callable, Iterable, List, Optional

from ...core.errors import MalformedCode, SequenceExhausted
from ...schemas.reference.reference_schemas import (
    LEGACY_MARKER, GenerateReferenceRequest, ParsedReference)
from ..classification.catalog_store import CatalogStore, reference_prefix
from ..classification.classification_resolver import optional_identifier

logger = logging.getLogger(__name__)

FALLBACK_CODE = "GN"
FALLBACK_NAME = "General"
MAX_SEQUENCE = 9999
INVALID_REFERENCE_MESSAGE = "Invalid reference format"

REFERENCE_PATTERN = re.compile(
    r"([A-Z]{3})-([0-9]{4}|LEG)-([A-Z]{2})-([A-Z]{2})-([0-9]{4})")
CODE_PATTERN = re.compile(r"[A-Z]{2}")
PREFIX_PATTERN = re.compile(r"[A-Z]{3}")

# guards against a parent_id cycle in the discipline tree
MAX_DISCIPLINE_DEPTH = 16


def resolve_code(record: Any) -> str:
    """Two-letter code of a category/discipline record, or ``GN``."""
    code = getattr(record, "iso_code", None) if record is not None else None
    if code and CODE_PATTERN.fullmatch(code):
        return code
    return FALLBACK_CODE


class ReferenceCodec:

    def __init__(
        self,
        store: CatalogStore,
        org_code: str = "CON",
        today: Callable[[], date] = date.today,
    ):
        if not PREFIX_PATTERN.fullmatch(org_code or ""):
            raise ValueError(
                f"Reference prefix must be three uppercase letters, got {org_code!r}")
        self.store = store
        self.org_code = org_code
        self.today = today

    # ---------------- code resolution ----------------

    def category_code(self, category_id: Optional[int]) -> str:
        if category_id is None:
            return FALLBACK_CODE
        code = resolve_code(self.store.get_category(category_id))
        if code == FALLBACK_CODE:
            logger.warning(
                "Category %s has no reference code, using %s", category_id, FALLBACK_CODE)
        return code

    def discipline_code(self, discipline_id: Optional[int]) -> str:
        if discipline_id is None:
            return FALLBACK_CODE

        discipline = self.store.get_discipline(discipline_id)
        # only top-level disciplines carry reference codes
        depth = 0
        while discipline is not None and discipline.parent_id is not None and depth < MAX_DISCIPLINE_DEPTH:
            parent = self.store.get_discipline(discipline.parent_id)
            if parent is None:
                break
            discipline = parent
            depth += 1

        code = resolve_code(discipline)
        if code == FALLBACK_CODE:
            logger.warning(
                "Discipline %s has no reference code, using %s", discipline_id, FALLBACK_CODE)
        return code

    def temporal_segment(self, is_legacy: bool) -> str:
        return LEGACY_MARKER if is_legacy else f"{self.today().year:04d}"

    # ---------------- generation ----------------

    def generate(self, category_id: Any = None, discipline_id: Any = None, is_legacy: bool = False) -> str:
        """Mint the next reference for the category/discipline pair.

        The sequence number is reserved in the caller's transaction; stamping
        the returned code on an asset and committing is up to the caller.
        """
        category_id = optional_identifier("category_id", category_id)
        discipline_id = optional_identifier("discipline_id", discipline_id)

        category_code = self.category_code(category_id)
        discipline_code = self.discipline_code(discipline_id)
        temporal = self.temporal_segment(is_legacy)
        prefix = reference_prefix(
            self.org_code, temporal, category_code, discipline_code)

        highest = self.store.get_highest_sequence(
            self.org_code, temporal, category_code, discipline_code)
        if highest >= MAX_SEQUENCE:
            raise SequenceExhausted(prefix)

        sequence = self.store.reserve_next_sequence(
            self.org_code, temporal, category_code, discipline_code)
        if sequence > MAX_SEQUENCE:
            raise SequenceExhausted(prefix)

        reference = self.compose(ParsedReference(
            prefix=self.org_code,
            year=None if is_legacy else int(temporal),
            is_legacy=is_legacy,
            category_code=category_code,
            discipline_code=discipline_code,
            sequence=sequence,
        ))
        logger.info("Generated asset reference %s", reference,
                    extra={"reference": reference})
        return reference

    def batch_generate(self, requests: Iterable[GenerateReferenceRequest]) -> List[str]:
        return [
            self.generate(r.category_id, r.discipline_id, r.is_legacy)
            for r in requests
        ]

    # ---------------- reading ----------------

    @staticmethod
    def compose(parsed: ParsedReference) -> str:
        return parsed.compose()

    @staticmethod
    def parse(code: Any) -> ParsedReference:
        if not isinstance(code, str):
            raise MalformedCode(code)
        match = REFERENCE_PATTERN.fullmatch(code)
        if match is None:
            raise MalformedCode(code)

        prefix, temporal, category_code, discipline_code, sequence = match.groups()
        if int(sequence) == 0:
            raise MalformedCode(code)

        is_legacy = temporal == LEGACY_MARKER
        return ParsedReference(
            prefix=prefix,
            year=None if is_legacy else int(temporal),
            is_legacy=is_legacy,
            category_code=category_code,
            discipline_code=discipline_code,
            sequence=int(sequence),
        )

    def describe(self, code: Any) -> str:
        """Readable summary of a reference, for display only; never raises."""
        try:
            parsed = self.parse(code)
        except MalformedCode:
            return INVALID_REFERENCE_MESSAGE

        when = "Legacy" if parsed.is_legacy else str(parsed.year)
        category = self._code_name(
            parsed.category_code, self.store.find_category_by_code)
        discipline = self._code_name(
            parsed.discipline_code, self.store.find_discipline_by_code)
        return (
            f"{when} asset, {category} category, {discipline} discipline, "
            f"sequence {parsed.sequence}"
        )

    @staticmethod
    def _code_name(code: str, finder: Callable[[str], Any]) -> str:
        if code == FALLBACK_CODE:
            return FALLBACK_NAME
        try:
            record = finder(code)
        except Exception:
            logger.exception("Name lookup for reference code %s failed", code)
            return code
        return record.name if record is not None else code
