import json
import logging
from typing import Any, Dict, List, Optional

from ...schemas.classification.classification_schemas import GeneratedName
from .catalog_store import CatalogStore

logger = logging.getLogger(__name__)

SPEC_KEYS = ("material", "size", "capacity", "voltage")
UNPOWERED = ("Manual", "N/A")
DEFAULT_SUBTYPE = "Standard"


def parse_specifications(template: Any) -> Dict[str, Any]:
    """Pick the naming-relevant keys out of a subtype's specifications template."""
    if not template:
        return {}
    if isinstance(template, str):
        try:
            template = json.loads(template)
        except ValueError:
            return {}
    if not isinstance(template, dict):
        return {}
    return {
        key: template[key]
        for key in ("power_source",) + SPEC_KEYS
        if template.get(key)
    }


def assemble_name(components: Dict[str, Any]) -> str:
    # [power source] [brand] [technical name] [subtype] <equipment type> (specs) - model
    parts: List[str] = []
    for key in ("brand", "technical_name", "subtype"):
        if components.get(key):
            parts.append(components[key])
    parts.append(components["equipment_type"])

    specs = components.get("specifications") or {}
    power_source = specs.get("power_source")
    if power_source and power_source not in UNPOWERED:
        parts.insert(0, power_source)

    name = " ".join(parts)
    extras = [str(specs[key]) for key in SPEC_KEYS if specs.get(key)]
    if extras:
        name += f" ({', '.join(extras)})"
    if components.get("model"):
        name += f" - {components['model']}"
    return name


class AssetNamer:
    """Builds asset names from the classification instead of free text."""

    def __init__(self, store: CatalogStore):
        self.store = store

    def generate_asset_name(
        self,
        equipment_type_id: int,
        subtype_id: int,
        brand: Optional[str] = None,
        model: Optional[str] = None,
    ) -> GeneratedName:
        brand = brand.strip() if brand and brand.strip() else None
        model = model.strip() if model and model.strip() else None

        equipment_type = self.store.get_equipment_type(equipment_type_id)
        subtype = self.store.get_subtype(subtype_id)
        if (
            equipment_type is None
            or subtype is None
            or subtype.equipment_type_id != equipment_type.id
        ):
            logger.info(
                "No catalog entry for equipment type %s / subtype %s, using fallback name",
                equipment_type_id, subtype_id)
            return self.fallback_name(brand, model)

        components: Dict[str, Any] = {"equipment_type": equipment_type.name}
        if subtype.technical_name and subtype.technical_name != equipment_type.name:
            components["technical_name"] = subtype.technical_name
        if subtype.name and subtype.name != DEFAULT_SUBTYPE:
            components["subtype"] = subtype.name
        specs = parse_specifications(subtype.specifications_template)
        if specs:
            components["specifications"] = specs
        if brand:
            components["brand"] = brand
        if model:
            components["model"] = model

        return GeneratedName(
            generated_name=assemble_name(components),
            name_components=components,
        )

    @staticmethod
    def fallback_name(brand: Optional[str], model: Optional[str]) -> GeneratedName:
        parts = [p for p in (brand, model) if p]
        return GeneratedName(
            generated_name=" ".join(parts) if parts else "Asset",
            name_components={"brand": brand, "model": model},
            from_catalog=False,
        )
