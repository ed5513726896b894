"""Seed a starter construction classification catalog.

Run with ``python -m asset_service.seed``. Existing rows are left alone, so
the script can be re-run after adding entries below.
"""
import logging

from sqlalchemy.orm import Session

from shared.core.database import AssetSessionLocal, asset_engine, Base
from shared.core.log_config import setup_logging
from .app.models import Brand, Category, Discipline, EquipmentType, Subtype

logger = logging.getLogger(__name__)

CATEGORIES = [
    ("Tools", "TO"),
    ("Equipment", "EQ"),
    ("Vehicles", "VE"),
    ("Safety Gear", "SF"),
    ("Consumables", None),
]

DISCIPLINES = [
    ("Civil", "CV", None),
    ("Structural", "ST", None),
    ("Mechanical", "ME", None),
    ("Electrical", "EL", None),
    ("Plumbing", "PL", "Mechanical"),
]

# category -> equipment type -> [(subtype, technical name, specifications)]
EQUIPMENT = {
    "Tools": {
        "Drill": [
            ("Cordless", "Cordless Drill", {"power_source": "Battery", "voltage": "18V"}),
            ("Hammer", "Hammer Drill", {"power_source": "Electric", "material": "Concrete"}),
        ],
        "Grinder": [
            ("Angle", "Angle Grinder", {"power_source": "Electric", "size": "4 inch"}),
        ],
    },
    "Equipment": {
        "Generator": [
            ("Standard", None, {"power_source": "Diesel", "capacity": "25 kVA"}),
        ],
        "Concrete Mixer": [
            ("Drum", "Drum Mixer", {"power_source": "Diesel", "capacity": "1 bag"}),
        ],
    },
}

BRANDS = [
    ("Makita", "Japan", "premium"),
    ("Bosch", "Germany", "premium"),
    ("DeWalt", "United States", "standard"),
    ("Lotus", "Philippines", "economy"),
]


def get_or_create(db: Session, model, defaults=None, **filters):
    row = db.query(model).filter_by(**filters).first()
    if row:
        return row
    row = model(**filters, **(defaults or {}))
    db.add(row)
    db.flush()
    return row


def seed_data():
    db: Session = AssetSessionLocal()
    try:
        categories = {
            name: get_or_create(db, Category, name=name, defaults={"iso_code": code})
            for name, code in CATEGORIES
        }

        disciplines = {}
        for name, code, parent in DISCIPLINES:
            defaults = {"iso_code": code}
            if parent:
                defaults = {"parent_id": disciplines[parent].id}
            disciplines[name] = get_or_create(
                db, Discipline, name=name, defaults=defaults)

        for category_name, equipment_types in EQUIPMENT.items():
            for type_name, subtypes in equipment_types.items():
                equipment_type = get_or_create(
                    db, EquipmentType, name=type_name, category_id=categories[category_name].id)
                for subtype_name, technical_name, specs in subtypes:
                    get_or_create(
                        db, Subtype,
                        name=subtype_name,
                        equipment_type_id=equipment_type.id,
                        defaults={"technical_name": technical_name,
                                  "specifications_template": specs},
                    )

        for official_name, country, tier in BRANDS:
            get_or_create(db, Brand, official_name=official_name,
                          defaults={"country": country, "quality_tier": tier})

        db.commit()
        logger.info("Seeded %d categories, %d disciplines, %d brands",
                    len(categories), len(disciplines), len(BRANDS))
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    Base.metadata.create_all(bind=asset_engine)
    seed_data()
