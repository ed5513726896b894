"""
conftest.py: Shared pytest fixtures for the asset catalog test suite.

Two kinds of fixtures live here:
  - ``catalog``: an in-memory Catalog Store double holding a small
    construction classification, used by the pure unit tests of the resolver,
    the reference codec and the asset namer.
  - ``db_session`` / ``sql_store``: the real SQLAlchemy store on an in-memory
    SQLite database, used by the store and HTTP tests.

The database URL is pointed at SQLite before anything from ``shared`` is
imported, so no PostgreSQL server is needed.
"""

import os
from datetime import date

os.environ.setdefault("ASSET_DATABASE_URL", "sqlite://")

import pytest

from asset_service.app.schemas.classification.classification_schemas import (
    BrandOut, CategoryOut, DisciplineOut, EquipmentTypeOut, SubtypeOut)


FIXED_TODAY = date(2025, 6, 1)


# ---------------------------------------------------------------------------
# In-memory Catalog Store
# ---------------------------------------------------------------------------

class InMemoryCatalogStore:
    """Dict-backed stand-in exposing the same methods as CatalogStore."""

    def __init__(self):
        self.categories = {}
        self.disciplines = {}
        self.equipment_types = {}
        self.subtypes = {}
        self.brands = {}
        # (prefix, temporal, category_code, discipline_code) -> last issued
        self.sequences = {}
        self.calls = []

    def add(self, record):
        table = {
            CategoryOut: self.categories,
            DisciplineOut: self.disciplines,
            EquipmentTypeOut: self.equipment_types,
            SubtypeOut: self.subtypes,
            BrandOut: self.brands,
        }[type(record)]
        table[record.id] = record
        return record

    def get_category(self, category_id):
        self.calls.append(("get_category", category_id))
        return self.categories.get(category_id)

    def get_discipline(self, discipline_id):
        return self.disciplines.get(discipline_id)

    def get_equipment_type(self, equipment_type_id):
        return self.equipment_types.get(equipment_type_id)

    def get_subtype(self, subtype_id):
        return self.subtypes.get(subtype_id)

    def get_brand(self, brand_id):
        return self.brands.get(brand_id)

    def find_category_by_code(self, iso_code):
        return next((c for c in self.categories.values() if c.iso_code == iso_code), None)

    def find_discipline_by_code(self, iso_code):
        return next((d for d in self.disciplines.values() if d.iso_code == iso_code), None)

    def list_equipment_types_by_category(self, category_id):
        rows = [e for e in self.equipment_types.values()
                if e.category_id == category_id and e.is_active]
        return sorted(rows, key=lambda e: (e.name, e.id))

    def list_subtypes_by_equipment_type(self, equipment_type_id):
        rows = [s for s in self.subtypes.values()
                if s.equipment_type_id == equipment_type_id and s.is_active]
        return sorted(rows, key=lambda s: (s.name, s.id))

    def list_active_subtypes(self, category_id=None):
        rows = []
        for s in self.subtypes.values():
            equipment_type = self.equipment_types.get(s.equipment_type_id)
            if not s.is_active or equipment_type is None:
                continue
            if category_id is not None and equipment_type.category_id != category_id:
                continue
            rows.append(s)
        return sorted(rows, key=lambda s: (s.name, s.id))

    def list_active_brands(self):
        return sorted((b for b in self.brands.values() if b.is_active),
                      key=lambda b: b.official_name)

    def get_highest_sequence(self, prefix, temporal_segment, category_code, discipline_code):
        return self.sequences.get((prefix, temporal_segment, category_code, discipline_code), 0)

    def reserve_next_sequence(self, prefix, temporal_segment, category_code, discipline_code):
        key = (prefix, temporal_segment, category_code, discipline_code)
        self.sequences[key] = self.sequences.get(key, 0) + 1
        return self.sequences[key]

    def count_orphaned_equipment_types(self):
        return sum(1 for e in self.equipment_types.values()
                   if e.category_id not in self.categories)

    def count_orphaned_subtypes(self):
        return sum(1 for s in self.subtypes.values()
                   if s.equipment_type_id not in self.equipment_types)


@pytest.fixture
def catalog():
    """
    Small catalog shared by the unit tests.

    Categories:   1 Equipment (EQ), 2 Tools (TO), 3 Consumables (no code),
                  4 Retired (RT, inactive)
    Disciplines:  1 Civil (CV), 2 Structural (ST), 3 Mechanical (ME),
                  4 Plumbing (child of Mechanical, no code of its own)
    Equipment:    10 Generator / 11 Concrete Mixer under Equipment,
                  20 Drill / 21 Grinder / 22 Old Saw (inactive) under Tools,
                  40 Crane under the inactive Retired category,
                  99 Welder pointing at a missing category
    Subtypes:     100 Standard (Generator), 200 Cordless / 201 Hammer /
                  202 Keyless (inactive) (Drill), 210 Angle (Grinder),
                  900 pointing at a missing equipment type
    Brands:       1 Makita, 2 Bosch, 4 DeWalt active; 3 Acme inactive
    """
    store = InMemoryCatalogStore()

    store.add(CategoryOut(id=1, name="Equipment", iso_code="EQ"))
    store.add(CategoryOut(id=2, name="Tools", iso_code="TO"))
    store.add(CategoryOut(id=3, name="Consumables", iso_code=None))
    store.add(CategoryOut(id=4, name="Retired", iso_code="RT", is_active=False))

    store.add(DisciplineOut(id=1, name="Civil", iso_code="CV"))
    store.add(DisciplineOut(id=2, name="Structural", iso_code="ST"))
    store.add(DisciplineOut(id=3, name="Mechanical", iso_code="ME"))
    store.add(DisciplineOut(id=4, name="Plumbing", iso_code=None, parent_id=3))

    store.add(EquipmentTypeOut(id=10, name="Generator", category_id=1))
    store.add(EquipmentTypeOut(id=11, name="Concrete Mixer", category_id=1))
    store.add(EquipmentTypeOut(id=20, name="Drill", category_id=2))
    store.add(EquipmentTypeOut(id=21, name="Grinder", category_id=2))
    store.add(EquipmentTypeOut(id=22, name="Old Saw", category_id=2, is_active=False))
    store.add(EquipmentTypeOut(id=40, name="Crane", category_id=4))
    store.add(EquipmentTypeOut(id=99, name="Welder", category_id=999))

    store.add(SubtypeOut(
        id=100, name="Standard", equipment_type_id=10,
        specifications_template={"power_source": "Diesel", "capacity": "25 kVA"}))
    store.add(SubtypeOut(
        id=200, name="Cordless", equipment_type_id=20, technical_name="Cordless Drill",
        specifications_template={"power_source": "Battery", "voltage": "18V"}))
    store.add(SubtypeOut(
        id=201, name="Hammer", equipment_type_id=20, technical_name="Drill",
        specifications_template={"power_source": "Manual"}))
    store.add(SubtypeOut(id=202, name="Keyless", equipment_type_id=20, is_active=False))
    store.add(SubtypeOut(id=210, name="Angle", equipment_type_id=21))
    store.add(SubtypeOut(id=900, name="Ghost", equipment_type_id=998))

    store.add(BrandOut(id=1, official_name="Makita", quality_tier="premium"))
    store.add(BrandOut(id=2, official_name="Bosch", quality_tier="premium"))
    store.add(BrandOut(id=3, official_name="Acme", quality_tier="economy", is_active=False))
    store.add(BrandOut(id=4, official_name="DeWalt"))

    return store


@pytest.fixture
def suggestion_catalog():
    """
    Welding, grinding and drilling subtypes for the name-based suggestions.

    Categories:   1 Tools (TO), 2 Equipment (EQ)
    Disciplines:  1 Mechanical (ME), 2 Civil (CV)
    Equipment:    10 Welder / 20 Grinder under Tools, 30 Drill under Equipment
    Subtypes:     101 MIG Welder, 102 TIG Welder, 103 Stick Welder,
                  104 Flux Core Welder, 105 Plasma Cutter, 106 Spot Welder,
                  107 Gas Welder (tagged Mechanical Services), 201 Angle Grinder,
                  202 Die Grinder, 203 Bench Grinder (inactive), 301 Hammer Drill
    """
    store = InMemoryCatalogStore()

    store.add(CategoryOut(id=1, name="Tools", iso_code="TO"))
    store.add(CategoryOut(id=2, name="Equipment", iso_code="EQ"))
    store.add(DisciplineOut(id=1, name="Mechanical", iso_code="ME"))
    store.add(DisciplineOut(id=2, name="Civil", iso_code="CV"))

    store.add(EquipmentTypeOut(id=10, name="Welder", category_id=1))
    store.add(EquipmentTypeOut(id=20, name="Grinder", category_id=1))
    store.add(EquipmentTypeOut(id=30, name="Drill", category_id=2))

    store.add(SubtypeOut(id=101, name="MIG Welder", code="MIG", equipment_type_id=10,
                         technical_name="Metal Inert Gas Welder"))
    store.add(SubtypeOut(id=102, name="TIG Welder", code="TIG", equipment_type_id=10,
                         technical_name="Tungsten Inert Gas Welder"))
    store.add(SubtypeOut(id=103, name="Stick Welder", code="STICK", equipment_type_id=10))
    store.add(SubtypeOut(id=104, name="Flux Core Welder", code="FCAW", equipment_type_id=10))
    store.add(SubtypeOut(id=105, name="Plasma Cutter", code="PLASMA", equipment_type_id=10))
    store.add(SubtypeOut(id=106, name="Spot Welder", code="SPOT", equipment_type_id=10))
    store.add(SubtypeOut(id=107, name="Gas Welder", code="GAS", equipment_type_id=10,
                         discipline_tags='["Fabrication", "Mechanical Services"]'))
    store.add(SubtypeOut(id=201, name="Angle Grinder", code="ANGLE", equipment_type_id=20))
    store.add(SubtypeOut(id=202, name="Die Grinder", code="DIE", equipment_type_id=20))
    store.add(SubtypeOut(id=203, name="Bench Grinder", code="BENCH", equipment_type_id=20,
                         is_active=False))
    store.add(SubtypeOut(id=301, name="Hammer Drill", code="HAMMER", equipment_type_id=30))

    return store


@pytest.fixture
def resolver(catalog):
    from asset_service.app.crud.classification.classification_resolver import ClassificationResolver
    return ClassificationResolver(catalog)


@pytest.fixture
def codec(catalog):
    """ReferenceCodec pinned to 1 June 2025 with the default CON prefix."""
    from asset_service.app.crud.reference.reference_codec import ReferenceCodec
    return ReferenceCodec(catalog, org_code="CON", today=lambda: FIXED_TODAY)


# ---------------------------------------------------------------------------
# SQLAlchemy fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    from shared.core.database import Base, build_engine
    import asset_service.app.models  # noqa: F401

    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    from sqlalchemy.orm import sessionmaker
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db_session):
    """The ``catalog`` fixture's rows, persisted through the ORM (minus orphans)."""
    from asset_service.app.models import Brand, Category, Discipline, EquipmentType, Subtype

    db_session.add_all([
        Category(id=1, name="Equipment", iso_code="EQ"),
        Category(id=2, name="Tools", iso_code="TO"),
        Category(id=3, name="Consumables", iso_code=None),
        Category(id=4, name="Retired", iso_code="RT", is_active=False),
        Category(id=5, name="Scrapped", iso_code="SC", is_deleted=True),
        Discipline(id=1, name="Civil", iso_code="CV"),
        Discipline(id=2, name="Structural", iso_code="ST"),
        Discipline(id=3, name="Mechanical", iso_code="ME"),
        Discipline(id=4, name="Plumbing", iso_code=None, parent_id=3),
    ])
    db_session.flush()
    db_session.add_all([
        EquipmentType(id=10, name="Generator", category_id=1),
        EquipmentType(id=11, name="Concrete Mixer", category_id=1),
        EquipmentType(id=20, name="Drill", category_id=2),
        EquipmentType(id=21, name="Grinder", category_id=2),
        EquipmentType(id=22, name="Old Saw", category_id=2, is_active=False),
        EquipmentType(id=50, name="Jackhammer", category_id=5),
    ])
    db_session.flush()
    db_session.add_all([
        Subtype(id=100, name="Standard", equipment_type_id=10,
                specifications_template={"power_source": "Diesel", "capacity": "25 kVA"}),
        Subtype(id=200, name="Cordless", equipment_type_id=20, technical_name="Cordless Drill",
                specifications_template={"power_source": "Battery", "voltage": "18V"}),
        Subtype(id=201, name="Hammer", equipment_type_id=20, technical_name="Drill"),
        Subtype(id=202, name="Keyless", equipment_type_id=20, is_active=False),
        Subtype(id=210, name="Angle", equipment_type_id=21),
        Brand(id=1, official_name="Makita", quality_tier="premium"),
        Brand(id=2, official_name="Bosch", quality_tier="premium"),
        Brand(id=3, official_name="Acme", quality_tier="economy", is_active=False),
        Brand(id=4, official_name="DeWalt"),
    ])
    db_session.commit()
    return db_session


@pytest.fixture
def sql_store(seeded_db):
    from asset_service.app.crud.classification.catalog_store import CatalogStore
    return CatalogStore(seeded_db)
