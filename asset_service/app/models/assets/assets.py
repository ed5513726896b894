# app/models/assets/assets.py
from sqlalchemy import Boolean, Column, ForeignKey, Integer, JSON, String, TIMESTAMP
from sqlalchemy.sql import func
from shared.core.database import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ref = Column(String(20), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    category_id = Column(Integer, ForeignKey(
        "categories.id", ondelete="SET NULL"), nullable=True)
    discipline_id = Column(Integer, ForeignKey(
        "disciplines.id", ondelete="SET NULL"), nullable=True)
    equipment_type_id = Column(Integer, ForeignKey(
        "equipment_types.id", ondelete="SET NULL"), nullable=True)
    subtype_id = Column(Integer, ForeignKey(
        "subtypes.id", ondelete="SET NULL"), nullable=True)
    brand_id = Column(Integer, ForeignKey(
        "brands.id", ondelete="SET NULL"), nullable=True)
    model = Column(String(128))
    name_components = Column(JSON)
    is_legacy = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
