# app/models/classification/subtypes.py
from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Subtype(Base):
    __tablename__ = "subtypes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    equipment_type_id = Column(Integer, ForeignKey(
        "equipment_types.id"), nullable=False, index=True)
    name = Column(String(128), nullable=False)
    code = Column(String(32), nullable=True)
    technical_name = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    specifications_template = Column(JSON, nullable=True)
    discipline_tags = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    equipment_type = relationship("EquipmentType", back_populates="subtypes")
