# app/models/classification/disciplines.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Discipline(Base):
    __tablename__ = "disciplines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False)
    iso_code = Column(String(2), unique=True, nullable=True)
    parent_id = Column(Integer, ForeignKey(
        "disciplines.id", ondelete="SET NULL"), nullable=True)
    parent = relationship(
        "Discipline", remote_side=[id], backref="children")
    is_active = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
