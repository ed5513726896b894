# app/models/classification/brands.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from shared.core.database import Base


class Brand(Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, autoincrement=True)
    official_name = Column(String(128), nullable=False, unique=True)
    country = Column(String(64), nullable=True)
    quality_tier = Column(String(16), default="standard", nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
