# app/models/classification/reference_sequences.py
from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint, func
from shared.core.database import Base


class ReferenceSequence(Base):
    """High-water mark per ORG-YEAR-CAT-DIS tuple."""

    __tablename__ = "reference_sequences"
    __table_args__ = (UniqueConstraint(
        'prefix', 'temporal_segment', 'category_code', 'discipline_code', name='uix_reference_tuple'),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    prefix = Column(String(3), nullable=False)
    temporal_segment = Column(String(4), nullable=False)
    category_code = Column(String(2), nullable=False)
    discipline_code = Column(String(2), nullable=False)
    last_value = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
