# Import all models to ensure they are registered with SQLAlchemy
from .classification.categories import Category
from .classification.disciplines import Discipline
from .classification.equipment_types import EquipmentType
from .classification.subtypes import Subtype
from .classification.brands import Brand
from .classification.reference_sequences import ReferenceSequence
from .assets.assets import Asset
