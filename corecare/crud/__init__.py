from .user import user
from .mood import mood
from .vitals import VitalsCRUD

__all__ = ["user", "mood", "VitalsCRUD"]
