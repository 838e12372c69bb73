"""
Model package — plain dataclasses for the objects exchanged with the
remote inventory API.

  - equipment.py -> equipment records, status and term enums
  - user.py      -> the signed-in session user and roles
  - history.py   -> equipment change history entries
"""

from inventory.models.equipment import (  # noqa: F401
    Equipment,
    EquipmentStatus,
    TermCondition,
)
from inventory.models.history import HistoryEntry  # noqa: F401
from inventory.models.user import SessionUser, UserRole  # noqa: F401
