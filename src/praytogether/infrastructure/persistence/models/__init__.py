"""SQLAlchemy models for the Pray Together tables.

All models inherit from the Base class defined in database.py and are
created on application startup when auto-create is enabled.
"""

from praytogether.infrastructure.persistence.models.member import MemberModel

__all__ = ["MemberModel"]
