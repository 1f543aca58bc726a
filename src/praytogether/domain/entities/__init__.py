"""Domain entities for Pray Together.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from praytogether.domain.entities.member import Member

__all__ = ["Member"]
