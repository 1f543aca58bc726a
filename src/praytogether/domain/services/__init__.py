"""Domain services for Pray Together.

Only the masking service is re-exported here, because the logging setup
imports it. Import the auth and member services from their modules.
"""

from praytogether.domain.services.pii_masking_service import PIIMaskingService

__all__ = ["PIIMaskingService"]
