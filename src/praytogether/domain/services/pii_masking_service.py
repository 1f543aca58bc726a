"""PII masking service for protecting sensitive data in logs.

Email addresses and phone numbers are masked before they are written to any
log line. Raw passwords are never logged.
"""

import re

REDACTED = "[REDACTED]"


class PIIMaskingService:
    """Service for masking PII values.

    All methods are pure and safe to call on already-masked values.
    """

    MASKED_EMAIL_PLACEHOLDER = "***@***"

    @classmethod
    def mask_email(cls, value: str) -> str:
        """Mask email address as j***@example.com.

        Shows the first character of the local part and the full domain.

        Args:
            value: Email address to mask.

        Returns:
            Masked email address. An empty input stays empty; input without
            exactly one '@' becomes a fixed placeholder.

        Example:
            >>> PIIMaskingService.mask_email("john.doe@gmail.com")
            'j***@gmail.com'
        """
        if not value:
            return ""

        parts = value.split("@")
        if len(parts) != 2:
            return cls.MASKED_EMAIL_PLACEHOLDER

        local, domain = parts
        if not local:
            return f"***@{domain}"

        return f"{local[0]}***@{domain}"

    @classmethod
    def mask_phone(cls, value: str) -> str:
        """Mask phone number as 010-****-5678.

        Keeps the leading prefix and the last four digits.

        Args:
            value: Phone number to mask (with or without dashes).

        Returns:
            Masked phone number.
        """
        if not value:
            return value

        digits_only = re.sub(r"\D", "", value)
        if len(digits_only) < 8:
            return re.sub(r"\d", "*", value)

        return f"{digits_only[:3]}-****-{digits_only[-4:]}"


def mask_email(value: str) -> str:
    """Shortcut for PIIMaskingService.mask_email."""
    return PIIMaskingService.mask_email(value)
