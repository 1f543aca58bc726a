"""Pray Together API.

Member signup, login and profile service with JWT authentication.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
