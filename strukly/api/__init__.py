"""
HTTP surface: the FastAPI backend and the client the UI uses to reach it.
"""

from .client import StruklyApiClient

__all__ = ["StruklyApiClient"]
