"""
HTTP API
"""

from skadam.presentation.api.app import create_app

__all__ = ["create_app"]
