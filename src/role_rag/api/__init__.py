"""
HTTP serving boundary.

Usage:
    from role_rag.api import create_app
"""

from .app import create_app

__all__ = ["create_app"]
