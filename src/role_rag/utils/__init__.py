"""
Utility functions.

Usage:
    from role_rag.utils import get_llm, configure_logging
"""

from .helpers import get_llm, replace_t_with_space
from .logger import configure_logging

__all__ = ["get_llm", "replace_t_with_space", "configure_logging"]
