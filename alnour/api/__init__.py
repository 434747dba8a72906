"""
Module API - Points d'entrée RESTful de la console.
"""

from .deps import get_current_operator, get_current_active_operator, require_roles

__all__ = [
    "get_current_operator",
    "get_current_active_operator",
    "require_roles",
]
