"""
Routes mounted by every CRM service
"""

from . import health

__all__ = ["health"]
