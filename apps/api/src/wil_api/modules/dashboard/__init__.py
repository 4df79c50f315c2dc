"""
Dashboard Module

Read-only aggregate counts across applications, students and logsheets.
"""

from .router import router

__all__ = ["router"]
