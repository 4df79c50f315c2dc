"""
Accounts Module

Student, staff and mentor accounts, created only by redeeming a one-time code.
"""

from .router import router

__all__ = ["router"]
