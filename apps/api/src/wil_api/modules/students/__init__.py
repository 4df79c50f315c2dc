"""
Students Module

Student status engine (active / inactive / suspended / unenrolled), daily
logsheets, and the bulk inactivity sweep.
"""

from .router import router
from .sweep import sweep_inactive_students

__all__ = ["router", "sweep_inactive_students"]
