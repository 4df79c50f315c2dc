"""
Declarations Module

Supervisor declaration letters: the workplace supervisor's end-of-placement
assessment of a student.
"""

from .router import router

__all__ = ["router"]
