"""
Events Module

Guest lectures created with one-time event codes, plus student registration
and attendance. Registration is capped per student per lecture
(`settings.event_registration_cap`, default 1).
"""

from .router import router

__all__ = ["router"]
