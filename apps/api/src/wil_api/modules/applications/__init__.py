"""
Applications Module

WIL placement applications and their status engine.

Status values: Pending (initial), Accepted, Rejected. Any status may move to
any other; setting the current status again is a no-op. Acceptance issues a
signup code (see the codes module) in the same transaction as the status
change, then emails it to the applicant.
"""

from .router import router

__all__ = ["router"]
