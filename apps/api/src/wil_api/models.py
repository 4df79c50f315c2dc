"""
Model registry.

Importing this module registers every table on `Base.metadata`, for Alembic
and for test schema creation.
"""

from wil_api.core.database import Base
from wil_api.modules.accounts.models import MentorUser, StaffUser, StudentUser, User
from wil_api.modules.applications.models import Application
from wil_api.modules.codes.models import BlockedSignup, EventCode, SignupCode, StaffCode
from wil_api.modules.declarations.models import DeclarationLetter
from wil_api.modules.events.models import EventAttendance, GuestLecture
from wil_api.modules.students.models import DailyLogsheet

__all__ = [
    "Base",
    "Application",
    "SignupCode",
    "StaffCode",
    "EventCode",
    "BlockedSignup",
    "StudentUser",
    "User",
    "StaffUser",
    "MentorUser",
    "DailyLogsheet",
    "GuestLecture",
    "EventAttendance",
    "DeclarationLetter",
]
