"""Dashboard Schemas"""

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Aggregated statistics shown on the admin dashboard."""

    applications: dict[str, int] = Field(
        ..., description="Application count per status (Pending, Accepted, Rejected)"
    )
    total_applications: int = Field(..., ge=0)
    students: dict[str, int] = Field(
        ..., description="Student count per status (active, inactive, suspended, unenrolled)"
    )
    total_students: int = Field(..., ge=0)
    logsheets_last_7_days: int = Field(
        ..., ge=0, description="Logsheets dated within the last 7 days, today included"
    )
