"""
Module: hr_kernel.models.project
Responsibility: ORM persistence for projects and the closed set of project
    statuses.
Architecture position: Kernel > Models.  May import from db/ and exceptions.

Projects are only a workload signal for headcount planning.  Status text is
normalised to ProjectStatus on the way in; unknown text is rejected.
"""

from enum import Enum

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import TrackedBase
from hr_kernel.exceptions import InvalidProjectStatusError


class ProjectStatus(str, Enum):
    """Project lifecycle states."""

    ACTIVE = "Active"
    COMPLETED = "Completed"
    ON_HOLD = "OnHold"
    CANCELLED = "Cancelled"

    @classmethod
    def normalize(cls, value: "str | ProjectStatus") -> "ProjectStatus":
        """
        Map free-text status to a member.

        Case, whitespace, spaces, hyphens and underscores are ignored, so
        "on hold", "On-Hold" and "ON_HOLD" all map to ON_HOLD.

        Raises:
            InvalidProjectStatusError: text matches no member.
        """
        if isinstance(value, ProjectStatus):
            return value
        key = "".join(ch for ch in str(value).lower() if ch.isalpha())
        for member in cls:
            if member.value.lower() == key:
                return member
        if key == "canceled":
            return cls.CANCELLED
        raise InvalidProjectStatusError(str(value))


class Project(TrackedBase):
    """A departmental project."""

    __tablename__ = "projects"

    __table_args__ = (
        Index("idx_project_department_status", "department_id", "status"),
    )

    department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    department = relationship("Department", back_populates="projects")

    def __repr__(self) -> str:
        return f"<Project {self.id}: {self.name} ({self.status})>"
