from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from sqlalchemy import Enum as SQLEnum
from sqlmodel import Column, SQLModel
from sqlmodel import Field as SQLField

from optima_scheduler import WorkItem, WorkItemStatus


class ProjectStatus(str, Enum):
    """Project status enum"""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


# Database Models (SQLModel)
class ProjectBase(SQLModel):
    """Base project model"""

    title: str = SQLField(min_length=1, max_length=200)
    deadline: int = SQLField(
        ge=1, le=365, description="Number of working days until the project is due"
    )
    expected_revenue: Decimal = SQLField(gt=0, max_digits=12, decimal_places=2)


class Project(ProjectBase, table=True):  # type: ignore[call-arg]
    """Project database model"""

    __tablename__ = "projects"

    id: int | None = SQLField(default=None, primary_key=True)
    status: ProjectStatus = SQLField(
        default=ProjectStatus.PENDING,
        sa_column=Column(
            SQLEnum(ProjectStatus, values_callable=lambda x: [e.value for e in x]),
            nullable=False,
            index=True,
        ),
    )
    created_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = SQLField(default=None, index=True)

    def to_work_item(self) -> WorkItem:
        """Snapshot this project as an engine work item"""
        return WorkItem(
            id=self.id,
            deadline=self.deadline,
            revenue=Decimal(self.expected_revenue),
            status=WorkItemStatus(ProjectStatus(self.status).value),
            title=self.title,
        )


# API Request/Response Models
class ProjectCreate(ProjectBase):
    """Project creation request"""

    pass


class ProjectUpdate(BaseModel):
    """Project update request"""

    title: str | None = Field(None, min_length=1, max_length=200)
    deadline: int | None = Field(None, ge=1, le=365)
    expected_revenue: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)


class ProjectResponse(ProjectBase):
    """Project response model"""

    id: int
    status: ProjectStatus
    created_at: datetime | None = None
    completed_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("expected_revenue")
    def serialize_expected_revenue(self, value: Decimal) -> float:
        """Convert Decimal to float for JSON serialization"""
        return float(value)


class StrategyResponse(BaseModel):
    """Scheduling strategy descriptor"""

    key: str = Field(..., description="Strategy key used for selection")
    name: str = Field(..., description="Human-readable strategy name")


class WeeklyScheduleResponse(BaseModel):
    """Weekly schedule: working-day slot (1-5) to project"""

    schedule: dict[int, ProjectResponse] = Field(default_factory=dict)
    total_revenue: Decimal = Decimal("0")
    projects_scheduled: int = 0
    strategy: StrategyResponse

    @field_serializer("total_revenue")
    def serialize_total_revenue(self, value: Decimal) -> float:
        """Convert Decimal to float for JSON serialization"""
        return float(value)


class DashboardStats(BaseModel):
    """Revenue and completion counts over recent windows"""

    weekly_revenue: Decimal = Decimal("0")
    monthly_revenue: Decimal = Decimal("0")
    projects_completed_this_month: int = 0
    projects_completed_this_week: int = 0

    @field_serializer("weekly_revenue", "monthly_revenue")
    def serialize_revenue(self, value: Decimal) -> float:
        """Convert Decimal to float for JSON serialization"""
        return float(value)


class DailyRevenue(BaseModel):
    """Completed revenue for one calendar day"""

    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    revenue: Decimal

    @field_serializer("revenue")
    def serialize_revenue(self, value: Decimal) -> float:
        """Convert Decimal to float for JSON serialization"""
        return float(value)


# Error Response Models
class ErrorResponse(BaseModel):
    """Error payload returned by the exception handlers"""

    detail: Any = Field(..., description="Human-readable error message")
    error_code: str | None = Field(None, description="Error code for programmatic handling")
    path: str | None = Field(None, description="Request URL that failed")
