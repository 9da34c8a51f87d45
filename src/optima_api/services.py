"""
Project store and weekly scheduling services
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import TypeVar

from sqlmodel import Session, func, select

from optima_api.config import settings
from optima_api.exceptions import (
    OptimaException,
    ResourceNotFoundError,
    ValidationError,
)
from optima_api.models import (
    DailyRevenue,
    DashboardStats,
    Project,
    ProjectCreate,
    ProjectResponse,
    ProjectStatus,
    ProjectUpdate,
    StrategyResponse,
    WeeklyScheduleResponse,
)
from optima_scheduler import ScheduleResult, StrategyInfo, StrategyRegistry, exact_sum

logger = logging.getLogger(__name__)

T = TypeVar("T")

WEEK_WINDOW = timedelta(days=7)
MONTH_WINDOW = timedelta(days=30)


def safe_execute(session: Session, operation: Callable[[], T]) -> T:
    """Run ``operation`` and commit, rolling back on failure"""
    try:
        result = operation()
        session.commit()
        return result
    except OptimaException:
        session.rollback()
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"❌ Database operation failed: {e}")
        raise OptimaException(f"Database operation failed: {e}", "DATABASE_ERROR") from e


def as_utc(moment: datetime | None = None) -> datetime:
    """Return ``moment`` in UTC, reading naive values as UTC; defaults to now"""
    if moment is None:
        return datetime.now(UTC)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _sum_revenue(projects: list[Project]) -> Decimal:
    return exact_sum(Decimal(p.expected_revenue) for p in projects)


class ProjectService:
    """CRUD operations on stored projects"""

    def get_projects(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 100,
        status: ProjectStatus | None = None,
    ) -> list[Project]:
        """Get projects ordered by ID (arrival order)"""
        statement = select(Project)
        if status is not None:
            statement = statement.where(Project.status == status)
        statement = statement.order_by(Project.id).offset(skip).limit(limit)
        return list(session.exec(statement).all())

    def get_project(self, session: Session, project_id: int) -> Project:
        """Get project by ID"""
        project = session.get(Project, project_id)
        if project is None:
            raise ResourceNotFoundError("Project", project_id)
        return project

    def create_project(self, session: Session, project_data: ProjectCreate) -> Project:
        """Create a new pending project"""

        def create_operation():
            project = Project(
                title=project_data.title,
                deadline=project_data.deadline,
                expected_revenue=project_data.expected_revenue,
                status=ProjectStatus.PENDING,
            )
            session.add(project)
            session.flush()
            return project

        project = safe_execute(session, create_operation)
        session.refresh(project)
        return project

    def update_project(
        self, session: Session, project_id: int, project_data: ProjectUpdate
    ) -> Project:
        """Update project fields that were explicitly set"""
        project = self.get_project(session, project_id)
        changes = {
            field: value
            for field, value in project_data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if not changes:
            raise ValidationError("No fields to update")

        def update_operation():
            for field, value in changes.items():
                setattr(project, field, value)
            session.add(project)
            session.flush()
            return project

        project = safe_execute(session, update_operation)
        session.refresh(project)
        return project

    def delete_project(self, session: Session, project_id: int) -> None:
        """Delete project"""
        project = self.get_project(session, project_id)
        safe_execute(session, lambda: session.delete(project))

    def count_projects(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Project)).one()

    def get_pending_projects(self, session: Session) -> list[Project]:
        """All pending projects in arrival order"""
        statement = (
            select(Project)
            .where(Project.status == ProjectStatus.PENDING)
            .order_by(Project.id)
        )
        return list(session.exec(statement).all())

    def get_completed_since(self, session: Session, since: datetime) -> list[Project]:
        """Completed projects with ``completed_at`` at or after ``since``"""
        since = as_utc(since)
        statement = (
            select(Project)
            .where(
                Project.status == ProjectStatus.COMPLETED,
                Project.completed_at >= since,
            )
            .order_by(Project.completed_at)
        )
        return list(session.exec(statement).all())


class ScheduleService:
    """Runs the scheduling engine over the project store"""

    def __init__(
        self,
        registry: StrategyRegistry | None = None,
        projects: ProjectService | None = None,
    ):
        self.registry = registry or StrategyRegistry(default=settings.default_strategy)
        self.projects = projects or project_service

    def list_strategies(self) -> list[StrategyResponse]:
        return [self._strategy_response(info) for info in self.registry.list()]

    def current_strategy(self) -> StrategyResponse:
        return self._strategy_response(self.registry.current())

    def select_strategy(self, key: str) -> StrategyResponse:
        """Switch the current strategy; raises UnknownStrategyError for unknown keys"""
        return self._strategy_response(self.registry.select(key))

    def generate_weekly_schedule(self, session: Session) -> WeeklyScheduleResponse:
        """Schedule the pending projects with the current strategy"""
        result, strategy, projects_by_id = self._run(session)
        return self._schedule_response(result, strategy, projects_by_id)

    def execute_current_schedule(
        self, session: Session, now: datetime | None = None
    ) -> WeeklyScheduleResponse:
        """Generate the schedule and mark every scheduled project completed"""
        now = as_utc(now)
        result, strategy, projects_by_id = self._run(session)

        def execute_operation():
            for item in result.assignment.values():
                project = projects_by_id[item.id]
                project.status = ProjectStatus.COMPLETED
                project.completed_at = now
                session.add(project)
            session.flush()

        safe_execute(session, execute_operation)
        logger.info(
            f"✅ Executed weekly schedule: {result.assigned_count} projects completed"
        )
        return self._schedule_response(result, strategy, projects_by_id)

    def get_dashboard_stats(
        self, session: Session, now: datetime | None = None
    ) -> DashboardStats:
        """Completed revenue and counts for the last 7 and 30 days"""
        now = as_utc(now)
        weekly = self.projects.get_completed_since(session, now - WEEK_WINDOW)
        monthly = self.projects.get_completed_since(session, now - MONTH_WINDOW)
        return DashboardStats(
            weekly_revenue=_sum_revenue(weekly),
            monthly_revenue=_sum_revenue(monthly),
            projects_completed_this_month=len(monthly),
            projects_completed_this_week=len(weekly),
        )

    def get_analytics_data(
        self, session: Session, now: datetime | None = None
    ) -> list[DailyRevenue]:
        """Completed revenue per day over the last 30 days, oldest first"""
        now = as_utc(now)
        daily: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        for project in self.projects.get_completed_since(session, now - MONTH_WINDOW):
            daily[as_utc(project.completed_at).date().isoformat()] += Decimal(
                project.expected_revenue
            )
        return [
            DailyRevenue(date=day, revenue=revenue)
            for day, revenue in sorted(daily.items())
        ]

    def _run(
        self, session: Session
    ) -> tuple[ScheduleResult, StrategyInfo, dict[int, Project]]:
        pending = self.projects.get_pending_projects(session)
        strategy = self.registry.current()
        result = self.registry.run([p.to_work_item() for p in pending], strategy.key)
        logger.info(
            f"📅 Weekly schedule generated with {strategy.key}: "
            f"{result.assigned_count}/{len(pending)} pending projects scheduled"
        )
        return result, strategy, {p.id: p for p in pending}

    @staticmethod
    def _strategy_response(info: StrategyInfo) -> StrategyResponse:
        return StrategyResponse(key=info.key, name=info.name)

    def _schedule_response(
        self,
        result: ScheduleResult,
        strategy: StrategyInfo,
        projects_by_id: dict[int, Project],
    ) -> WeeklyScheduleResponse:
        return WeeklyScheduleResponse(
            schedule={
                slot: ProjectResponse.model_validate(projects_by_id[item.id])
                for slot, item in result.assignment.items()
            },
            total_revenue=result.total_value,
            projects_scheduled=result.assigned_count,
            strategy=self._strategy_response(strategy),
        )


# Service instances
project_service = ProjectService()
schedule_service = ScheduleService()
