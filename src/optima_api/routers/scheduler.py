"""
Weekly schedule endpoints: generation, strategy selection, execution and
dashboard figures.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from optima_api.database import get_db
from optima_api.models import (
    DailyRevenue,
    DashboardStats,
    ErrorResponse,
    StrategyResponse,
    WeeklyScheduleResponse,
)
from optima_api.services import ScheduleService, schedule_service

router = APIRouter(prefix="/schedule", tags=["scheduler"])


def get_schedule_service() -> ScheduleService:
    """Schedule service dependency"""
    return schedule_service


ScheduleServiceDep = Annotated[ScheduleService, Depends(get_schedule_service)]
SessionDep = Annotated[Session, Depends(get_db)]


@router.post("/generate", response_model=WeeklyScheduleResponse)
async def generate_schedule(
    session: SessionDep, service: ScheduleServiceDep
) -> WeeklyScheduleResponse:
    """Build this week's schedule from pending projects with the current strategy"""
    return service.generate_weekly_schedule(session)


@router.get("/current", response_model=WeeklyScheduleResponse)
async def get_current_schedule(
    session: SessionDep, service: ScheduleServiceDep
) -> WeeklyScheduleResponse:
    """Preview the schedule the current strategy would produce"""
    return service.generate_weekly_schedule(session)


@router.get("/strategies", response_model=list[StrategyResponse])
async def list_strategies(service: ScheduleServiceDep) -> list[StrategyResponse]:
    """List the available scheduling strategies"""
    return service.list_strategies()


@router.get("/strategy", response_model=StrategyResponse)
async def get_strategy(service: ScheduleServiceDep) -> StrategyResponse:
    """Get the current scheduling strategy"""
    return service.current_strategy()


@router.post(
    "/strategy",
    response_model=StrategyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown strategy"},
    },
)
async def set_strategy(
    service: ScheduleServiceDep,
    strategy_type: Annotated[str, Query(alias="type", min_length=1)],
) -> StrategyResponse:
    """Switch the current scheduling strategy"""
    return service.select_strategy(strategy_type)


@router.get("/stats", response_model=DashboardStats)
async def get_stats(session: SessionDep, service: ScheduleServiceDep) -> DashboardStats:
    """Revenue and completions over the last week and month"""
    return service.get_dashboard_stats(session)


@router.get("/analytics", response_model=list[DailyRevenue])
async def get_analytics(
    session: SessionDep, service: ScheduleServiceDep
) -> list[DailyRevenue]:
    """Completed revenue per day over the last 30 days"""
    return service.get_analytics_data(session)


@router.post("/execute", response_model=WeeklyScheduleResponse)
async def execute_schedule(
    session: SessionDep, service: ScheduleServiceDep
) -> WeeklyScheduleResponse:
    """Run the current schedule and mark its projects completed"""
    return service.execute_current_schedule(session)
