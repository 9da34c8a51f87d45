"""
Demo data for an empty or nearly empty project store
"""

import logging
import random
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import delete
from sqlmodel import Session

from optima_api.models import Project, ProjectStatus
from optima_api.services import as_utc, project_service, safe_execute

logger = logging.getLogger(__name__)

MIN_EXISTING_PROJECTS = 10

COMPLETED_TITLES = [
    "System Audit", "Logo Design", "Bug Bounty", "AWS Migration",
    "UI Sprint", "Backend Patch", "SEO Overhaul", "Data Backup",
    "Client Meeting", "Code Review", "Server Setup", "Email Fix",
    "Beta Launch", "User Research", "Compliance Check", "API Docs",
    "Asset Backup", "Network Tuning", "Security Patch", "CI/CD Setup",
]  # fmt: skip

PENDING_TITLES = [
    "E-Commerce Engine", "Mobile App v3", "AI Predictor", "Crypto Wallet",
    "HR Portal", "Sales Dashboard", "IoT Hub", "Payment V2",
    "Smart Contract", "Video Streamer", "Chat Bot", "Edge Cache",
    "VR Sandbox", "ML Model Training", "Auth Service",
]  # fmt: skip

COMPLETED_COUNT = 20
PENDING_COUNT = 15


def build_demo_projects(
    rng: random.Random, now: datetime | None = None
) -> list[Project]:
    """Build 20 completed projects from the last 30 days and 15 pending ones"""
    now = as_utc(now)
    projects = []

    for i in range(COMPLETED_COUNT):
        projects.append(
            Project(
                title=f"{COMPLETED_TITLES[i % len(COMPLETED_TITLES)]} #{i + 1}",
                deadline=rng.randint(1, 10),
                expected_revenue=Decimal(2000 + rng.randrange(15000)),
                status=ProjectStatus.COMPLETED,
                completed_at=now
                - timedelta(days=rng.randrange(30), hours=rng.randrange(24)),
            )
        )

    for i in range(PENDING_COUNT):
        projects.append(
            Project(
                title=PENDING_TITLES[i % len(PENDING_TITLES)],
                deadline=rng.randint(2, 26),
                expected_revenue=Decimal(5000 + rng.randrange(45000)),
                status=ProjectStatus.PENDING,
            )
        )

    return projects


def seed_demo_data(
    session: Session, rng: random.Random | None = None, now: datetime | None = None
) -> int:
    """
    Replace the store contents with demo projects when it holds fewer than 10.

    Returns:
        Number of projects inserted (0 when the store was left alone)
    """
    existing = project_service.count_projects(session)
    if existing >= MIN_EXISTING_PROJECTS:
        logger.info(f"💡 Skipping demo data: {existing} projects already stored")
        return 0

    projects = build_demo_projects(rng or random.Random(), now)

    def seed_operation():
        session.execute(delete(Project))
        session.add_all(projects)
        return len(projects)

    inserted = safe_execute(session, seed_operation)
    logger.info(f"🌱 Demo data seeded: {inserted} projects")
    return inserted
