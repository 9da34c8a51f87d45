# API routers package
from . import projects, scheduler

__all__ = [
    "projects",
    "scheduler",
]
