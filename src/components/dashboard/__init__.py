"""
Dashboard component.

Admin dashboard statistics.
"""

from src.components.dashboard.component import run_stats
from src.components.dashboard.models import DashboardStats

__all__ = [
    "run_stats",
    "DashboardStats",
]
