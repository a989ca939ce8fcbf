"""Aggregate application use cases."""

from .automation import run_notification_checks
from .workflows import execute_workflow

__all__ = ["execute_workflow", "run_notification_checks"]
