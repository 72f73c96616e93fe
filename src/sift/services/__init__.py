"""Services module for sift - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .task_service import TaskService

__all__ = [
    "TaskService",
    "ConfigService",
    "get_config_service",
]
