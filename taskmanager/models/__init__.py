"""Models package - Re-exports all models for convenient importing."""
from taskmanager.extensions import db
from taskmanager.models.user import User, ROLES
from taskmanager.models.task import Task, task_assignees, PRIORITIES, STATUSES

__all__ = ['db', 'User', 'Task', 'task_assignees', 'ROLES', 'PRIORITIES', 'STATUSES']
