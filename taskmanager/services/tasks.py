"""Task service - CRUD plus the status and checklist transition rules."""
import logging
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import List, Optional

from flask import abort

from taskmanager.models import db, Task, User, PRIORITIES, STATUSES
from taskmanager.services.dashboard import grouped_counts
from taskmanager.services.policy import is_admin, can_update_progress

logger = logging.getLogger(__name__)


# ==================== Derived state ====================

def compute_progress(checklist):
    """Percentage of completed items, rounded half up; 0 for an empty list."""
    total = len(checklist)
    if total == 0:
        return 0
    completed = sum(1 for item in checklist if item.get('completed'))
    return (200 * completed + total) // (2 * total)


def status_for_progress(progress):
    if progress == 100:
        return 'Completed'
    if progress > 0:
        return 'In Progress'
    return 'Pending'


def complete_checklist(checklist):
    return [dict(item, completed=True) for item in checklist]


# ==================== Payload parsing ====================

def parse_checklist(raw):
    if not isinstance(raw, list):
        abort(400, description='todoChecklist must be an array')
    items = []
    for item in raw:
        if not isinstance(item, dict):
            abort(400, description='todoChecklist items must be objects')
        items.append({
            'text': str(item.get('text') or ''),
            'completed': bool(item.get('completed', False)),
        })
    return items


def parse_attachments(raw):
    if not isinstance(raw, list):
        abort(400, description='attachments must be an array')
    return [str(item) for item in raw]


def parse_due_date(raw):
    if raw in (None, ''):
        return None
    try:
        value = datetime.fromisoformat(str(raw).replace('Z', '+00:00'))
    except ValueError:
        abort(400, description='dueDate must be an ISO 8601 date')
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_priority(raw):
    if raw not in PRIORITIES:
        abort(400, description=f"priority must be one of {', '.join(PRIORITIES)}")
    return raw


def resolve_assignees(raw):
    """Turn a list of user ids into users; every id must exist."""
    if not isinstance(raw, list):
        abort(400, description='assignedTo must be an array of user IDs')
    if not raw:
        abort(400, description='assignedTo must contain at least one user ID')
    try:
        ids = {int(user_id) for user_id in raw}
    except (TypeError, ValueError):
        abort(400, description='assignedTo must be an array of user IDs')
    users = User.query.filter(User.id.in_(ids)).order_by(User.id).all()
    if len(users) != len(ids):
        abort(400, description='assignedTo references an unknown user')
    return users


@dataclass
class TaskPatch:
    """Fields to replace on a task; ``None`` means leave unchanged."""
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[datetime] = None
    todo_checklist: Optional[list] = None
    attachments: Optional[list] = None
    assigned_to: Optional[List[User]] = None

    @classmethod
    def from_payload(cls, data):
        # Falsy values (empty string, empty list) count as absent, so a
        # field cannot be cleared through a partial update.
        patch = cls()
        if data.get('title'):
            patch.title = str(data['title'])
        if data.get('description'):
            patch.description = str(data['description'])
        if data.get('priority'):
            patch.priority = parse_priority(data['priority'])
        if data.get('dueDate'):
            patch.due_date = parse_due_date(data['dueDate'])
        if data.get('todoChecklist'):
            patch.todo_checklist = parse_checklist(data['todoChecklist'])
        if data.get('attachments'):
            patch.attachments = parse_attachments(data['attachments'])
        if data.get('assignedTo') is not None:
            patch.assigned_to = resolve_assignees(data['assignedTo'])
        return patch

    def apply(self, task):
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not None:
                setattr(task, field.name, value)
        return task


# ==================== Queries ====================

def scoped_tasks(user):
    """All tasks for admins, only assigned tasks for members."""
    query = Task.query
    if not is_admin(user):
        query = query.filter(Task.assigned_to.any(User.id == user.id))
    return query


def status_summary(scope):
    counts = grouped_counts(scope, Task.status, STATUSES)
    return {
        'all': scope.count(),
        'pendingTasks': counts['Pending'],
        'inProgressTasks': counts['In Progress'],
        'completedTasks': counts['Completed'],
    }


def list_tasks(user, status=None):
    """Return ``(tasks, summary)`` for the caller's scope.

    The status filter narrows the task list only; the summary always covers
    the whole scope.
    """
    scope = scoped_tasks(user)
    query = scope.filter(Task.status == status) if status else scope
    tasks = query.order_by(Task.created_at.desc(), Task.id.desc()).all()
    return tasks, status_summary(scope)


def get_task(task_id):
    return db.get_or_404(Task, task_id, description='Task not found')


# ==================== Mutations ====================

def create_task(user, data):
    if not data.get('title'):
        abort(400, description='title is required')
    assignees = resolve_assignees(data.get('assignedTo'))

    checklist = parse_checklist(data.get('todoChecklist') or [])
    progress = compute_progress(checklist)

    task = Task(
        title=str(data['title']),
        description=data.get('description'),
        priority=parse_priority(data.get('priority') or 'Medium'),
        due_date=parse_due_date(data.get('dueDate')),
        created_by_id=user.id,
        todo_checklist=checklist,
        attachments=parse_attachments(data.get('attachments') or []),
        progress=progress,
        status=status_for_progress(progress),
    )
    task.assigned_to = assignees
    db.session.add(task)
    db.session.commit()
    logger.info("Task %s created by user %s", task.id, user.id)
    return task


def update_task(task_id, data):
    task = get_task(task_id)
    # Parse everything first so a bad field leaves the task untouched
    patch = TaskPatch.from_payload(data)
    patch.apply(task)
    db.session.commit()
    logger.info("Task %s updated", task.id)
    return task


def delete_task(task_id):
    task = get_task(task_id)
    db.session.delete(task)
    db.session.commit()
    logger.info("Task %s deleted", task_id)


def update_status(user, task_id, status):
    task = get_task(task_id)
    if not can_update_progress(user, task):
        abort(403, description='Not authorized')

    new_status = status or task.status
    if new_status not in STATUSES:
        abort(400, description=f"status must be one of {', '.join(STATUSES)}")
    task.status = new_status

    if task.status == 'Completed':
        task.todo_checklist = complete_checklist(task.todo_checklist or [])
        task.progress = 100

    db.session.commit()
    logger.info("Task %s status set to %s by user %s", task.id, task.status, user.id)
    return task


def update_checklist(user, task_id, checklist):
    task = get_task(task_id)
    if not can_update_progress(user, task):
        abort(403, description='Not authorized to update checklist')

    items = parse_checklist(checklist)
    task.todo_checklist = items
    task.progress = compute_progress(items)
    task.status = status_for_progress(task.progress)

    db.session.commit()
    logger.info("Task %s checklist updated, progress %s%%", task.id, task.progress)
    return get_task(task_id)
