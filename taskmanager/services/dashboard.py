"""Dashboard aggregation over the task table."""
from datetime import datetime

from sqlalchemy import func

from taskmanager.models import Task, User, PRIORITIES, STATUSES

RECENT_TASK_LIMIT = 10


def grouped_counts(scope, column, buckets):
    """Count tasks per value of ``column``, with every bucket present."""
    raw = dict(scope.with_entities(column, func.count(Task.id)).group_by(column).all())
    return {bucket: raw.get(bucket, 0) for bucket in buckets}


def build_dashboard(scope, now=None):
    """Statistics, charts and recent tasks for one task scope."""
    now = now or datetime.utcnow()

    total = scope.count()
    by_status = grouped_counts(scope, Task.status, STATUSES)
    overdue = scope.filter(
        Task.status != 'Completed',
        Task.due_date.isnot(None),
        Task.due_date < now,
    ).count()

    # Response keys drop the spaces ("In Progress" -> "InProgress")
    task_distribution = {status.replace(' ', ''): count for status, count in by_status.items()}
    task_distribution['All'] = total

    recent = scope.order_by(Task.created_at.desc(), Task.id.desc()).limit(RECENT_TASK_LIMIT).all()

    return {
        'statistics': {
            'totalTasks': total,
            'pendingTasks': by_status['Pending'],
            'completedTasks': by_status['Completed'],
            'overdueTasks': overdue,
        },
        'charts': {
            'taskDistribution': task_distribution,
            'taskPriorityLevels': grouped_counts(scope, Task.priority, PRIORITIES),
        },
        'recentTasks': [task.to_recent() for task in recent],
    }


def global_dashboard(now=None):
    return build_dashboard(Task.query, now=now)


def user_dashboard(user, now=None):
    scope = Task.query.filter(Task.assigned_to.any(User.id == user.id))
    return build_dashboard(scope, now=now)


def user_task_counts(user):
    """Per-status counts of the tasks assigned to ``user``."""
    scope = Task.query.filter(Task.assigned_to.any(User.id == user.id))
    counts = grouped_counts(scope, Task.status, STATUSES)
    return {
        'pendingTasks': counts['Pending'],
        'inProgressTasks': counts['In Progress'],
        'completedTasks': counts['Completed'],
    }
