"""Export service - CSV reports of tasks and users."""
from taskmanager.models import Task, User
from taskmanager.services.dashboard import user_task_counts
import csv
import io


def export_tasks_csv():
    """Export every task to CSV format."""
    tasks = Task.query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['Task ID', 'Title', 'Description', 'Priority', 'Status', 'Due Date', 'Progress', 'Assigned To'])

    for task in tasks:
        assigned_str = ', '.join(f"{user.name} ({user.email})" for user in task.assigned_to)
        writer.writerow([
            task.id,
            task.title,
            task.description or '',
            task.priority,
            task.status,
            task.due_date.date().isoformat() if task.due_date else '',
            task.progress,
            assigned_str
        ])

    return output.getvalue()


def export_users_csv():
    """Export every user with their task counts to CSV format."""
    users = User.query.order_by(User.name).all()

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['User Name', 'Email', 'Role', 'Total Assigned Tasks', 'Pending Tasks', 'In Progress Tasks', 'Completed Tasks'])

    for user in users:
        counts = user_task_counts(user)
        writer.writerow([
            user.name,
            user.email,
            user.role,
            sum(counts.values()),
            counts['pendingTasks'],
            counts['inProgressTasks'],
            counts['completedTasks']
        ])

    return output.getvalue()
