"""Task model and its assignee association table."""
from datetime import datetime
from sqlalchemy.dialects.postgresql import JSONB
from taskmanager.extensions import db

PRIORITIES = ('Low', 'Medium', 'High')
STATUSES = ('Pending', 'In Progress', 'Completed')

# JSONB on Postgres, plain JSON elsewhere (sqlite in tests)
JSONList = db.JSON().with_variant(JSONB(), 'postgresql')

task_assignees = db.Table(
    'task_assignees',
    db.Column('task_id', db.Integer, db.ForeignKey('tasks.id', ondelete='CASCADE'), primary_key=True),
    db.Column('user_id', db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
)


def isoformat_utc(value):
    """Stored datetimes are naive UTC; mark them as such on the way out."""
    return value.isoformat() + 'Z' if value else None


class Task(db.Model):
    __tablename__ = 'tasks'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    priority = db.Column(db.String(10), nullable=False, default='Medium')  # Low, Medium, High
    status = db.Column(db.String(20), nullable=False, default='Pending')  # Pending, In Progress, Completed
    due_date = db.Column(db.DateTime)
    created_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    todo_checklist = db.Column(JSONList, nullable=False, default=list)  # [{text, completed}]
    attachments = db.Column(JSONList, nullable=False, default=list)
    progress = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    created_by = db.relationship('User', foreign_keys=[created_by_id])
    assigned_to = db.relationship('User', secondary=task_assignees, lazy='selectin', order_by='User.id')

    def is_assigned(self, user):
        return any(assignee.id == user.id for assignee in self.assigned_to)

    @property
    def completed_todo_count(self):
        return sum(1 for item in self.todo_checklist or [] if item.get('completed'))

    def to_dict(self, populate=True):
        """Full representation; assignees are embedded when ``populate`` is set."""
        if populate:
            assigned = [user.to_summary() for user in self.assigned_to]
        else:
            assigned = [str(user.id) for user in self.assigned_to]
        return {
            '_id': str(self.id),
            'title': self.title,
            'description': self.description,
            'priority': self.priority,
            'status': self.status,
            'dueDate': isoformat_utc(self.due_date),
            'assignedTo': assigned,
            'createdBy': str(self.created_by_id),
            'todoChecklist': list(self.todo_checklist or []),
            'attachments': list(self.attachments or []),
            'progress': self.progress,
            'createdAt': isoformat_utc(self.created_at),
            'updatedAt': isoformat_utc(self.updated_at),
        }

    def to_recent(self):
        """The trimmed shape used by the dashboard's recent-task list."""
        return {
            '_id': str(self.id),
            'title': self.title,
            'status': self.status,
            'priority': self.priority,
            'dueDate': isoformat_utc(self.due_date),
            'createdAt': isoformat_utc(self.created_at),
        }
