# tests/factories.py

from __future__ import annotations

from datetime import datetime, timedelta

from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from taskmanager.models import db, Task, User

PASSWORD = "Secret123!"


def make_user(name: str, email: str, role: str = "member") -> User:
    user = User(
        name=name,
        email=email,
        password_hash=generate_password_hash(PASSWORD),
        role=role,
    )
    db.session.add(user)
    db.session.commit()
    return user


def make_task(creator: User, assignees: list[User], **overrides) -> Task:
    values = {
        "title": "Write report",
        "description": "Quarterly numbers",
        "priority": "Medium",
        "status": "Pending",
        "due_date": datetime.utcnow() + timedelta(days=3),
        "todo_checklist": [],
        "attachments": [],
        "progress": 0,
    }
    values.update(overrides)
    task = Task(created_by_id=creator.id, **values)
    task.assigned_to = list(assignees)
    db.session.add(task)
    db.session.commit()
    return task


def reload(model, pk):
    """Fetch a fresh copy, ignoring anything cached in the test session."""
    db.session.expire_all()
    return db.session.get(model, pk)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(identity=str(user.id))}"}
