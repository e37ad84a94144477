# tests/test_task_rules.py

from __future__ import annotations

from types import SimpleNamespace

import pytest
from werkzeug.exceptions import BadRequest, Forbidden, NotFound

from taskmanager.models import Task
from taskmanager.services import tasks as task_service
from taskmanager.services.policy import can_manage_tasks, can_update_progress, is_admin
from taskmanager.services.tasks import (
    TaskPatch,
    compute_progress,
    parse_checklist,
    status_for_progress,
)

from .factories import make_task, reload


def items(*flags):
    return [{"text": f"step {i}", "completed": flag} for i, flag in enumerate(flags)]


@pytest.mark.parametrize(
    "flags, progress, status",
    [
        ((True, False, True), 67, "In Progress"),
        ((), 0, "Pending"),
        ((False, False), 0, "Pending"),
        ((True, True), 100, "Completed"),
        ((True, False), 50, "In Progress"),
        ((True,) + (False,) * 7, 13, "In Progress"),  # 12.5 rounds up
    ],
)
def test_progress_and_status_follow_checklist(flags, progress, status):
    assert compute_progress(items(*flags)) == progress
    assert status_for_progress(progress) == status


def test_parse_checklist_rejects_non_lists():
    with pytest.raises(BadRequest):
        parse_checklist({"text": "nope"})
    with pytest.raises(BadRequest):
        parse_checklist(["plain string"])


def test_parse_checklist_normalises_items():
    assert parse_checklist([{"text": "a"}, {"text": "b", "completed": True}]) == [
        {"text": "a", "completed": False},
        {"text": "b", "completed": True},
    ]


# ---- policy ----

def _task_assigned_to(*user_ids):
    return SimpleNamespace(is_assigned=lambda user: user.id in user_ids)


def test_policy_admin_can_always_update_progress():
    admin = SimpleNamespace(id=1, role="admin")
    assert is_admin(admin)
    assert can_manage_tasks(admin)
    assert can_update_progress(admin, _task_assigned_to(2))


def test_policy_member_needs_assignment():
    member = SimpleNamespace(id=2, role="member")
    assert not can_manage_tasks(member)
    assert can_update_progress(member, _task_assigned_to(2, 3))
    assert not can_update_progress(member, _task_assigned_to(3))
    assert not can_update_progress(None, _task_assigned_to(3))


# ---- patch semantics ----

def test_patch_treats_falsy_values_as_absent(app, admin, member):
    task = make_task(admin, [member], title="Keep me")
    patch = TaskPatch.from_payload({"title": "", "description": None, "priority": "High"})
    assert patch.title is None
    patch.apply(task)
    assert task.title == "Keep me"
    assert task.priority == "High"


def test_patch_rejects_non_array_assignees_before_touching_task(app, admin, member):
    task = make_task(admin, [member], title="Original")
    with pytest.raises(BadRequest):
        task_service.update_task(task.id, {"title": "Changed", "assignedTo": "not-a-list"})
    fresh = reload(Task, task.id)
    assert fresh.title == "Original"
    assert [u.id for u in fresh.assigned_to] == [member.id]


# ---- status / checklist transitions ----

def test_completed_status_forces_checklist(app, admin, member):
    task = make_task(admin, [member], todo_checklist=items(False, True, False), progress=33)
    task_service.update_status(member, task.id, "Completed")

    fresh = reload(Task, task.id)
    assert fresh.status == "Completed"
    assert fresh.progress == 100
    assert all(item["completed"] for item in fresh.todo_checklist)


def test_status_update_keeps_current_when_absent(app, admin, member):
    task = make_task(admin, [member], status="In Progress")
    task_service.update_status(member, task.id, None)
    assert reload(Task, task.id).status == "In Progress"


def test_status_update_rejects_unknown_status(app, admin, member):
    task = make_task(admin, [member])
    with pytest.raises(BadRequest):
        task_service.update_status(member, task.id, "Done")


def test_unassigned_member_is_forbidden(app, admin, member, other_member):
    task = make_task(admin, [member])
    with pytest.raises(Forbidden):
        task_service.update_status(other_member, task.id, "Completed")
    with pytest.raises(Forbidden):
        task_service.update_checklist(other_member, task.id, items(True))
    assert reload(Task, task.id).status == "Pending"


def test_checklist_update_derives_progress_and_status(app, admin, member):
    task = make_task(admin, [member])
    updated = task_service.update_checklist(member, task.id, items(True, False, True))
    assert updated.progress == 67
    assert updated.status == "In Progress"

    updated = task_service.update_checklist(admin, task.id, [])
    assert updated.progress == 0
    assert updated.status == "Pending"


def test_missing_task_is_not_found(app, admin):
    with pytest.raises(NotFound):
        task_service.get_task(999)
    with pytest.raises(NotFound):
        task_service.update_status(admin, 999, "Completed")
