"""Authorization policy: plain (caller, resource) -> bool checks."""


def is_admin(user):
    return user is not None and user.role == 'admin'


def can_manage_tasks(user):
    """Creating and deleting tasks is reserved to admins."""
    return is_admin(user)


def can_update_progress(user, task):
    """Status and checklist may be changed by an assignee or any admin."""
    if user is None:
        return False
    return is_admin(user) or task.is_assigned(user)
