"""Task routes - CRUD, status/checklist updates and dashboards."""
from flask import Blueprint, request, jsonify, g

from taskmanager.routes.auth import login_required, admin_required, request_data
from taskmanager.services import tasks as task_service
from taskmanager.services.dashboard import global_dashboard, user_dashboard

tasks_bp = Blueprint('tasks', __name__, url_prefix='/api/tasks')


# ========================================
# DASHBOARDS
# ========================================

@tasks_bp.route('/dashboard-data')
@login_required
def dashboard_data():
    return jsonify(global_dashboard())


@tasks_bp.route('/user-dashboard-data')
@login_required
def user_dashboard_data():
    return jsonify(user_dashboard(g.user))


# ========================================
# TASK CRUD
# ========================================

@tasks_bp.route('/', methods=['GET'], strict_slashes=False)
@login_required
def list_tasks():
    status = request.args.get('status') or None
    tasks, summary = task_service.list_tasks(g.user, status)

    items = []
    for task in tasks:
        item = task.to_dict()
        item['completedTodoCount'] = task.completed_todo_count
        items.append(item)

    return jsonify({'tasks': items, 'statusSummary': summary})


@tasks_bp.route('/<int:task_id>', methods=['GET'])
@login_required
def get_task(task_id):
    return jsonify(task_service.get_task(task_id).to_dict())


@tasks_bp.route('/', methods=['POST'], strict_slashes=False)
@login_required
@admin_required
def create_task():
    task = task_service.create_task(g.user, request_data())
    return jsonify({'message': 'Task created successfully', 'task': task.to_dict(populate=False)}), 201


@tasks_bp.route('/<int:task_id>', methods=['PUT'])
@login_required
def update_task(task_id):
    task = task_service.update_task(task_id, request_data())
    return jsonify({'message': 'Task updated successfully', 'updatedTask': task.to_dict(populate=False)})


@tasks_bp.route('/<int:task_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_task(task_id):
    task_service.delete_task(task_id)
    return jsonify({'message': 'Task deleted successfully'})


# ========================================
# STATUS AND CHECKLIST
# ========================================

@tasks_bp.route('/<int:task_id>/status', methods=['PUT'])
@login_required
def update_task_status(task_id):
    task = task_service.update_status(g.user, task_id, request_data().get('status'))
    return jsonify({'message': 'Task status updated', 'task': task.to_dict(populate=False)})


@tasks_bp.route('/<int:task_id>/todo', methods=['PUT'])
@login_required
def update_task_checklist(task_id):
    task = task_service.update_checklist(g.user, task_id, request_data().get('todoChecklist'))
    return jsonify({'message': 'Task checklist updated', 'task': task.to_dict()})
