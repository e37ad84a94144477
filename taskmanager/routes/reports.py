"""Report export routes."""
from datetime import date

from flask import Blueprint, Response

from taskmanager.routes.auth import login_required, admin_required
from taskmanager.services.export import export_tasks_csv, export_users_csv

reports_bp = Blueprint('reports', __name__, url_prefix='/api/reports')


def csv_attachment(data, name):
    filename = f"{name}_{date.today().isoformat()}.csv"
    return Response(
        data,
        mimetype="text/csv",
        headers={"Content-disposition": f"attachment; filename={filename}"}
    )


@reports_bp.route('/export/tasks')
@login_required
@admin_required
def export_tasks():
    return csv_attachment(export_tasks_csv(), 'tasks_report')


@reports_bp.route('/export/users')
@login_required
@admin_required
def export_users():
    return csv_attachment(export_users_csv(), 'users_report')
