"""
Routes for the equipment blueprint — inventory list, form, export,
responsibility terms and change history.

Any signed-in user may list, create and edit records; deleting is
restricted to the Admin role.  All persistence is delegated to the
inventory API through ``equipment_service``.
"""

import logging

from flask import (
    abort,
    current_app,
    flash,
    make_response,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import current_user, login_required

from inventory.blueprints.equipment import bp
from inventory.decorators import role_required
from inventory.models.equipment import (
    FORM_FIELDS,
    STATUS_CHOICES,
    TERM_CONDITION_CHOICES,
)
from inventory.models.user import UserRole
from inventory.services import equipment_service, export_service, term_service
from inventory.services.api_client import ApiError

logger = logging.getLogger(__name__)

NO_DATA_TO_EXPORT = "Não há dados para exportar."
EXPORT_FAILED = "Erro ao gerar arquivo Excel."


# =========================================================================
# List and search
# =========================================================================


@bp.route("/")
@login_required
def equipment_list():
    """
    List the current user's equipment, filtered by the ``q`` search.

    Records are fetched fresh from the API on every request.
    """
    search = request.args.get("q", "")
    records = equipment_service.load_equipment(current_user)
    filtered = equipment_service.filter_equipment(records, search)

    return render_template(
        "equipment/equipment_list.html",
        equipment=filtered,
        total_count=len(records),
        search=search,
    )


# =========================================================================
# Create / edit form
# =========================================================================


@bp.route("/new", methods=["GET", "POST"])
@login_required
def equipment_create():
    """Create a new equipment record."""
    return _handle_form(existing=None)


@bp.route("/<int:equipment_id>/edit", methods=["GET", "POST"])
@login_required
def equipment_edit(equipment_id):
    """Edit an existing equipment record."""
    existing = equipment_service.find_equipment(current_user, equipment_id)
    if existing is None:
        flash("Equipamento não encontrado.", "warning")
        return redirect(url_for("equipment.equipment_list"))
    return _handle_form(existing=existing)


def _handle_form(existing):
    """Shared GET/POST handling for the create and edit views."""
    save_error = None

    if request.method == "POST":
        draft = {name: request.form.get(name, "") for name in FORM_FIELDS}
        try:
            result = equipment_service.save_equipment(
                draft, current_user, existing=existing
            )
        except equipment_service.SaveError as exc:
            save_error = exc.message
        else:
            if result.notice:
                flash(result.notice, "info")
            elif result.created:
                flash(f"Equipamento '{draft['name'].strip()}' adicionado.", "success")
            else:
                flash(f"Equipamento '{draft['name'].strip()}' atualizado.", "success")
            return redirect(url_for("equipment.equipment_list"))
    else:
        draft = equipment_service.build_draft(existing)

    return render_template(
        "equipment/equipment_form.html",
        mode="edit" if existing else "create",
        equipment=existing,
        form_data=draft,
        save_error=save_error,
        status_choices=STATUS_CHOICES,
        term_condition_choices=TERM_CONDITION_CHOICES,
    )


# =========================================================================
# Delete
# =========================================================================


@bp.route("/<int:equipment_id>/delete", methods=["POST"])
@login_required
@role_required(UserRole.ADMIN.value)
def equipment_delete(equipment_id):
    """Delete a record (Admin only) and reload the list."""
    try:
        deleted = equipment_service.delete_equipment(current_user, equipment_id)
    except ApiError as exc:
        flash(f"Falha ao excluir equipamento: {exc}", "danger")
    else:
        if deleted:
            flash("Equipamento excluído.", "info")
    return redirect(url_for("equipment.equipment_list", q=request.form.get("q", "")))


# =========================================================================
# Export
# =========================================================================


@bp.route("/export")
@login_required
def equipment_export():
    """
    Download the currently filtered records as an Excel workbook.

    Uses the same ``q`` search as the list view.  Problems are reported
    as alerts on the list page; nothing is raised to the user.
    """
    search = request.args.get("q", "")
    records = equipment_service.load_equipment(current_user)
    filtered = equipment_service.filter_equipment(records, search)

    if not filtered:
        flash(NO_DATA_TO_EXPORT, "warning")
        return redirect(url_for("equipment.equipment_list", q=search))

    try:
        buffer = export_service.export_equipment_excel(filtered)
    except Exception:  # pylint: disable=broad-exception-caught
        logger.exception("Excel export failed")
        flash(EXPORT_FAILED, "danger")
        return redirect(url_for("equipment.equipment_list", q=search))

    response = make_response(buffer.read())
    response.headers["Content-Type"] = export_service.XLSX_CONTENT_TYPE
    response.headers["Content-Disposition"] = (
        f"attachment; filename={export_service.export_filename()}"
    )
    return response


# =========================================================================
# Responsibility terms and history
# =========================================================================


@bp.route("/<int:equipment_id>/term/<term_type>")
@login_required
def equipment_term(equipment_id, term_type):
    """Printable handover (entrega) or return (devolucao) term."""
    if term_type not in term_service.TERM_TYPES:
        abort(404)

    equipment = equipment_service.find_equipment(current_user, equipment_id)
    if equipment is None:
        abort(404)

    term = term_service.build_term(
        equipment,
        term_type,
        issuer=current_user,
        company_name=current_app.config["COMPANY_NAME"],
    )
    return render_template("equipment/term.html", term=term, equipment=equipment)


@bp.route("/<int:equipment_id>/history")
@login_required
def equipment_history(equipment_id):
    """Change history of a record as recorded by the API."""
    equipment = equipment_service.find_equipment(current_user, equipment_id)
    if equipment is None:
        abort(404)

    try:
        entries = equipment_service.get_history(equipment_id)
    except ApiError as exc:
        logger.error("Failed to load history for equipment %s: %s", equipment_id, exc)
        flash("Não foi possível carregar o histórico do equipamento.", "danger")
        entries = []

    return render_template(
        "equipment/equipment_history.html",
        equipment=equipment,
        entries=entries,
    )
