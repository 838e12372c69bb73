"""
Routes for the auth blueprint — login, logout and dev login.

Credentials are verified by the remote inventory API.  The
development-only ``/dev-login`` route bypasses the API and signs in
an offline user with the requested role; it is available only when
``DEV_LOGIN_ENABLED`` is set and the app runs in debug or testing mode.
"""

from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from inventory.blueprints.auth import bp
from inventory.services import auth_service


@bp.route("/login", methods=["GET", "POST"])
def login():
    """Render the login form and sign the user in on POST."""
    if current_user.is_authenticated:
        return redirect(url_for("equipment.equipment_list"))

    if request.method == "POST":
        username = request.form.get("username", "").strip()
        password = request.form.get("password", "")

        try:
            user = auth_service.authenticate(username, password)
        except ValueError as exc:
            flash(str(exc), "danger")
            return render_template("auth/login.html", username=username), 401

        login_user(user)
        flash(f"Bem-vindo, {user.display_name}!", "success")
        return redirect(url_for("equipment.equipment_list"))

    return render_template("auth/login.html", username="")


@bp.route("/logout")
@login_required
def logout():
    """Clear the session and return to the login page."""
    logout_user()
    auth_service.clear_session()
    flash("Você saiu do sistema.", "info")
    return redirect(url_for("auth.login"))


# =========================================================================
# Development-Only Routes
# =========================================================================


@bp.route("/dev-login")
def dev_login():
    """
    Development-only login bypass.

    Query Parameters:
        role (str): ``admin`` or ``user``.  Defaults to ``admin``.
    """
    enabled = current_app.config.get("DEV_LOGIN_ENABLED") and (
        current_app.debug or current_app.testing
    )
    if not enabled:
        flash("Login de desenvolvimento indisponível.", "danger")
        return redirect(url_for("auth.login"))

    role = request.args.get("role", "admin").strip()
    user = auth_service.build_dev_user(role)
    login_user(user)
    flash(f"Dev login: {user.display_name}", "info")
    return redirect(url_for("equipment.equipment_list"))
