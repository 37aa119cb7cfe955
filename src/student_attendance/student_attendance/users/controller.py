from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, BackendError, ValidationError

logger = logging.getLogger("student_attendance.users")


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "profile_id" in session:
            return redirect(url_for("home"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.clear()
                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

                session["profile_id"] = s_user.profile_id
                session["name"] = s_user.full_name
                session["email"] = s_user.email
                session["role"] = s_user.role.value

                flash("Signed in successfully.", "success")
                return redirect(url_for("home"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except BackendError as e:
                logger.exception("Sign-in failed")
                flash(f"Sign-in failed: {e}", "danger")

        return render_template("login.html")

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if request.method == "POST":
            try:
                container.auth_service.sign_up(
                    full_name=request.form.get("full_name", ""),
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                )
                flash("Account created. You can sign in now.", "success")
                return redirect(url_for("login"))
            except ValidationError as e:
                flash(str(e), "warning")
            except BackendError as e:
                logger.exception("Sign-up failed")
                flash(f"Sign-up failed: {e}", "danger")

        return render_template("signup.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("Signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/home", endpoint="home")
    @login_required
    def home():
        return render_template("home.html", name=session.get("name"), active_page="home")
