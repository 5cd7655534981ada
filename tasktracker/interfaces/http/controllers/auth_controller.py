# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, redirect, render_template, request, url_for
from pydantic import ValidationError as PydanticValidationError

from tasktracker.application.use_cases.users.login_user import LoginUserUseCase
from tasktracker.application.use_cases.users.logout_user import LogoutUserUseCase
from tasktracker.application.use_cases.users.register_user import \
    RegisterUserUseCase
from tasktracker.domain.users.exceptions import (InvalidCredentialsError,
                                                 UserAlreadyExistsError)
from tasktracker.infrastructure.audit import AuditAction, audit_log
from tasktracker.interfaces.http.auth import (clear_session_cookie, client_ip,
                                              read_session_token,
                                              set_session_cookie)
from tasktracker.interfaces.http.dto.auth import LoginForm, RegisterForm
from tasktracker.shared.errors.base import ValidationError
from tasktracker.shared.errors.validation import (first_message,
                                                  raise_validation_error)
from tasktracker.shared.logging import logger

DUPLICATE_MESSAGE = "Username or email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    def register_form(self):
        return render_template("register.html", error=None, form={})

    def register(self):
        form_data = request.form.to_dict()
        form_data.pop("password_confirm", None)
        try:
            try:
                form = RegisterForm.model_validate(form_data)
            except PydanticValidationError as exc:
                raise_validation_error(exc)
            user = self._register_use_case.execute(form.username, form.email, form.password)
        except ValidationError as exc:
            return self._register_error(first_message(exc), HTTPStatus.UNPROCESSABLE_ENTITY)
        except UserAlreadyExistsError:
            audit_log(
                AuditAction.REGISTER_FAILED,
                ip_address=client_ip(),
                details={"reason": "duplicate"},
                success=False,
            )
            return self._register_error(DUPLICATE_MESSAGE, HTTPStatus.CONFLICT)

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=client_ip(),
            details={"username": user.username},
            success=True,
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return redirect(url_for("auth.login_form"))

    def _register_error(self, message: str, status: HTTPStatus):
        form = request.form.to_dict()
        form.pop("password", None)
        form.pop("password_confirm", None)
        return render_template("register.html", error=message, form=form), status

    def login_form(self):
        return render_template("login.html", error=None, form={})

    def login(self):
        ip_address = client_ip()
        try:
            try:
                form = LoginForm.model_validate(request.form.to_dict())
            except PydanticValidationError as exc:
                raise_validation_error(exc)
            user_id, token = self._login_use_case.execute(form.email, form.password)
        except (InvalidCredentialsError, ValidationError) as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"error": type(exc).__name__},
                success=False,
            )
            form_echo = {"email": request.form.get("email", "")}
            return (
                render_template("login.html", error=INVALID_CREDENTIALS_MESSAGE, form=form_echo),
                HTTPStatus.UNAUTHORIZED,
            )

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=user_id, ip_address=ip_address)
        response = redirect(url_for("tasks.dashboard"))
        set_session_cookie(response, token)
        logger.info(f"auth.login: ok user_id={user_id}")
        return response

    def logout(self):
        self._logout_use_case.execute(read_session_token())
        audit_log(AuditAction.LOGOUT, ip_address=client_ip())
        response = redirect(url_for("misc.index"))
        clear_session_cookie(response)
        logger.info("auth.logout: ok")
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule(
            "/register", endpoint="register_form", view_func=self.register_form, methods=["GET"]
        )
        bp.add_url_rule("/register", endpoint="register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", endpoint="login_form", view_func=self.login_form, methods=["GET"])
        bp.add_url_rule("/login", endpoint="login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", endpoint="logout", view_func=self.logout, methods=["GET"])
        return bp
