# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from tasktracker.application.services.access_guard import AccessGuard
from tasktracker.application.services.password_hashing import \
    WerkzeugPasswordHasher
from tasktracker.application.services.session_manager import SessionManager
from tasktracker.application.use_cases.tasks.create_task import CreateTaskUseCase
from tasktracker.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from tasktracker.application.use_cases.tasks.load_dashboard import \
    LoadDashboardUseCase
from tasktracker.application.use_cases.tasks.update_task_status import \
    UpdateTaskStatusUseCase
from tasktracker.application.use_cases.users.authenticate_user import \
    AuthenticateUserUseCase
from tasktracker.application.use_cases.users.login_user import LoginUserUseCase
from tasktracker.application.use_cases.users.logout_user import LogoutUserUseCase
from tasktracker.application.use_cases.users.register_user import \
    RegisterUserUseCase
from tasktracker.domain.users.repositories import SessionStore
from tasktracker.infrastructure.db import SessionLocal
from tasktracker.infrastructure.repositories.tasks.sqlalchemy_task_repository import \
    SqlAlchemyTaskRepository
from tasktracker.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionStore, SqlAlchemyUserRepository)
from tasktracker.infrastructure.session_sweeper import SessionSweeper
from tasktracker.infrastructure.sessions.memory import InMemorySessionStore
from tasktracker.interfaces.http.controllers.auth_controller import AuthController
from tasktracker.interfaces.http.controllers.misc_controller import MiscController
from tasktracker.interfaces.http.controllers.tasks_controller import \
    TasksController
from tasktracker.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def task_repository(self) -> SqlAlchemyTaskRepository:
        return SqlAlchemyTaskRepository(SessionLocal)

    @cached_property
    def session_store(self) -> SessionStore:
        if self.config.session.backend == "memory":
            return InMemorySessionStore()
        return SqlAlchemySessionStore(SessionLocal)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            store=self.session_store,
            lifetime=self.config.session.lifetime_delta,
        )

    @cached_property
    def session_sweeper(self) -> SessionSweeper:
        return SessionSweeper(self.session_manager, self.config.session.sweep_interval)

    @cached_property
    def access_guard(self) -> AccessGuard:
        return AccessGuard(sessions=self.session_manager)

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            authenticate=self.authenticate_user_use_case,
            sessions=self.session_manager,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_manager)

    # Task use cases

    @cached_property
    def load_dashboard_use_case(self) -> LoadDashboardUseCase:
        return LoadDashboardUseCase(users=self.user_repository, tasks=self.task_repository)

    @cached_property
    def create_task_use_case(self) -> CreateTaskUseCase:
        return CreateTaskUseCase(tasks=self.task_repository)

    @cached_property
    def update_task_status_use_case(self) -> UpdateTaskStatusUseCase:
        return UpdateTaskStatusUseCase(tasks=self.task_repository)

    @cached_property
    def delete_task_use_case(self) -> DeleteTaskUseCase:
        return DeleteTaskUseCase(tasks=self.task_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def tasks_controller(self) -> TasksController:
        return TasksController(
            guard=self.access_guard,
            load_dashboard=self.load_dashboard_use_case,
            create_task=self.create_task_use_case,
            update_status=self.update_task_status_use_case,
            delete_task=self.delete_task_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(sessions=self.session_manager)


container = Container()
