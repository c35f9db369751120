# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine

from files_manager.application.services.access_gate import AccessGate
from files_manager.application.services.password_hashing import WerkzeugPasswordHasher
from files_manager.application.use_cases.files.get_file_content import (
    GetFileContentUseCase,
)
from files_manager.application.use_cases.files.list_files import ListFilesUseCase
from files_manager.application.use_cases.files.publish_file import PublishFileUseCase
from files_manager.application.use_cases.files.show_file import ShowFileUseCase
from files_manager.application.use_cases.files.upload_file import UploadFileUseCase
from files_manager.application.use_cases.thumbnails.generate_thumbnails import (
    GenerateThumbnailsUseCase,
)
from files_manager.application.use_cases.users.get_current_user import (
    GetCurrentUserUseCase,
)
from files_manager.application.use_cases.users.login_user import LoginUserUseCase
from files_manager.application.use_cases.users.logout_user import LogoutUserUseCase
from files_manager.application.use_cases.users.register_user import RegisterUserUseCase
from files_manager.infrastructure.db import ENGINE, SessionLocal
from files_manager.infrastructure.queue import SqlThumbnailQueue
from files_manager.infrastructure.repositories.files.sqlalchemy_file_repository import (
    SqlAlchemyFileRepository,
)
from files_manager.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionStore,
    SqlAlchemyUserRepository,
)
from files_manager.infrastructure.storage import LocalBlobStore
from files_manager.infrastructure.thumbnails import PillowThumbnailRenderer
from files_manager.infrastructure.unit_of_work import SessionFactory
from files_manager.interfaces.http.controllers.auth_controller import AuthController
from files_manager.interfaces.http.controllers.files_controller import FilesController
from files_manager.interfaces.http.controllers.misc_controller import MiscController
from files_manager.interfaces.http.controllers.users_controller import UsersController
from files_manager.services.thumbnail_worker import ThumbnailWorkerPool
from files_manager.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        *,
        config: AppConfig | None = None,
        engine: Engine | None = None,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self.config = config or load_config()
        self.engine = engine or ENGINE
        self.session_factory = session_factory or SessionLocal

    # Stores

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore(
            self.session_factory, ttl_seconds=self.config.session_ttl
        )

    @cached_property
    def file_repository(self) -> SqlAlchemyFileRepository:
        return SqlAlchemyFileRepository(self.session_factory)

    @cached_property
    def blob_store(self) -> LocalBlobStore:
        return LocalBlobStore(self.config.folder_path)

    @cached_property
    def thumbnail_queue(self) -> SqlThumbnailQueue:
        return SqlThumbnailQueue(
            self.session_factory,
            visibility_timeout=self.config.queue.visibility_timeout,
        )

    @cached_property
    def access_gate(self) -> AccessGate:
        return AccessGate(
            sessions=self.session_store,
            users=self.user_repository,
            files=self.file_repository,
        )

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(gate=self.access_gate, sessions=self.session_store)

    @cached_property
    def current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(gate=self.access_gate, users=self.user_repository)

    # File use cases

    @cached_property
    def upload_file_use_case(self) -> UploadFileUseCase:
        return UploadFileUseCase(
            gate=self.access_gate,
            files=self.file_repository,
            blobs=self.blob_store,
            queue=self.thumbnail_queue,
        )

    @cached_property
    def show_file_use_case(self) -> ShowFileUseCase:
        return ShowFileUseCase(gate=self.access_gate)

    @cached_property
    def list_files_use_case(self) -> ListFilesUseCase:
        return ListFilesUseCase(gate=self.access_gate, files=self.file_repository)

    @cached_property
    def publish_file_use_case(self) -> PublishFileUseCase:
        return PublishFileUseCase(gate=self.access_gate, files=self.file_repository)

    @cached_property
    def file_content_use_case(self) -> GetFileContentUseCase:
        return GetFileContentUseCase(
            gate=self.access_gate,
            files=self.file_repository,
            blobs=self.blob_store,
        )

    # Thumbnails

    @cached_property
    def thumbnail_renderer(self) -> PillowThumbnailRenderer:
        return PillowThumbnailRenderer()

    @cached_property
    def generate_thumbnails_use_case(self) -> GenerateThumbnailsUseCase:
        return GenerateThumbnailsUseCase(
            files=self.file_repository,
            blobs=self.blob_store,
            renderer=self.thumbnail_renderer,
        )

    @cached_property
    def thumbnail_worker_pool(self) -> ThumbnailWorkerPool:
        return ThumbnailWorkerPool(
            queue=self.thumbnail_queue,
            use_case=self.generate_thumbnails_use_case,
            workers=self.config.queue.workers,
            poll_interval=self.config.queue.poll_interval,
            max_attempts=self.config.queue.max_attempts,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=self.register_user_use_case,
            current_user_use_case=self.current_user_use_case,
        )

    @cached_property
    def files_controller(self) -> FilesController:
        return FilesController(
            upload_use_case=self.upload_file_use_case,
            show_use_case=self.show_file_use_case,
            list_use_case=self.list_files_use_case,
            publish_use_case=self.publish_file_use_case,
            content_use_case=self.file_content_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            engine=self.engine,
            queue=self.thumbnail_queue,
            users=self.user_repository,
            files=self.file_repository,
        )


container = Container()
