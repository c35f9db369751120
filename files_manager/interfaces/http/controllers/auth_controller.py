# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from files_manager.application.use_cases.users.login_user import LoginUserUseCase
from files_manager.application.use_cases.users.logout_user import LogoutUserUseCase
from files_manager.interfaces.http.auth import basic_credentials, request_token
from files_manager.interfaces.http.dto.auth import TokenDTO
from files_manager.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    def connect(self) -> tuple[Response, int]:
        email, password = basic_credentials()
        session = self._login_use_case.execute(email, password)
        logger.info(f"auth.connect: ok user_id={session.user_id}")
        return jsonify(TokenDTO(token=session.token).model_dump()), 200

    def disconnect(self) -> tuple[str, int]:
        user_id = self._logout_use_case.execute(request_token())
        logger.info(f"auth.disconnect: ok user_id={user_id}")
        return "", 204

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/connect", view_func=self.connect, methods=["GET"])
        bp.add_url_rule("/disconnect", view_func=self.disconnect, methods=["GET"])
        return bp
