# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from files_manager.application.use_cases.users.get_current_user import (
    GetCurrentUserUseCase,
)
from files_manager.application.use_cases.users.register_user import RegisterUserUseCase
from files_manager.interfaces.http.auth import request_token
from files_manager.interfaces.http.dto.auth import RegisterRequestDTO, UserDTO
from files_manager.shared.errors.validation import raise_validation_error
from files_manager.shared.logging import logger


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._current_user_use_case = current_user_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.email, dto.password)
        logger.info(f"users.register: ok user_id={user.id}")
        return jsonify(UserDTO.from_user(user).model_dump()), 201

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(request_token())
        return jsonify(UserDTO.from_user(user).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/users")
        bp.add_url_rule("", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
