# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request, send_file
from pydantic import ValidationError

from files_manager.application.use_cases.files.get_file_content import (
    GetFileContentUseCase,
)
from files_manager.application.use_cases.files.list_files import ListFilesUseCase
from files_manager.application.use_cases.files.publish_file import PublishFileUseCase
from files_manager.application.use_cases.files.show_file import ShowFileUseCase
from files_manager.application.use_cases.files.upload_file import UploadFileUseCase
from files_manager.interfaces.http.auth import request_token
from files_manager.interfaces.http.dto.files import (
    ContentQueryDTO,
    FileDTO,
    ListFilesQueryDTO,
    UploadFileRequestDTO,
)
from files_manager.shared.errors.validation import raise_validation_error


class FilesController:
    """HTTP surface for file metadata and content.

    Every handler passes the raw request token through; deciding between
    anonymous, owner and stranger is left to the use cases.
    """

    def __init__(
        self,
        *,
        upload_use_case: UploadFileUseCase,
        show_use_case: ShowFileUseCase,
        list_use_case: ListFilesUseCase,
        publish_use_case: PublishFileUseCase,
        content_use_case: GetFileContentUseCase,
    ) -> None:
        self._upload_use_case = upload_use_case
        self._show_use_case = show_use_case
        self._list_use_case = list_use_case
        self._publish_use_case = publish_use_case
        self._content_use_case = content_use_case

    def upload(self) -> tuple[Response, int]:
        token = request_token()
        body = request.get_json(silent=True)
        dto = UploadFileRequestDTO.model_validate(body if isinstance(body, dict) else {})

        record = self._upload_use_case.execute(token, dto.to_input())
        return jsonify(FileDTO.from_record(record).to_wire()), 201

    def show(self, file_id: int) -> tuple[Response, int]:
        record = self._show_use_case.execute(request_token(), file_id)
        return jsonify(FileDTO.from_record(record).to_wire()), 200

    def index(self) -> tuple[Response, int]:
        try:
            query = ListFilesQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        records = self._list_use_case.execute(
            request_token(), parent_id=query.parent_id, page=query.page
        )
        return jsonify([FileDTO.from_record(r).to_wire() for r in records]), 200

    def publish(self, file_id: int) -> tuple[Response, int]:
        record = self._publish_use_case.execute(request_token(), file_id, is_public=True)
        return jsonify(FileDTO.from_record(record).to_wire()), 200

    def unpublish(self, file_id: int) -> tuple[Response, int]:
        record = self._publish_use_case.execute(request_token(), file_id, is_public=False)
        return jsonify(FileDTO.from_record(record).to_wire()), 200

    def content(self, file_id: int) -> Response:
        query = ContentQueryDTO.model_validate(request.args.to_dict())
        content = self._content_use_case.execute(request_token(), file_id, query.size)
        return send_file(content.stream, mimetype=content.mimetype)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("files", __name__, url_prefix="/files")
        bp.add_url_rule("", view_func=self.upload, methods=["POST"])
        bp.add_url_rule("", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/<int:file_id>", view_func=self.show, methods=["GET"])
        bp.add_url_rule("/<int:file_id>/publish", view_func=self.publish, methods=["PUT"])
        bp.add_url_rule(
            "/<int:file_id>/unpublish", view_func=self.unpublish, methods=["PUT"]
        )
        bp.add_url_rule("/<int:file_id>/data", view_func=self.content, methods=["GET"])
        return bp
