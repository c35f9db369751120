# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.shared.errors.base import InvalidOperationError, ValidationError


class MissingNameError(ValidationError):
    def __init__(self) -> None:
        super().__init__("missing_name")


class MissingTypeError(ValidationError):
    def __init__(self) -> None:
        super().__init__("missing_type")


class MissingDataError(ValidationError):
    def __init__(self) -> None:
        super().__init__("missing_data")


class InvalidDataError(ValidationError):
    def __init__(self) -> None:
        super().__init__("invalid_data")


class InvalidParentError(ValidationError):
    """The requested parent is missing, hidden from the caller, or not a folder."""

    def __init__(self, code: str, parent_id: int) -> None:
        super().__init__(code, context={"parent_id": parent_id})


class ParentNotFoundError(InvalidParentError):
    def __init__(self, parent_id: int) -> None:
        super().__init__("parent_not_found", parent_id)


class ParentNotFolderError(InvalidParentError):
    def __init__(self, parent_id: int) -> None:
        super().__init__("parent_not_folder", parent_id)


class InvalidQueryError(ValidationError):
    def __init__(self, parameter: str) -> None:
        super().__init__(f"invalid_{parameter}", context={"parameter": parameter})


class FolderHasNoContentError(InvalidOperationError):
    def __init__(self, file_id: int) -> None:
        super().__init__("folder_has_no_content", context={"file_id": file_id})


class InvalidFieldError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(context={"fields": [field]})
