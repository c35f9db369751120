# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    kind: ClassVar[str] = "app_error"

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "kind": self.kind}
        # server-side failures never leak their context
        if self.context and self.status < HTTPStatus.INTERNAL_SERVER_ERROR:
            payload["context"] = dict(self.context)
        return payload


class ValidationError(AppError):
    kind = "validation_error"

    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            context=context,
        )


class UnauthenticatedError(AppError):
    kind = "unauthenticated"

    def __init__(self, code: str = "unauthorized") -> None:
        super().__init__(code=code, status=HTTPStatus.UNAUTHORIZED)


class NotFoundOrForbiddenError(AppError):
    """Raised for missing records and for records the caller may not see.

    Both cases share one error so that responses never reveal whether a
    record exists.
    """

    kind = "not_found"

    def __init__(self, code: str = "not_found") -> None:
        super().__init__(code=code, status=HTTPStatus.NOT_FOUND)


class InvalidOperationError(AppError):
    kind = "invalid_operation"

    def __init__(
        self,
        code: str = "invalid_operation",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, status=HTTPStatus.BAD_REQUEST, context=context)


class InfrastructureError(AppError):
    kind = "unexpected_failure"

    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


__all__ = [
    "AppError",
    "InfrastructureError",
    "InvalidOperationError",
    "NotFoundOrForbiddenError",
    "UnauthenticatedError",
    "ValidationError",
]
