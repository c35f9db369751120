# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential extraction from incoming requests."""

from __future__ import annotations

import base64
import binascii

from flask import request

from files_manager.domain.users.exceptions import MissingCredentialsError
from files_manager.shared.errors.base import UnauthenticatedError

TOKEN_HEADER = "X-Token"


def request_token() -> str | None:
    """Return the session token sent with the current request, if any.

    ``X-Token`` wins; an ``Authorization: Bearer`` header is the fallback.
    """

    token = request.headers.get(TOKEN_HEADER, "").strip()
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def basic_credentials() -> tuple[str, str]:
    scheme, _, encoded = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        raise UnauthenticatedError()
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise UnauthenticatedError() from exc
    email, sep, password = decoded.partition(":")
    if not sep:
        raise UnauthenticatedError()
    if not email or not password:
        raise MissingCredentialsError()
    return email, password


__all__ = ["TOKEN_HEADER", "basic_credentials", "request_token"]
