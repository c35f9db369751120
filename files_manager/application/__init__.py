# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.access_gate import AccessGate
from .services.password_hashing import WerkzeugPasswordHasher

__all__ = [
    "AccessGate",
    "WerkzeugPasswordHasher",
]
