"""Saneamiento y validación del número de identidad.

English: Identity number sanitization and validation.
"""

from __future__ import annotations

import re
from typing import Optional

from .errors import InvalidIdentityError

MIN_IDENTITY_DIGITS = 6
INVALID_IDENTITY_MESSAGE = "Número de identidad inválido"

# Solo dígitos ASCII; \D dejaría pasar dígitos Unicode.
# ASCII digits only; \D would let Unicode digits through.
_NON_DIGITS = re.compile(r"[^0-9]")


def sanitize_identity(raw: Optional[str]) -> str:
    """Elimina todo carácter que no sea dígito.

    English: Strip every non-digit character.

    Ejemplo / Example:
        "0801-1990-12345" -> "0801199012345"
    """
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)


def validate_identity(raw: Optional[str]) -> str:
    """Sanea y valida; devuelve los dígitos o lanza InvalidIdentityError.

    English: Sanitize and validate; return the digits or raise
    InvalidIdentityError.
    """
    digits = sanitize_identity(raw)
    if len(digits) < MIN_IDENTITY_DIGITS:
        raise InvalidIdentityError(INVALID_IDENTITY_MESSAGE)
    return digits
