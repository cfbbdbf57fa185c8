"""Form-style percent-encoding of single query tokens.

Names and values are encoded one at a time, so every reserved character
(``&``, ``=``, ``+``, ``/`` ...) is escaped and a space becomes ``+``.
"""

import logging as _logging
import re as _re

import uritools as _uritools

from ..errors import DecodeError

_log = _logging.getLogger(__name__)

_MALFORMED = _re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode(token: str, encoding: str = "utf-8") -> str:
    encoded = _uritools.uriencode(token, "", encoding).decode("ascii")
    # a literal "%20" in the input was escaped to "%2520" above
    return encoded.replace("%20", "+")


def decode(token: str, encoding: str = "utf-8", strict: bool = True) -> str:
    if not token:
        return token
    token_ = token.replace("+", " ")
    malformed = _MALFORMED.search(token_)
    if malformed:
        if strict:
            raise DecodeError(
                token, malformed.start(), "malformed percent-encoded sequence"
            )
        _log.debug("passing through malformed escape in %r", token)
    try:
        return _uritools.uridecode(
            token_, encoding, "strict" if strict else "replace"
        )
    except UnicodeError as e:
        raise DecodeError(
            token, getattr(e, "start", 0), f"invalid {encoding} byte sequence"
        ) from e
