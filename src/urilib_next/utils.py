import base64 as _base64
import typing as _ty

MIN_PORT = 0
MAX_PORT = 65535

_DOUBLE_SPACE = "  "


def is_port_valid(port: int):
    return MIN_PORT <= port <= MAX_PORT


def remove_multispace(text: str):
    while _DOUBLE_SPACE in text:
        text = text.replace(_DOUBLE_SPACE, " ")
    return text


def safe_substring(text: _ty.Optional[str], start: int, length: int) -> str:
    """Slice that never raises: negative starts clamp to 0, lengths below 1
    give an empty string."""
    if not text or length < 1:
        return ""
    start = max(start, 0)
    return text[start : start + length]


def urlsafe_b64(data: bytes):
    return _base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
