import dataclasses as _dc
import typing as _ty

from .uri.multimap import Pair
from .uri.query import DEFAULT_OPTIONS, QueryOptions, render


def _fields(obj) -> _ty.Iterable[tuple[str, _ty.Any]]:
    if _dc.is_dataclass(obj) and not isinstance(obj, type):
        return ((f.name, getattr(obj, f.name)) for f in _dc.fields(obj))
    if hasattr(obj, "_asdict"):
        return obj._asdict().items()
    if isinstance(obj, _ty.Mapping):
        return obj.items()
    try:
        return vars(obj).items()
    except TypeError:
        raise TypeError(
            f"cannot serialize {type(obj).__name__!r} to a query string"
        ) from None


def to_updates(obj) -> list[Pair]:
    """Public, non-``None`` attributes of *obj* as query pairs."""
    if obj is None:
        raise TypeError("cannot serialize None to a query string")
    return [
        (name, value if isinstance(value, str) else str(value))
        for name, value in _fields(obj)
        if value is not None and not name.startswith("_")
    ]


def serialize(obj, *, options: QueryOptions = DEFAULT_OPTIONS) -> str:
    return render(to_updates(obj), options)
