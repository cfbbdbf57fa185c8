import typing as _ty

from ..errors import InvalidArgument
from .multimap import Pair, QueryMultiMap, _as_value, _same_name

QueryUpdates: _ty.TypeAlias = (
    _ty.Mapping[str, _ty.Any] | _ty.Iterable[tuple[str, _ty.Any]]
)


def iter_updates(updates: QueryUpdates) -> _ty.Iterator[Pair]:
    if updates is None:
        raise InvalidArgument("updates should not be None")
    if isinstance(updates, _ty.Mapping):
        updates = updates.items()
    for name, value in updates:
        if isinstance(value, _ty.Iterable) and not isinstance(value, (str, bytes)):
            raise TypeError(
                f"update value for {name!r} should be a single value, "
                f"not {type(value).__name__!r}"
            )
        yield name, _as_value(value)


def merge(
    existing: QueryMultiMap,
    updates: QueryUpdates,
    *,
    case_sensitive: bool = True,
) -> QueryMultiMap:
    """Layer *updates* onto *existing* and return the result.

    A ``None`` value removes every entry with that name. Any other value
    replaces all entries with that name by a single entry, kept at the
    position of the first one, or appended when the name is new.
    """
    items = list(existing)
    for name, value in iter_updates(updates):
        matched = [
            pos
            for pos, (other, _) in enumerate(items)
            if _same_name(name, other, case_sensitive)
        ]
        if value is None:
            if matched:
                dropped = set(matched)
                items = [item for pos, item in enumerate(items) if pos not in dropped]
            continue
        if not matched:
            items.append((name, value))
            continue
        first, dropped = matched[0], set(matched[1:])
        items = [item for pos, item in enumerate(items) if pos not in dropped]
        # only later entries were dropped, so first still points at the slot
        items[first] = (name, value)
    return QueryMultiMap(items)
