"""Query string operations on raw query strings.

Every function takes a raw query string (with or without the leading ``?``)
and returns a new one, either ``""`` or starting with ``?``. Splicing the
result back into a full URI is left to the caller, see
:meth:`urilib_next.uri.Uri.with_query`.
"""

import logging as _logging
import typing as _ty

from .errors import InvalidArgument
from .uri.merge import QueryUpdates, iter_updates, merge as _merge
from .uri.multimap import QueryMultiMap
from .uri.query import DEFAULT_OPTIONS, QueryOptions, parse, render

_log = _logging.getLogger(__name__)


def _update(query: str | None, updates: list, options: QueryOptions):
    merged = _merge(
        parse(query, options), updates, case_sensitive=options.case_sensitive
    )
    return render(merged, options)


def add_or_update_param(
    query: str | None,
    name: str,
    value: str | None,
    *,
    options: QueryOptions = DEFAULT_OPTIONS,
) -> str:
    """Set *name* to *value*, or remove it when *value* is ``None``."""
    if not name:
        raise InvalidArgument("name was None or empty")
    _log.debug("updating query param %r in %r", name, query)
    return _update(query, [(name, value)], options)


def add_or_update_params(
    query: str | None,
    updates: QueryUpdates,
    *,
    options: QueryOptions = DEFAULT_OPTIONS,
) -> str:
    updates_ = list(iter_updates(updates))
    for name, _ in updates_:
        if not name:
            raise InvalidArgument("update names should not be None or empty")
    _log.debug("updating %d query params in %r", len(updates_), query)
    return _update(query, updates_, options)


def remove_param(
    query: str | None, name: str | None, *, options: QueryOptions = DEFAULT_OPTIONS
) -> str:
    return remove_params(query, [name], options=options)


def remove_params(
    query: str | None,
    names: _ty.Iterable[str | None] | None,
    *,
    options: QueryOptions = DEFAULT_OPTIONS,
) -> str:
    """Remove every parameter called by one of *names*.

    ``None`` and empty names are skipped.
    """
    updates = [(name, None) for name in names or () if name]
    _log.debug("removing query params %r from %r", [n for n, _ in updates], query)
    return _update(query, updates, options)


def query_to_map(
    query: str | None, *, options: QueryOptions = DEFAULT_OPTIONS
) -> QueryMultiMap:
    return parse(query, options)
