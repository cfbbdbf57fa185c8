"""Conversion between raw query strings and :class:`QueryMultiMap`.

Parsing keeps degenerate empty tokens (``a=1&&b=2`` gives an ``("", None)``
entry) while rendering drops every entry with an empty name, so
``render(parse("a=1&&b=2")) == "?a=1&b=2"``.
"""

import typing as _ty

from . import percent as _percent
from .multimap import Pair, QueryLike, QueryMultiMap


class QueryOptions(_ty.NamedTuple):
    separator: str = "&"
    encoding: str = "utf-8"
    case_sensitive: bool = True
    # False lets malformed escapes through as literal text
    strict: bool = True


DEFAULT_OPTIONS = QueryOptions()


def parse_pair(pair: str, options: QueryOptions = DEFAULT_OPTIONS) -> Pair:
    name, sep, value = pair.partition("=")
    name = _percent.decode(name, options.encoding, options.strict)
    if not sep:
        return name, None
    return name, _percent.decode(value, options.encoding, options.strict)


def parse(
    query: str | None, options: QueryOptions = DEFAULT_OPTIONS
) -> QueryMultiMap:
    if not query or query == "?":
        return QueryMultiMap()
    if query.startswith("?"):
        query = query[1:]
    return QueryMultiMap(
        parse_pair(token, options) for token in query.split(options.separator)
    )


def render(query: QueryLike | None, options: QueryOptions = DEFAULT_OPTIONS) -> str:
    if not query:
        return ""
    terms = []
    for name, value in QueryMultiMap(query):
        if not name:
            continue
        term = _percent.encode(name, options.encoding)
        if value is not None:
            term = f"{term}={_percent.encode(value, options.encoding)}"
        terms.append(term)
    if not terms:
        return ""
    return "?" + options.separator.join(terms)


def render_names(
    names: _ty.Iterable[str] | None, options: QueryOptions = DEFAULT_OPTIONS
) -> str:
    """Render *names* as bare flags, dropping repeats and empty names."""
    if names is None:
        return ""
    return render(
        ((name, None) for name in dict.fromkeys(names) if name), options
    )


def to_ordered_list(query: QueryMultiMap) -> list[Pair]:
    return query.items()


class Query(str):
    """A URI query component, without the leading ``?``."""

    OPTIONS = DEFAULT_OPTIONS

    def __new__(cls, query: str | QueryLike = ""):
        if query is None:
            query = ""
        elif isinstance(query, str):
            pass
        elif isinstance(query, bytes):
            query = query.decode(cls.OPTIONS.encoding)
        elif isinstance(query, (QueryMultiMap, _ty.Mapping, _ty.Iterable)):
            query = render(query, cls.OPTIONS)
        else:
            raise TypeError(
                f"query should be a str, mapping or pairs, not {type(query).__name__!r}"
            )
        return str.__new__(cls, query.removeprefix("?"))

    def decode(query) -> QueryMultiMap:
        return parse(str(query), query.OPTIONS)

    def to_dict(query):
        return query.decode().to_dict()

    def with_param(self, name: str, value: str | None):
        from .. import ops as _ops

        return type(self)(_ops.add_or_update_param(self, name, value, options=self.OPTIONS))

    def with_params(self, updates):
        from .. import ops as _ops

        return type(self)(_ops.add_or_update_params(self, updates, options=self.OPTIONS))

    def without_param(self, name: str):
        from .. import ops as _ops

        return type(self)(_ops.remove_param(self, name, options=self.OPTIONS))

    def without_params(self, names: _ty.Iterable[str]):
        from .. import ops as _ops

        return type(self)(_ops.remove_params(self, names, options=self.OPTIONS))
