import os
import typing as _ty
import uritools

from .. import utils as _utils
from ..errors import InvalidArgument
from . import percent as _percent
from .multimap import QueryMultiMap
from .query import Query, QueryOptions
from .source import Source, _NOSOURCE

from .. import ops as _ops

UriLike: _ty.TypeAlias = "str | bytes | Uri | os.PathLike"

# "%" is kept so already-encoded text is not encoded twice; a "%" that
# does not start an escape is rewritten to "%25" first
_SAFE_PATH = uritools.SUB_DELIMS + ":@/%"
_SAFE_QUERY = uritools.SUB_DELIMS + ":@/?%"
_SAFE_FRAGMENT = _SAFE_QUERY


def _encode(text: str, safe: str) -> str:
    text = _percent._MALFORMED.sub("%25", text)
    return uritools.uriencode(text, safe).decode("ascii")


class Uri:
    """Immutable URI reference.

    Every ``with_*`` method returns a new instance with one component
    replaced; the receiver is never modified. Components are swapped in
    their raw (encoded) form, so an encoded query string survives a rebuild
    unchanged.
    """

    __slots__ = ("_parts", "_uri")

    def __init__(self, uri: UriLike = ""):
        if isinstance(uri, Uri):
            parts = uri._parts
        elif isinstance(uri, str):
            parts = uritools.urisplit(uri)
        elif isinstance(uri, bytes):
            parts = uritools.urisplit(uri.decode())
        elif hasattr(uri, "as_uri"):
            path = uri.as_uri
            if callable(path):
                path = path()
            parts = uritools.urisplit(str(path))
        else:
            path = None
            try:
                path = os.fspath(uri)
            except (TypeError, NotImplementedError):
                pass
            if not isinstance(path, str):
                raise TypeError(
                    "argument should be a str, a Uri or an os.PathLike "
                    "object where __fspath__ returns a str, "
                    f"not {type(uri).__name__!r}"
                )
            parts = uritools.urisplit(f"file:{_encode(path, _SAFE_PATH)}")
        self._parts: uritools.SplitResult = parts
        self._uri: str | None = None

    def _from_parsed_parts(self, **components) -> _ty.Self:
        cls = type(self)
        uri = cls.__new__(cls)
        uri._parts = self._parts._replace(**components)
        uri._uri = None
        return uri

    @property
    def parts(self):
        return (self.source, self.path, self.query, self.fragment)

    @property
    def source(self) -> Source:
        parts = self._parts
        if parts.scheme is None and parts.authority is None:
            return _NOSOURCE
        return Source(
            parts.getscheme(),
            parts.getuserinfo(),
            parts.gethost(),
            parts.getport(),
        )

    @property
    def path(self) -> str:
        return self._parts.getpath()

    @property
    def query(self) -> Query:
        return Query(self._parts.query or "")

    @property
    def fragment(self) -> str:
        return self._parts.getfragment() or ""

    def as_uri(self, /, sanitize=False):
        """Return the URI as a string; *sanitize* drops any password."""
        if sanitize:
            return self._sanitized().geturi()
        if self._uri is None:
            self._uri = self._parts.geturi()
        return self._uri

    def _sanitized(self):
        parts = self._parts
        userinfo = parts.userinfo
        if not userinfo or ":" not in userinfo:
            return parts
        _, _, hostinfo = parts.authority.rpartition("@")
        user = userinfo.split(":", maxsplit=1)[0]
        return parts._replace(authority=f"{user}@{hostinfo}")

    def __str__(self):
        return self.as_uri()

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.as_uri(sanitize=True))

    def __eq__(self, other: object):
        if isinstance(other, Uri):
            return self.as_uri() == other.as_uri()
        if isinstance(other, str):
            return self.as_uri() == other
        return NotImplemented

    def __hash__(self):
        return hash(self.as_uri())

    def with_source(self, source: Source):
        authority = source.authority()
        path = self._parts.path
        if authority is not None and path and not path.startswith("/"):
            path = "/" + path
        return self._from_parsed_parts(
            scheme=source.scheme or None, authority=authority, path=path
        )

    def with_scheme(self, scheme: str | None):
        if scheme:
            try:
                scheme = uritools.urisplit(uritools.uricompose(scheme=scheme)).scheme
            except ValueError as e:
                raise InvalidArgument(f"invalid scheme {scheme!r}") from e
        return self._from_parsed_parts(scheme=scheme or None)

    def with_port(self, port: int | None):
        if port is not None and not _utils.is_port_valid(port):
            raise InvalidArgument(
                f"port should be between {_utils.MIN_PORT} and {_utils.MAX_PORT}, not {port}"
            )
        parts = self._parts
        source = Source(
            parts.getscheme(), parts.getuserinfo(), parts.gethost(), port
        )
        return self.with_source(source)

    def with_path(self, path: str | None):
        path = _encode(path or "", _SAFE_PATH)
        if self._parts.authority is not None and not path.startswith("/"):
            path = "/" + path
        return self._from_parsed_parts(path=path)

    def with_query(self, query: "str | Query | QueryMultiMap | _ty.Mapping | None"):
        if query is not None:
            if not isinstance(query, str):
                query = Query(query)
            query = str(query).removeprefix("?")
        return self._from_parsed_parts(
            query=_encode(query, _SAFE_QUERY) if query else None
        )

    def with_fragment(self, fragment: str | None):
        if fragment is not None:
            fragment = fragment.removeprefix("#")
        return self._from_parsed_parts(
            fragment=_encode(fragment, _SAFE_FRAGMENT) if fragment else None
        )

    def append_path(self, path: str | None):
        if not path:
            return self
        path = path.lstrip("/")
        current = self._parts.path
        if not current and self._parts.authority is not None:
            current = "/"
        if current.endswith("/"):
            return self.with_path(current + path)
        return self.with_path(f"{current}/{path}")

    def has_path(self):
        return self._parts.path not in ("", "/")

    def has_query(self):
        return bool(self._parts.query)

    def has_fragment(self):
        return bool(self._parts.fragment)

    def remove_query(self):
        return self.with_query(None)

    def remove_fragment(self):
        return self.with_fragment(None)

    def _options(self, options: QueryOptions | None):
        return options if options is not None else Query.OPTIONS

    def add_or_update_query_param(
        self, name: str, value: str | None, *, options: QueryOptions = None
    ):
        return self.with_query(
            _ops.add_or_update_param(
                self._parts.query, name, value, options=self._options(options)
            )
        )

    def add_or_update_query_params(self, updates, *, options: QueryOptions = None):
        return self.with_query(
            _ops.add_or_update_params(
                self._parts.query, updates, options=self._options(options)
            )
        )

    def remove_query_param(self, name: str | None, *, options: QueryOptions = None):
        return self.with_query(
            _ops.remove_param(self._parts.query, name, options=self._options(options))
        )

    def remove_query_params(
        self, names: _ty.Iterable[str | None] | None, *, options: QueryOptions = None
    ):
        return self.with_query(
            _ops.remove_params(
                self._parts.query, names, options=self._options(options)
            )
        )

    def query_to_map(self, *, options: QueryOptions = None) -> QueryMultiMap:
        return _ops.query_to_map(self._parts.query, options=self._options(options))
