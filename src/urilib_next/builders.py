"""Immutable builders for URI paths and slugs.

Each step returns a new builder, so a partially configured builder can be
shared and extended in several directions::

    base = UriPathBuilder().add_path("/api")
    users = base.add_path("users").build()   # "/api/users"
    posts = base.add_path("posts").build()   # "/api/posts"
"""

import datetime as _dt
import functools as _func
import random as _random
import typing as _ty

import uritools as _uritools

from . import utils as _utils
from .errors import InvalidArgument
from .uri.merge import merge as _merge
from .uri.multimap import QueryMultiMap
from .uri.query import DEFAULT_OPTIONS, QueryOptions, render

_SAFE_PATH = _uritools.SUB_DELIMS + ":@/%"

_system_random = _random.SystemRandom()


def _join_path(current: str, path: str):
    return f"{current.rstrip('/')}/{path.lstrip('/')}"


class UriPathBuilder(_ty.NamedTuple):
    paths: tuple[str, ...] = ()
    params: QueryMultiMap = QueryMultiMap()
    options: QueryOptions = DEFAULT_OPTIONS

    def add_path(self, path: str):
        return self._replace(paths=self.paths + (path,))

    def add_or_modify_query_param(self, name: str, value: str | None):
        if not name:
            raise InvalidArgument("name was None or empty")
        return self._replace(
            params=_merge(
                self.params,
                [(name, value)],
                case_sensitive=self.options.case_sensitive,
            )
        )

    def build(self) -> str:
        path = _func.reduce(_join_path, (p for p in self.paths if p), "/")
        path = _uritools.uriencode(path, _SAFE_PATH).decode("ascii")
        return path + render(self.params, self.options)


class UriSlugBuilder(_ty.NamedTuple):
    """Builds URL-safe, human readable identifiers such as
    ``my-first-blog-post-MjAyNDAx``."""

    text: str | None = ""
    max_length: int | None = None
    space_char: str = "-"
    datetime_suffix: str = ""
    random_suffix: str = ""

    def with_text(self, text: str | None, max_length: int | None = None):
        return self._replace(text=text, max_length=max_length)

    def with_space_char(self, space_char: str):
        if not space_char:
            raise InvalidArgument("space_char was None or empty")
        return self._replace(space_char=space_char)

    def with_random_suffix(self, length: int, rng: _random.Random | None = None):
        if length < 1:
            return self
        rng = rng if rng is not None else _system_random
        return self._replace(random_suffix=_utils.urlsafe_b64(rng.randbytes(length)))

    def with_datetime_suffix(self, when: _dt.datetime, fmt: str = "%Y%m%d%I%M%S"):
        return self._replace(
            datetime_suffix=_utils.urlsafe_b64(when.strftime(fmt).encode("utf-8"))
        )

    def build(self) -> str:
        slug = (
            _utils.remove_multispace((self.text or "").strip())
            .lower()
            .replace(" ", self.space_char)
        )
        if self.max_length is not None:
            slug = _utils.safe_substring(slug, 0, self.max_length)
        suffix = self.datetime_suffix or self.random_suffix
        if suffix:
            return f"{slug}-{suffix}"
        return slug
