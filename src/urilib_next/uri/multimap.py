import typing as _ty

Pair: _ty.TypeAlias = tuple[str, str | None]

QueryLike: _ty.TypeAlias = (
    "QueryMultiMap"
    | _ty.Iterable[tuple[str, _ty.Any]]
    | _ty.Mapping[str, _ty.Any]
)


def _same_name(name: str, other: str, case_sensitive: bool = True):
    if case_sensitive:
        return name == other
    return name.casefold() == other.casefold()


def _as_value(value) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode()
    return str(value)


class QueryMultiMap:
    """Immutable ordered collection of ``(name, value)`` pairs.

    A name may appear more than once and keeps the position it was inserted
    at. A value of ``None`` stands for a bare flag (``?flag``), which is
    not the same thing as an empty value (``?flag=``). Names and values are
    held decoded.
    """

    __slots__ = ("_items", "_index")

    def __init__(self, items: QueryLike = ()):
        if isinstance(items, QueryMultiMap):
            self._items = items._items
            self._index = items._index
            return
        if isinstance(items, _ty.Mapping):
            items = self._expand(items)
        pairs: list[Pair] = []
        index: dict[str, list[int]] = {}
        for name, value in items:
            index.setdefault(name, []).append(len(pairs))
            pairs.append((name, _as_value(value)))
        self._items: tuple[Pair, ...] = tuple(pairs)
        self._index = {name: tuple(pos) for name, pos in index.items()}

    @staticmethod
    def _expand(mapping: _ty.Mapping[str, _ty.Any]):
        for name, value in mapping.items():
            if value is None or isinstance(value, (str, bytes)):
                yield name, value
            elif isinstance(value, _ty.Iterable):
                for v in value:
                    yield name, v
            else:
                yield name, value

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> _ty.Iterator[Pair]:
        return iter(self._items)

    @_ty.overload
    def __getitem__(self, idx: slice) -> tuple[Pair, ...]: ...
    @_ty.overload
    def __getitem__(self, idx: int) -> Pair: ...
    def __getitem__(self, idx: int | slice) -> Pair | tuple[Pair, ...]:
        return self._items[idx]

    def __contains__(self, name: object):
        return name in self._index

    def __eq__(self, other: object):
        if isinstance(other, QueryMultiMap):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == tuple(tuple(pair) for pair in other)
        return NotImplemented

    def __hash__(self):
        return hash(self._items)

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, list(self._items))

    def positions(self, name: str, *, case_sensitive: bool = True) -> tuple[int, ...]:
        """Indexes of every entry called *name*, in order."""
        if case_sensitive:
            return self._index.get(name, ())
        return tuple(
            pos
            for pos, (other, _) in enumerate(self._items)
            if _same_name(name, other, False)
        )

    def has(self, name: str, *, case_sensitive: bool = True):
        return bool(self.positions(name, case_sensitive=case_sensitive))

    def getall(self, name: str, *, case_sensitive: bool = True) -> list[str | None]:
        return [
            self._items[pos][1]
            for pos in self.positions(name, case_sensitive=case_sensitive)
        ]

    def get(self, name: str, default=None, *, case_sensitive: bool = True):
        """Return the first value for *name*, or *default* if it is absent.

        A bare flag returns ``None`` even when a default is given.
        """
        positions = self.positions(name, case_sensitive=case_sensitive)
        if not positions:
            return default
        return self._items[positions[0]][1]

    def names(self) -> list[str]:
        return list(self._index)

    def items(self) -> list[Pair]:
        return list(self._items)

    def to_dict(self) -> dict[str, list[str | None]]:
        query_: dict[str, list[str | None]] = {}
        for k, v in self._items:
            query_.setdefault(k, []).append(v)
        return query_
