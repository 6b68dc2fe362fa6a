"""Ordered, case-insensitive, multi-valued header storage.

Implements the ``MultiValueMapping`` protocol. Names are matched by their
lower-cased form; the spelling seen first is kept for display and iteration.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from tidings.errors import InvalidArgumentError, ReadOnlyHeadersError


class HeaderStore:
    """Ordered mapping of header name to an ordered list of string values.

    Lookups ignore case. The first spelling stored for a name wins: later
    ``set``/``add``/``put`` calls with a different casing keep it.

    ``get`` returns a copy of all values for a name.
    ``get_first`` returns the first value.

    Build a frozen copy with :meth:`read_only`. Frozen stores hold tuples,
    reject every mutation with ``ReadOnlyHeadersError``, and are hashable.
    """

    __slots__ = ("_names", "_read_only", "_values")

    def __init__(
        self,
        initial: HeaderStore
        | Mapping[str, str | Sequence[str]]
        | Iterable[tuple[str, str]]
        | None = None,
    ) -> None:
        self._names: dict[str, str] = {}
        self._values: dict[str, list[str]] = {}
        self._read_only = False
        if initial is None:
            return
        if isinstance(initial, HeaderStore):
            self.put_all(initial)
        elif isinstance(initial, Mapping):
            for name, value in initial.items():
                if isinstance(value, str):
                    self.set(name, value)
                else:
                    self.put(name, value)
        else:
            for name, value in initial:
                self.add(name, value)

    @classmethod
    def read_only(cls, source: HeaderStore) -> HeaderStore:
        """Return a frozen deep copy of *source*.

        Later changes to *source* are not visible through the copy.
        """
        store = cls()
        for name, values in source.items():
            folded = name.lower()
            store._names[folded] = str(name)
            store._values[folded] = tuple(values)  # type: ignore[assignment]
        store._read_only = True
        return store

    @classmethod
    def from_raw(cls, raw: Iterable[tuple[bytes, bytes]]) -> HeaderStore:
        """Build a store from latin-1 byte pairs, e.g. an ASGI ``scope["headers"]``."""
        store = cls()
        for name, value in raw:
            store.add(name.decode("latin-1"), value.decode("latin-1"))
        return store

    # -- Lookup --

    def get(self, name: str) -> list[str] | None:
        """Return all values for *name*, or ``None`` if missing."""
        values = self._values.get(name.lower())
        if values is None:
            return None
        return list(values)

    def get_first(self, name: str) -> str | None:
        """Return the first value for *name*, or ``None`` if missing or empty."""
        values = self._values.get(name.lower())
        if values:
            return values[0]
        return None

    def contains_key(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return name.lower() in self._values

    def contains_value(self, values: Sequence[str]) -> bool:
        """True when some header holds exactly *values*, in order."""
        wanted = tuple(values)
        return any(tuple(stored) == wanted for stored in self._values.values())

    def is_empty(self) -> bool:
        return not self._values

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    # -- Views (snapshots at call time) --

    def keys(self) -> list[str]:
        return list(self._names.values())

    def values(self) -> list[list[str]]:
        return [list(values) for values in self._values.values()]

    def items(self) -> list[tuple[str, list[str]]]:
        return [(self._names[folded], list(values)) for folded, values in self._values.items()]

    def to_single_value_map(self) -> dict[str, str]:
        """Collapse to name -> first value. Names holding no values are skipped."""
        return {
            self._names[folded]: values[0] for folded, values in self._values.items() if values
        }

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """All values as latin-1 byte pairs, one pair per value."""
        return tuple(
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, values in self.items()
            for value in values
        )

    # -- Mutation --

    def add(self, name: str, value: str) -> None:
        """Append *value* to the values for *name*, creating the entry if needed."""
        self._ensure_writable()
        folded = name.lower()
        values = self._values.get(folded)
        if values is None:
            self._names[folded] = str(name)
            self._values[folded] = [value]
        else:
            values.append(value)

    def set(self, name: str, value: str) -> None:
        """Replace all values for *name* with the single *value*."""
        self.put(name, [value])

    def set_all(self, values: Mapping[str, str]) -> None:
        """``set`` every name-value pair in *values*."""
        for name, value in values.items():
            self.set(name, value)

    def put(self, name: str, values: Sequence[str]) -> list[str] | None:
        """Replace the values for *name*; return the previous values, if any."""
        self._ensure_writable()
        if isinstance(values, str):
            msg = f"Values for {name!r} must be a sequence of strings, not a string"
            raise InvalidArgumentError(msg)
        folded = name.lower()
        previous = self._values.get(folded)
        self._names.setdefault(folded, str(name))
        self._values[folded] = list(values)
        return None if previous is None else list(previous)

    def put_all(self, other: HeaderStore | Mapping[str, Sequence[str]]) -> None:
        for name, values in other.items():
            self.put(name, values)

    def remove(self, name: str) -> list[str] | None:
        """Drop *name*; return its values, or ``None`` if it was missing."""
        self._ensure_writable()
        folded = name.lower()
        self._names.pop(folded, None)
        previous = self._values.pop(folded, None)
        return None if previous is None else list(previous)

    def clear(self) -> None:
        self._ensure_writable()
        self._names.clear()
        self._values.clear()

    def copy(self) -> HeaderStore:
        """Return a mutable deep copy, even of a read-only store."""
        return HeaderStore(self)

    # -- Dunder protocol --

    def __contains__(self, name: object) -> bool:
        return self.contains_key(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderStore):
            return NotImplemented
        return self._content() == other._content()

    def __hash__(self) -> int:
        if not self._read_only:
            msg = f"unhashable type: {type(self).__name__!r} (use HeaderStore.read_only)"
            raise TypeError(msg)
        return hash(frozenset(self._content().items()))

    def __repr__(self) -> str:
        items = ", ".join(f"{name!r}: {values!r}" for name, values in self.items())
        return f"{type(self).__name__}({{{items}}})"

    # -- Helpers --

    def _content(self) -> dict[str, tuple[str, ...]]:
        return {folded: tuple(values) for folded, values in self._values.items()}

    def _ensure_writable(self) -> None:
        if self._read_only:
            msg = "Header store is read-only"
            raise ReadOnlyHeadersError(msg)
