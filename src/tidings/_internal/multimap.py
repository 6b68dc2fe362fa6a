"""MultiValueMapping protocol: shared interface for HeaderStore and HttpHeaders.

A structural protocol so utilities can accept either the raw store or the
typed facade without coupling to the concrete type.
"""

from collections.abc import Iterator, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A string mapping where each name holds an ordered list of values.

    ``get_first`` returns the first value for a name.
    ``get`` returns all values for a name, or ``None`` when it is missing.

    Defined with explicit dunder methods because Protocols cannot inherit
    from non-Protocol ABCs like ``Mapping``.
    """

    def __contains__(self, name: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get(self, name: str) -> Sequence[str] | None: ...
    def get_first(self, name: str) -> str | None: ...
    def add(self, name: str, value: str) -> None: ...
    def set(self, name: str, value: str) -> None: ...
    def remove(self, name: str) -> Sequence[str] | None: ...
