"""Parameter bag used to accumulate bound values.

``Parameters`` is an insertion-ordered mapping from parameter name to value.
Its only merge operation, :meth:`Parameters.add_dynamic_params`, overwrites
on name collision, so the last source merged wins.

Accepted sources::

    bag = Parameters({"min_age": 18})
    bag.add_dynamic_params({"status": "active"})      # any Mapping
    bag.add_dynamic_params(UserFilter(status="x"))    # pydantic model
    bag.add_dynamic_params(Paging(limit=10))          # dataclass instance
    bag.add_dynamic_params(None)                      # no-op
"""
from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from pydantic import BaseModel

from clauseql.errors import ParameterError

#: Anything :meth:`Parameters.add_dynamic_params` accepts.
ParamSource = Any


def _items_of(source: Any) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source
    if isinstance(source, BaseModel):
        return source.model_dump()
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return {f.name: getattr(source, f.name) for f in dataclasses.fields(source)}
    raise ParameterError(
        f"Cannot bind parameters from {type(source).__name__!r}; expected a "
        "mapping, a pydantic model or a dataclass instance.",
        source_type=type(source).__name__,
    )


class Parameters(MutableMapping[str, Any]):
    """Insertion-ordered parameter bag with merge-overwrite semantics.

    A bag becomes read-only after :meth:`freeze`; the builder freezes the
    bags it stores on fragments and the bags it caches on templates.

    Args:
        source: Optional initial source (see module docstring).
        **kwargs: Extra named values, merged after ``source``.
    """

    def __init__(self, source: ParamSource = None, **kwargs: Any) -> None:
        self._values: dict[str, Any] = {}
        self._frozen = False
        self.add_dynamic_params(source)
        if kwargs:
            self.add_dynamic_params(kwargs)

    def add_dynamic_params(self, source: ParamSource) -> Parameters:
        """Merge ``source`` into this bag; later names overwrite earlier ones.

        Returns:
            ``self``, for chaining.

        Raises:
            ParameterError: If the bag is frozen, or ``source`` has an
                unsupported type or a non-string key.
        """
        self._check_writable()
        if source is None:
            return self
        for name, value in _items_of(source).items():
            if not isinstance(name, str):
                raise ParameterError(
                    f"Parameter names must be strings, got {name!r}.",
                    source_type=type(source).__name__,
                )
            self._values[name] = value
        return self

    def freeze(self) -> Parameters:
        """Make this bag read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise ParameterError("Parameters are read-only once bound.")

    def to_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` copy, suitable for DB-API ``execute``."""
        return dict(self._values)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._check_writable()
        self._values[name] = value

    def __delitem__(self, name: str) -> None:
        self._check_writable()
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Parameters({self._values!r})"
