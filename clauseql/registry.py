"""Clause-kind registry.

Every convenience method on :class:`~clauseql.builder.SqlBuilder` is a
lookup in this registry followed by one
:meth:`~clauseql.builder.SqlBuilder.add_clause` call.  New clause kinds can
be registered without touching the builder::

    from clauseql.registry import ClauseRegistry, ClauseSpec

    ClauseRegistry.register("limit", ClauseSpec("limit", "", "LIMIT ", "\\n"))

    builder.add("limit", ":n", n=10)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from clauseql.errors import ClauseConflictError, UnknownClauseError

#: Name of the WHERE group.  Fragments added here carry their own joiner.
WHERE = "where"

#: Pseudo-group that carries parameters only.
PARAMETERS = "--parameters"

AND = " AND "
OR = " OR "


@dataclass(frozen=True)
class ClauseSpec:
    """Group name and joiner/prefix/postfix for one clause kind.

    ``prefix`` and ``postfix`` only take effect when the call creates the
    group; they are ignored for the WHERE group.
    """

    group: str
    joiner: str
    prefix: str = ""
    postfix: str = ""


_BUILTIN_CLAUSES: dict[str, ClauseSpec] = {
    "select": ClauseSpec("select", " , ", "", "\n"),
    "where": ClauseSpec(WHERE, AND),
    "or_where": ClauseSpec(WHERE, OR),
    "order_by": ClauseSpec("orderby", " , ", "ORDER BY ", "\n"),
    "group_by": ClauseSpec("groupby", " , ", "\nGROUP BY ", "\n"),
    "having": ClauseSpec("having", "\nAND ", "HAVING ", "\n"),
    "set": ClauseSpec("set", " , ", "SET ", "\n"),
    "join": ClauseSpec("join", "\nJOIN ", "\nJOIN ", "\n"),
    "inner_join": ClauseSpec("innerjoin", "\nINNER JOIN ", "\nINNER JOIN ", "\n"),
    "left_join": ClauseSpec("leftjoin", "\nLEFT JOIN ", "\nLEFT JOIN ", "\n"),
    "right_join": ClauseSpec("rightjoin", "\nRIGHT JOIN ", "\nRIGHT JOIN ", "\n"),
    "intersect": ClauseSpec("intersect", "\nINTERSECT\n ", "\n ", "\n"),
    "parameters": ClauseSpec(PARAMETERS, ""),
}


class ClauseRegistry:
    """Registry mapping clause kind names to :class:`ClauseSpec`.

    The registry is process-wide: a kind registered here is available to
    every :class:`~clauseql.builder.SqlBuilder`.  Built-in kinds are fixed.
    """

    _clauses: ClassVar[dict[str, ClauseSpec]] = dict(_BUILTIN_CLAUSES)

    @classmethod
    def register(cls, name: str, spec: ClauseSpec) -> None:
        """Register (or replace) the spec for custom clause kind ``name``.

        Raises:
            ClauseConflictError: If ``name`` is a built-in clause kind.
        """
        if name in _BUILTIN_CLAUSES:
            raise ClauseConflictError(name)
        cls._clauses[name] = spec

    @classmethod
    def get(cls, name: str) -> ClauseSpec:
        """Return the spec registered for ``name``.

        Raises:
            UnknownClauseError: If no spec is registered for ``name``.
        """
        spec = cls._clauses.get(name)
        if spec is None:
            raise UnknownClauseError(name, cls.registered_clauses())
        return spec

    @classmethod
    def registered_clauses(cls) -> list[str]:
        """Return the sorted list of registered clause kinds."""
        return sorted(cls._clauses)

