"""Template resolution: splice builder groups into ``/**name**/`` markers.

Resolution algorithm
--------------------
1. If the cached result was stamped with the builder's current ``seq``,
   return it unchanged.
2. Seed a fresh :class:`~clauseql.params.Parameters` sink with the
   template's own initial parameters.
3. For every group the builder knows (user groups in creation order, then
   the WHERE group), replace **all** occurrences of ``/**name**/`` with the
   group's rendered SQL and merge its parameters into the sink.  Groups are
   rendered whether or not their marker occurs in the text.  A WHERE group
   that was never created renders as the empty string.
4. Apply the ``unresolved_markers`` policy to any ``/** ... **/`` left over.
5. Cache the result, stamped with the builder's ``seq``.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from clauseql.errors import UnresolvedMarkerError
from clauseql.options import TemplateOptions
from clauseql.params import Parameters

if TYPE_CHECKING:
    from clauseql.builder import SqlBuilder

logger = logging.getLogger(__name__)

#: Any ``/** ... **/`` marker; non-greedy and allowed to span lines.
MARKER_RE = re.compile(r"/\*\*(.+?)\*\*/", re.DOTALL)


def marker(name: str) -> str:
    """Return the marker text for group ``name``."""
    return f"/**{name}**/"


@dataclass(frozen=True)
class ResolvedSQL:
    """The output of one template resolution.

    Attributes:
        sql: SQL text with every marker substituted or handled.
        params: All parameters merged in resolution order.
        seq: Builder ``seq`` this result was computed at.
    """

    sql: str
    params: Parameters
    seq: int

    def merge_runtime_params(self, runtime: dict[str, Any]) -> dict[str, Any]:
        """Return a merged param dict ready for query execution.

        Args:
            runtime: Values supplied at execution time; they override
                resolved params of the same name.
        """
        return {**self.params.to_dict(), **runtime}


class Template:
    """A template string bound to a shared :class:`SqlBuilder`.

    The template reads the builder's state at resolution time, never at
    creation time, and caches the result until the builder changes.

    Args:
        builder: The builder whose groups fill the markers.
        sql: Template text.
        params: Initial parameters, merged before any group's.
        options: Resolution options; defaults to ``TemplateOptions()``.
    """

    def __init__(
        self,
        builder: SqlBuilder,
        sql: str,
        params: Parameters | None = None,
        options: TemplateOptions | None = None,
    ) -> None:
        self._builder = builder
        self._sql = sql
        self._params = params
        self._options = options or TemplateOptions()
        self._cache: ResolvedSQL | None = None

    @property
    def builder(self) -> SqlBuilder:
        return self._builder

    @property
    def raw_sql(self) -> str:
        """The unresolved template text."""
        return self._sql

    @property
    def options(self) -> TemplateOptions:
        return self._options

    @property
    def sql(self) -> str:
        """Resolved SQL text."""
        return self.resolve().sql

    @property
    def parameters(self) -> Parameters:
        """Resolved parameter bag."""
        return self.resolve().params

    def resolve(self) -> ResolvedSQL:
        """Resolve the template, reusing the cache if the builder is unchanged.

        Raises:
            UnresolvedMarkerError: If markers remain and the options ask for
                ``unresolved_markers="error"``.
        """
        seq = self._builder.seq
        if self._cache is not None and self._cache.seq == seq:
            logger.debug("Reusing template resolution at builder seq %d", seq)
            return self._cache

        logger.debug("Resolving template at builder seq %d", seq)
        sink = Parameters(self._params)
        sql = self._sql
        for name, group in self._builder.iter_groups():
            rendered = "" if group is None else group.resolve(sink)
            sql = sql.replace(marker(name), rendered)

        sql = self._handle_leftovers(sql)
        self._cache = ResolvedSQL(sql=sql, params=sink.freeze(), seq=seq)
        return self._cache

    def _handle_leftovers(self, sql: str) -> str:
        policy = self._options.unresolved_markers
        if policy == "keep":
            return sql
        if policy == "error":
            leftovers = [m.strip() for m in MARKER_RE.findall(sql)]
            if leftovers:
                raise UnresolvedMarkerError(leftovers)
            return sql
        return MARKER_RE.sub("", sql)

    def __repr__(self) -> str:
        return f"Template({self._sql!r})"
