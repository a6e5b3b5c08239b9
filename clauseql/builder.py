"""Incremental SQL clause builder.

``SqlBuilder`` accumulates SQL fragments into named groups.  Templates
created from it (:meth:`SqlBuilder.add_template`) splice each group into
its ``/**name**/`` marker at resolution time::

    builder = SqlBuilder()
    template = builder.add_template(
        "SELECT /**select**/ FROM users /**where**/ /**orderby**/"
    )
    builder.select("id").select("name")
    if min_age is not None:
        builder.where("age >= :min_age", min_age=min_age)
    builder.order_by("name")

    cursor.execute(template.sql, template.parameters.to_dict())

Shared state
------------
A builder is shared by reference: every template bound to it sees its
*current* state, and any append invalidates the cache of every such
template.  ``seq`` is the single version counter for the whole builder; it
goes up by exactly one per append, whatever the group.

The builder does no locking.  Callers sharing one across threads must
serialise appends and resolutions themselves.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from clauseql.clauses import ClauseGroup, Fragment, where_group
from clauseql.options import TemplateOptions
from clauseql.params import Parameters, ParamSource
from clauseql.registry import WHERE, ClauseRegistry
from clauseql.template import Template

logger = logging.getLogger(__name__)


def _bind(params: ParamSource, kwargs: dict[str, Any]) -> Parameters | None:
    if params is None and not kwargs:
        return None
    return Parameters(params, **kwargs).freeze()


class SqlBuilder:
    """Accumulates named groups of SQL fragments and their parameters."""

    def __init__(self) -> None:
        self._groups: dict[str, ClauseGroup] = {}
        self._where: ClauseGroup | None = None
        self._seq = 0

    @property
    def seq(self) -> int:
        """Modification counter; incremented once per append."""
        return self._seq

    def iter_groups(self) -> Iterator[tuple[str, ClauseGroup | None]]:
        """Yield every known group, then ``("where", group-or-None)``.

        The WHERE entry is always yielded, as ``None`` until the first
        ``where``/``or_where`` call creates it.
        """
        yield from self._groups.items()
        yield WHERE, self._where

    def get_group(self, name: str) -> ClauseGroup | None:
        """Return the group called ``name``, or ``None`` if never created."""
        if name == WHERE:
            return self._where
        return self._groups.get(name)

    # ------------------------------------------------------------------
    # Core primitive
    # ------------------------------------------------------------------

    def add_clause(
        self,
        name: str,
        sql: str,
        params: ParamSource = None,
        joiner: str = "",
        prefix: str = "",
        postfix: str = "",
    ) -> SqlBuilder:
        """Append one fragment to group ``name``.

        For ``name == "where"`` the fragment keeps ``joiner`` as its own
        connector and the group-level prefix/postfix are fixed.  Any other
        group is created on first use with ``joiner``, ``prefix`` and
        ``postfix``; later calls reuse the group and ignore those three.

        Args:
            name: Group name (the marker is ``/**name**/``).
            sql: SQL text of the fragment.
            params: Parameter source bound to this fragment.
            joiner: Fragment joiner (see above).
            prefix: Group prefix, applied only when creating the group.
            postfix: Group postfix, applied only when creating the group.

        Returns:
            ``self``, for chaining.

        Raises:
            ParameterError: If ``params`` cannot be turned into a bag.
        """
        bound = _bind(params, {})
        if name == WHERE:
            if self._where is None:
                self._where = where_group()
                logger.debug("Created WHERE group")
            self._where.append(Fragment(sql, bound, joiner))
        else:
            group = self._groups.get(name)
            if group is None:
                group = ClauseGroup(name, joiner, prefix, postfix)
                self._groups[name] = group
                logger.debug("Created clause group %r", name)
            group.append(Fragment(sql, bound))

        self._seq += 1
        return self

    def add(
        self, kind: str, sql: str, params: ParamSource = None, **kwargs: Any
    ) -> SqlBuilder:
        """Append ``sql`` using the registered :class:`ClauseSpec` ``kind``.

        Raises:
            UnknownClauseError: If ``kind`` is not registered.
        """
        spec = ClauseRegistry.get(kind)
        return self.add_clause(
            spec.group,
            sql,
            _bind(params, kwargs),
            spec.joiner,
            spec.prefix,
            spec.postfix,
        )

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def add_template(
        self,
        sql: str,
        params: ParamSource = None,
        *,
        options: TemplateOptions | None = None,
        **kwargs: Any,
    ) -> Template:
        """Create a :class:`Template` bound to this builder.

        Args:
            sql: Template text containing ``/**name**/`` markers.
            params: Initial parameters, merged before any group's.
            options: Resolution options; defaults to ``TemplateOptions()``.
            **kwargs: Extra initial parameters.
        """
        return Template(self, sql, _bind(params, kwargs), options)

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------

    def select(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("select", sql, params, **kwargs)

    def where(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        """Add a predicate joined to the previous one with ``AND``."""
        return self.add("where", sql, params, **kwargs)

    def or_where(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        """Add a predicate joined to the previous one with ``OR``."""
        return self.add("or_where", sql, params, **kwargs)

    def order_by(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("order_by", sql, params, **kwargs)

    def group_by(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("group_by", sql, params, **kwargs)

    def having(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("having", sql, params, **kwargs)

    def set(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("set", sql, params, **kwargs)

    def join(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("join", sql, params, **kwargs)

    def inner_join(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("inner_join", sql, params, **kwargs)

    def left_join(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("left_join", sql, params, **kwargs)

    def right_join(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("right_join", sql, params, **kwargs)

    def intersect(self, sql: str, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        return self.add("intersect", sql, params, **kwargs)

    def add_parameters(self, params: ParamSource = None, **kwargs: Any) -> SqlBuilder:
        """Bind extra values without adding any SQL text."""
        return self.add("parameters", "", params, **kwargs)
