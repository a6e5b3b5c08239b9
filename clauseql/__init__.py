"""clauseQL – incremental SQL clause assembly over marker templates.

Build a query piece by piece, then splice the pieces into one or more
templates.

Public API
----------
``SqlBuilder``
    Accumulates named groups of SQL fragments with their parameters.

``Template``
    Created by :meth:`SqlBuilder.add_template`; lazily resolves its
    ``/**name**/`` markers against the builder's current state.

Example::

    from clauseql import SqlBuilder

    builder = SqlBuilder()
    count = builder.add_template("SELECT COUNT(*) FROM users /**where**/")
    page = builder.add_template(
        "SELECT /**select**/ FROM users /**where**/ /**orderby**/ LIMIT :n",
        n=20,
    )
    builder.select("id").select("name").order_by("name")
    builder.where("status = :status", status="active")

    cursor.execute(count.sql, count.parameters.to_dict())
    cursor.execute(page.sql, page.parameters.to_dict())

Extensibility
-------------
New clause kinds can be registered via::

    from clauseql.registry import ClauseRegistry, ClauseSpec

    ClauseRegistry.register("limit", ClauseSpec("limit", "", "LIMIT ", "\\n"))
    builder.add("limit", ":n", n=10)
"""

from __future__ import annotations

from clauseql.adapters import to_sqlalchemy
from clauseql.builder import SqlBuilder
from clauseql.clauses import ClauseGroup, Fragment
from clauseql.errors import (
    ClauseConflictError,
    ClauseQLError,
    ParameterError,
    TemplateError,
    UnknownClauseError,
    UnresolvedMarkerError,
)
from clauseql.options import TemplateOptions
from clauseql.params import Parameters
from clauseql.registry import ClauseRegistry, ClauseSpec
from clauseql.template import ResolvedSQL, Template

__all__ = [
    # Core
    "SqlBuilder",
    "Template",
    "ResolvedSQL",
    "TemplateOptions",
    "Parameters",
    # Clause structures
    "Fragment",
    "ClauseGroup",
    "ClauseRegistry",
    "ClauseSpec",
    # Adapters
    "to_sqlalchemy",
    # Errors
    "ClauseQLError",
    "ClauseConflictError",
    "ParameterError",
    "TemplateError",
    "UnresolvedMarkerError",
    "UnknownClauseError",
]
