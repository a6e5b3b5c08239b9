"""Adapters from resolved templates to third-party query objects.

SQLAlchemy adapter
------------------
:func:`to_sqlalchemy` wraps resolved SQL in a
:class:`sqlalchemy.sql.expression.TextClause`.  Nothing is executed here;
the caller passes the pair to ``Connection.execute``.  Parameters are not
bound into the clause: ``TextClause.bindparams`` rejects names absent from
the text, and a resolved bag may carry values from groups without a marker.

Install the optional dependency before using this module::

    pip install "clauseql[sqlalchemy]"

Example::

    clause, params = to_sqlalchemy(template)
    with engine.connect() as conn:
        rows = conn.execute(clause, params).all()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from clauseql.template import ResolvedSQL, Template

if TYPE_CHECKING:
    from sqlalchemy import TextClause


def to_sqlalchemy(
    resolved: Template | ResolvedSQL,
    runtime: dict[str, Any] | None = None,
) -> tuple[TextClause, dict[str, Any]]:
    """Return ``(text_clause, params)`` for ``resolved``.

    Args:
        resolved: A template (resolved on the spot) or a resolution result.
        runtime: Optional execution-time values that override resolved
            parameters of the same name.

    Returns:
        The SQL as a ``TextClause`` and a plain parameter ``dict``.  Both
        use the ``:name`` bind style native to ``text()``.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import text
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for to_sqlalchemy(). "
            'Install it with: pip install "clauseql[sqlalchemy]"'
        ) from exc

    if isinstance(resolved, Template):
        resolved = resolved.resolve()
    return text(resolved.sql), resolved.merge_runtime_params(runtime or {})
