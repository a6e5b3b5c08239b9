"""Fragments and clause groups.

A :class:`Fragment` is one appended SQL snippet plus its parameter payload.
WHERE fragments additionally carry ``joiner`` (``" AND "`` / ``" OR "``),
describing how they connect to the fragment *before* them; plain fragments
leave it as ``None``.

A :class:`ClauseGroup` holds fragments under one name.  Default groups use
one fixed joiner between every pair of fragments; the WHERE group
(``joiner=None``) looks the joiner up on each fragment.  Both cases go
through :func:`resolve_fragments`.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from clauseql.params import Parameters

#: Picks the text emitted between ``fragments[i-1]`` and ``fragments[i]``.
JoinerStrategy = Callable[["Fragment"], str]


@dataclass(frozen=True)
class Fragment:
    """An immutable SQL snippet with its bound parameters.

    Attributes:
        sql: Raw SQL text.
        params: Opaque parameter source merged at resolution time.
        joiner: Connector to the previous fragment (WHERE fragments only).
    """

    sql: str
    params: Any = None
    joiner: str | None = None


def resolve_fragments(
    fragments: Sequence[Fragment],
    joiner_for: JoinerStrategy,
    prefix: str,
    postfix: str,
    sink: Parameters,
) -> str:
    """Join ``fragments`` into one SQL string and merge their parameters.

    Every fragment's parameters are merged into ``sink`` in order; the
    joiner is never emitted before the first fragment.
    """
    parts = [prefix]
    for i, fragment in enumerate(fragments):
        sink.add_dynamic_params(fragment.params)
        if i > 0:
            parts.append(joiner_for(fragment))
        parts.append(fragment.sql)
    parts.append(postfix)
    return "".join(parts)


def _own_joiner(fragment: Fragment) -> str:
    return fragment.joiner or ""


def _fixed_joiner(joiner: str) -> JoinerStrategy:
    def joiner_for(_fragment: Fragment) -> str:
        return joiner

    return joiner_for


@dataclass
class ClauseGroup:
    """An ordered, named collection of fragments.

    Attributes:
        name: Group name; the template marker is ``/**name**/``.
        joiner: Fixed joiner, or ``None`` to use each fragment's own joiner.
        prefix: Text emitted before the joined fragments.
        postfix: Text emitted after the joined fragments.
        fragments: Fragments in append order.
    """

    name: str
    joiner: str | None = None
    prefix: str = ""
    postfix: str = ""
    fragments: list[Fragment] = field(default_factory=list)

    def append(self, fragment: Fragment) -> None:
        self.fragments.append(fragment)

    def resolve(self, sink: Parameters) -> str:
        """Render the group and merge every fragment's params into ``sink``."""
        joiner_for = _own_joiner if self.joiner is None else _fixed_joiner(self.joiner)
        return resolve_fragments(
            self.fragments, joiner_for, self.prefix, self.postfix, sink
        )

    def __len__(self) -> int:
        return len(self.fragments)


def where_group() -> ClauseGroup:
    """Return a new, empty WHERE group (``"WHERE "`` ... ``"\\n"``)."""
    return ClauseGroup(name="where", joiner=None, prefix="WHERE ", postfix="\n")
