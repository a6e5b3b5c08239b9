"""Pydantic model for per-template resolution options."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

#: Policy for ``/** ... **/`` markers left after group substitution.
UnresolvedMarkerPolicy = Literal["strip", "keep", "error"]


class TemplateOptions(BaseModel):
    """Controls how a :class:`~clauseql.template.Template` resolves.

    Attributes:
        unresolved_markers: What to do with markers whose group was never
            added to the builder.  ``"strip"`` (default) replaces them with
            the empty string, ``"keep"`` leaves them as literal text, and
            ``"error"`` raises
            :class:`~clauseql.errors.UnresolvedMarkerError`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    unresolved_markers: UnresolvedMarkerPolicy = "strip"
