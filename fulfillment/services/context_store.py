"""Outgoing context bookkeeping for one webhook request."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from fulfillment.adapters.base import BaseAgentAdapter
from fulfillment.errors import InvalidContextError
from fulfillment.schemas.request import Context

logger = logging.getLogger(__name__)

ContextInput = Union[str, Context, Mapping[str, Any]]


class ContextStore:
    """
    Holds the contexts the response will set, plus read access to the
    request's input contexts.

    Name normalization and clear matching are version-specific and delegated
    to the adapter: v1 compares names exactly, v2 names are session paths and
    are cleared by their last segment.
    """

    def __init__(self, adapter: BaseAgentAdapter) -> None:
        self._adapter = adapter
        self._outgoing: list[Context] = []

    @property
    def outgoing(self) -> tuple[Context, ...]:
        return tuple(self._outgoing)

    @property
    def input_contexts(self) -> tuple[Context, ...]:
        return self._adapter.request.input_contexts

    def set_context(self, context: ContextInput) -> "ContextStore":
        self._adapter.add_context(self._outgoing, self._coerce(context))
        return self

    def clear_context(self, name: str) -> "ContextStore":
        before = len(self._outgoing)
        self._outgoing = [
            ctx for ctx in self._outgoing if not self._adapter.context_matches(ctx, name)
        ]
        logger.debug(
            "Cleared %d outgoing context(s) matching %s", before - len(self._outgoing), name
        )
        return self

    def clear_outgoing_contexts(self) -> "ContextStore":
        self._outgoing = []
        return self

    def get_context(self, name: str) -> Optional[Context]:
        """First input context named ``name`` (full or short name), else None."""
        for context in self.input_contexts:
            if context.name == name or context.short_name == name:
                return context
        return None

    def drain(self) -> list[Context]:
        contexts, self._outgoing = self._outgoing, []
        return contexts

    @staticmethod
    def _coerce(context: ContextInput) -> Context:
        if isinstance(context, Context):
            return context
        if isinstance(context, str):
            context = {"name": context}
        if not isinstance(context, Mapping) or not context.get("name"):
            raise InvalidContextError("context must be provided and must have a name")
        try:
            return Context.model_validate(dict(context))
        except ValidationError as e:
            raise InvalidContextError(f"Invalid context: {e}") from e
