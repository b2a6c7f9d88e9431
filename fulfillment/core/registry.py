from __future__ import annotations

from typing import Callable, Dict, Optional

from fulfillment.core.dispatch import HandlerFn, HandlerTable


class HandlerRegistry:
    """Action name → handler registry with an optional fallback handler."""

    def __init__(self) -> None:
        self._handlers: Dict[str, HandlerFn] = {}
        self._fallback: Optional[HandlerFn] = None

    def register(self, action: str, handler: HandlerFn) -> None:
        if action in self._handlers:
            raise ValueError(f"Handler already registered for action: {action}")
        self._handlers[action] = handler

    def register_fallback(self, handler: HandlerFn) -> None:
        self._fallback = handler

    def action(self, name: Optional[str]) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator form of ``register``; ``None`` registers the fallback."""

        def decorator(handler: HandlerFn) -> HandlerFn:
            if name is None:
                self.register_fallback(handler)
            else:
                self.register(name, handler)
            return handler

        return decorator

    def get(self, action: Optional[str]) -> Optional[HandlerFn]:
        if action is not None and action in self._handlers:
            return self._handlers[action]
        return self._fallback

    def list_actions(self) -> list[str]:
        return list(self._handlers)

    def as_table(self) -> HandlerTable:
        return HandlerTable(handlers=dict(self._handlers), wildcard=self._fallback)
