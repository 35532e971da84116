"""Typed failures raised by the interaction engine.

The engine never swallows these; page objects decide per verb whether to
propagate, downgrade to a warning, or substitute a sentinel value.
"""
from typing import Optional

from .types import Locator


class InteractionError(Exception):
    """Base exception for every engine failure."""

    def __init__(self, message: str, locator: Optional[Locator] = None, condition: Optional[str] = None):
        super().__init__(message)
        self.locator = locator
        self.condition = condition


class ElementNotFound(InteractionError):
    """Locator matched nothing within the wait window."""
    pass


class ElementNotInteractable(InteractionError):
    """Element was found but never became visible/clickable/enabled in time."""
    pass


class StateTimeout(InteractionError):
    """A non-element condition (invisibility, text, alert, window) never held."""
    pass


class NavigationFailure(InteractionError):
    """Page did not finish loading within the page-load timeout."""
    pass
