"""Browser interaction layer for the storefront suite.

This package provides the Selenium-backed interaction engine, the session it
borrows, and the typed errors it raises. The scenario runner lives in
``cartpilot.automation.runner`` and is imported on demand since it depends on
the page objects built on top of this package.
"""

from .types import BrowserType, Locator, ScenarioResult, ScenarioStatus, WaitPolicy
from .errors import (
    ElementNotFound,
    ElementNotInteractable,
    InteractionError,
    NavigationFailure,
    StateTimeout,
)
from .engine import InteractionEngine
from .session import Session
from .selenium_engine import ABSENT, SeleniumEngine

__all__ = [
    'ABSENT',
    'BrowserType',
    'ElementNotFound',
    'ElementNotInteractable',
    'InteractionEngine',
    'InteractionError',
    'Locator',
    'NavigationFailure',
    'ScenarioResult',
    'ScenarioStatus',
    'SeleniumEngine',
    'Session',
    'StateTimeout',
    'WaitPolicy',
]
