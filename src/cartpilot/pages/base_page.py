import logging
from typing import Optional

from ..automation.engine import InteractionEngine
from ..automation.selenium_engine import SeleniumEngine
from ..automation.session import Session
from ..reporting import NullReporter, Reporter

logger = logging.getLogger("cartpilot")


class BasePage:
    """Common wiring for page objects.

    Subclasses declare Locators as class attributes and build verbs from
    engine primitives only. Element handles are never kept on the page.
    """

    def __init__(self, session: Session, reporter: Optional[Reporter] = None, engine: Optional[InteractionEngine] = None):
        self.session = session
        self.engine: InteractionEngine = engine or SeleniumEngine(session)
        self.reporter = reporter or NullReporter()

    def soft_failure(self, message: str) -> None:
        """Record a failure that must not abort the scenario."""
        logger.warning(f"[pages] {message}")
        self.reporter.warning(message)

    def get_page_title(self) -> str:
        return self.engine.page_title()
