from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
from typing import Iterator

from selenium.webdriver.remote.webdriver import WebDriver

from .types import BrowserType, WaitPolicy

logger = logging.getLogger("cartpilot")

DEFAULT_IMPLICIT_WAIT = 10.0
DEFAULT_PAGE_LOAD_TIMEOUT = 20.0


@dataclass
class Session:
    """One live browser connection, owned by whoever provisioned it.

    Engines and page objects only borrow the session; ``release`` is for the
    orchestrator that created it.
    """
    driver: WebDriver
    browser: BrowserType = BrowserType.CHROME
    wait_policy: WaitPolicy = field(default_factory=WaitPolicy)
    implicit_wait: float = DEFAULT_IMPLICIT_WAIT
    page_load_timeout: float = DEFAULT_PAGE_LOAD_TIMEOUT
    released: bool = False

    @contextmanager
    def implicit_wait_suspended(self) -> Iterator[WebDriver]:
        # Lookups inside explicit waits must not stack the implicit wait on top.
        if self.implicit_wait:
            self.driver.implicitly_wait(0)
        try:
            yield self.driver
        finally:
            if self.implicit_wait and not self.released:
                self.driver.implicitly_wait(self.implicit_wait)

    def release(self) -> None:
        if self.released:
            return
        try:
            self.driver.quit()
        finally:
            self.released = True
            logger.debug(f"[session] released {self.browser.value} session")
