from typing import Protocol, Optional, Any, List

from selenium.webdriver.remote.webelement import WebElement

from .types import Locator


class InteractionEngine(Protocol):
    """The primitives page objects are allowed to build on."""

    def navigate_to(self, url: str) -> None:
        ...

    def page_title(self) -> str:
        ...

    def click(self, locator: Locator) -> None:
        ...

    def clear_and_type(self, locator: Locator, text: str) -> None:
        ...

    def get_text(self, locator: Locator) -> str:
        ...

    def get_attribute(self, locator: Locator, name: str) -> Optional[str]:
        ...

    def wait_for_visible(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        ...

    def wait_for_seconds(self, seconds: float) -> None:
        ...

    def is_displayed(self, locator: Locator) -> bool:
        ...

    def is_present(self, locator: Locator) -> bool:
        ...

    def is_enabled(self, locator: Locator) -> bool:
        ...

    def find_elements(self, locator: Locator) -> List[WebElement]:
        ...

    def execute_script(self, script: str, *args: Any) -> Any:
        ...

    def take_screenshot(self) -> bytes:
        ...
