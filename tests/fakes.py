"""In-memory stand-ins for a Selenium WebDriver and a reporter.

``FakeDriver`` implements the calls the engine and Selenium's expected
conditions make, keyed by ``(by, value)`` locator pairs.
"""

from typing import Dict, List, Optional, Tuple

from selenium.common.exceptions import (
    NoAlertPresentException,
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
)

from cartpilot.automation.types import Locator, WaitPolicy

FAST_POLICY = WaitPolicy(timeout=0.3, poll_interval=0.05)


class FakeElement:
    """A DOM node with just enough behaviour for the engine."""

    def __init__(self, text="", displayed=True, enabled=True, attributes=None, css=None, tag_name="div", errors=None):
        self._text = text
        self.displayed = displayed
        self.enabled = enabled
        self.attributes = dict(attributes or {})
        self.css = dict(css or {})
        self.tag_name = tag_name
        self.value = ""
        self.clicks = 0
        self.clears = 0
        self.stale = False
        # action name -> exception raised when that action is attempted
        self.errors = dict(errors or {})

    def _check(self, action=None):
        if self.stale:
            raise StaleElementReferenceException("element is no longer attached to the DOM")
        if action in self.errors:
            raise self.errors[action]

    @property
    def text(self):
        self._check("text")
        return self._text

    def is_displayed(self):
        self._check()
        return self.displayed

    def is_enabled(self):
        self._check()
        return self.enabled

    def click(self):
        self._check("click")
        self.clicks += 1

    def clear(self):
        self._check("clear")
        self.clears += 1
        self.value = ""

    def send_keys(self, *values):
        self._check("send_keys")
        self.value += "".join(values)

    def get_attribute(self, name):
        self._check()
        return self.attributes.get(name)

    def value_of_css_property(self, name):
        self._check()
        return self.css.get(name, "")


class FakeAlert:
    def __init__(self, text=""):
        self.text = text
        self.accepted = False
        self.dismissed = False
        self.typed = ""

    def accept(self):
        self.accepted = True

    def dismiss(self):
        self.dismissed = True

    def send_keys(self, text):
        self.typed += text


class FakeSwitchTo:
    def __init__(self, driver):
        self._driver = driver

    @property
    def alert(self):
        if self._driver.alert is None:
            raise NoAlertPresentException("no alert open")
        return self._driver.alert

    def window(self, handle):
        self._driver.current_window_handle = handle

    def frame(self, reference):
        self._driver.frames.append(reference)

    def parent_frame(self):
        self._driver.frames.append("parent")

    def default_content(self):
        self._driver.frames.append("default")


class FakeDriver:
    """In-memory WebDriver keyed by (by, value) locator pairs."""

    def __init__(self):
        self.elements: Dict[Tuple[str, str], List[FakeElement]] = {}
        self.implicit_wait_calls: List[float] = []
        self.lookups = 0
        self.current_url = "about:blank"
        self.window_titles: Dict[str, str] = {"main": ""}
        self.current_window_handle = "main"
        self.alert: Optional[FakeAlert] = None
        self.frames: list = []
        self.scripts: list = []
        self.script_results: dict = {}
        self.cookies: Dict[str, dict] = {}
        self.pages: Dict[str, Dict[Tuple[str, str], List[FakeElement]]] = {}
        self.slow_urls: set = set()
        self.history: List[str] = []
        self.quit_called = 0
        self.screenshot = b"\x89PNG fake screenshot"

    # page setup helpers
    def add(self, locator: Locator, *elements: FakeElement) -> FakeElement:
        if not elements:
            elements = (FakeElement(),)
        self.elements.setdefault(locator.as_tuple(), []).extend(elements)
        return elements[0]

    def remove(self, locator: Locator) -> None:
        for element in self.elements.pop(locator.as_tuple(), []):
            element.stale = True

    @property
    def title(self):
        return self.window_titles.get(self.current_window_handle, "")

    @title.setter
    def title(self, value):
        self.window_titles[self.current_window_handle] = value

    @property
    def window_handles(self):
        return list(self.window_titles)

    @property
    def switch_to(self):
        return FakeSwitchTo(self)

    # WebDriver surface
    def find_element(self, by, value):
        self.lookups += 1
        matches = self.elements.get((by, value))
        if not matches:
            raise NoSuchElementException(f"Unable to locate element: {by}={value}")
        return matches[0]

    def find_elements(self, by, value):
        self.lookups += 1
        return list(self.elements.get((by, value), []))

    def implicitly_wait(self, seconds):
        self.implicit_wait_calls.append(seconds)

    def get(self, url):
        if url in self.slow_urls:
            raise TimeoutException(f"Timed out receiving message from renderer: {url}")
        self.history.append(url)
        self.current_url = url
        if url in self.pages:
            for elements in self.elements.values():
                for element in elements:
                    element.stale = True
            self.elements = self.pages[url]

    def back(self):
        self.history.append("back")

    def forward(self):
        self.history.append("forward")

    def refresh(self):
        self.history.append("refresh")

    def execute_script(self, script, *args):
        self.scripts.append((script, args))
        return self.script_results.get(script)

    def execute_async_script(self, script, *args):
        self.scripts.append((script, args))
        return self.script_results.get(script)

    def add_cookie(self, cookie):
        self.cookies[cookie["name"]] = cookie

    def get_cookie(self, name):
        return self.cookies.get(name)

    def delete_cookie(self, name):
        self.cookies.pop(name, None)

    def delete_all_cookies(self):
        self.cookies.clear()

    def get_screenshot_as_png(self):
        return self.screenshot

    def quit(self):
        self.quit_called += 1


class RecordingReporter:
    """Reporter that keeps (status, message) pairs for assertions."""

    def __init__(self):
        self.events: List[Tuple[str, str]] = []
        self.screenshots: List[Tuple[bytes, str]] = []

    def pass_(self, message):
        self.events.append(("pass", message))

    def fail(self, message):
        self.events.append(("fail", message))

    def skip(self, message):
        self.events.append(("skip", message))

    def info(self, message):
        self.events.append(("info", message))

    def warning(self, message):
        self.events.append(("warning", message))

    def attach_screenshot(self, data, name):
        self.screenshots.append((data, name))
        return None

    def messages(self, status):
        return [m for s, m in self.events if s == status]


