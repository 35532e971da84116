"""Selenium-backed interaction engine.

Every blocking operation re-resolves its locator against the live page and
polls a Selenium expected condition until it holds or the wait policy runs
out. Only the wait predicate is retried, never the action itself.
"""
from __future__ import annotations

from contextlib import contextmanager
import logging
import time
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, Union

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import Select, WebDriverWait

from .errors import (
    ElementNotFound,
    ElementNotInteractable,
    InteractionError,
    NavigationFailure,
    StateTimeout,
)
from .session import Session
from .types import Locator, WaitPolicy

logger = logging.getLogger("cartpilot")

# Returned by get_attribute when the element exists but the attribute is unset.
ABSENT = None

IGNORED_EXCEPTIONS = (NoSuchElementException, StaleElementReferenceException)


class SeleniumEngine:
    def __init__(self, session: Session, wait_policy: Optional[WaitPolicy] = None):
        self.session = session
        self.wait_policy = wait_policy or session.wait_policy

    @property
    def driver(self):
        return self.session.driver

    # ------------------------------------------------------------------ waits

    def _policy(self, timeout: Optional[float]) -> WaitPolicy:
        if timeout is None:
            return self.wait_policy
        return self.wait_policy.with_timeout(timeout)

    def _until(
        self,
        condition: Callable,
        condition_name: str,
        locator: Optional[Locator] = None,
        policy: Optional[WaitPolicy] = None,
        error: Optional[Type[InteractionError]] = None,
    ) -> Any:
        """Poll ``condition`` until it returns something truthy.

        On timeout the failure is classified: ``error`` when given, otherwise
        ElementNotFound if the locator matches nothing and
        ElementNotInteractable if it matches but never reached the state.
        """
        policy = policy or self.wait_policy
        wait = WebDriverWait(
            self.driver,
            policy.timeout,
            poll_frequency=policy.poll_interval,
            ignored_exceptions=IGNORED_EXCEPTIONS,
        )
        with self.session.implicit_wait_suspended():
            try:
                return wait.until(condition)
            except TimeoutException as exc:
                raise self._timeout_error(condition_name, locator, policy, error) from exc

    def _timeout_error(
        self,
        condition_name: str,
        locator: Optional[Locator],
        policy: WaitPolicy,
        error: Optional[Type[InteractionError]],
    ) -> InteractionError:
        target = f" for {locator}" if locator is not None else ""
        message = f"Timed out after {policy.timeout:g}s waiting for {condition_name}{target}"
        if error is None:
            if locator is None:
                error = StateTimeout
            elif condition_name == "presence" or not self.driver.find_elements(*locator.as_tuple()):
                error = ElementNotFound
                message = f"No element matched {locator} within {policy.timeout:g}s"
            else:
                error = ElementNotInteractable
        logger.debug(f"[engine] {message}")
        return error(message, locator=locator, condition=condition_name)

    @contextmanager
    def _acting(self, locator: Locator, action: str) -> Iterator[None]:
        """Convert driver errors raised by the action itself into typed errors.

        A stale handle means the element left the DOM after the wait; any
        other driver error means it was there but refused the action.
        """
        try:
            yield
        except StaleElementReferenceException as exc:
            logger.debug(f"[engine] {locator} went stale during {action}")
            raise ElementNotFound(
                f"Element {locator} was detached before {action} completed", locator=locator, condition=action
            ) from exc
        except WebDriverException as exc:
            logger.debug(f"[engine] {action} on {locator} failed: {exc.msg}")
            raise ElementNotInteractable(
                f"Could not {action} {locator}: {exc.msg}", locator=locator, condition=action
            ) from exc

    def wait_for_present(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return self._until(
            EC.presence_of_element_located(locator.as_tuple()), "presence", locator, self._policy(timeout)
        )

    def wait_for_visible(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return self._until(
            EC.visibility_of_element_located(locator.as_tuple()), "visibility", locator, self._policy(timeout)
        )

    def wait_for_clickable(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return self._until(
            EC.element_to_be_clickable(locator.as_tuple()), "clickability", locator, self._policy(timeout)
        )

    def wait_for_invisible(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        return self._until(
            EC.invisibility_of_element_located(locator.as_tuple()),
            "invisibility",
            locator,
            self._policy(timeout),
            error=StateTimeout,
        )

    def wait_for_disappear(self, locator: Locator, timeout: float) -> bool:
        """Like wait_for_invisible but with an ad hoc timeout for this call only."""
        return self.wait_for_invisible(locator, timeout=timeout)

    def wait_for_text(self, locator: Locator, text: str, timeout: Optional[float] = None) -> bool:
        return self._until(
            EC.text_to_be_present_in_element(locator.as_tuple(), text),
            f"text {text!r}",
            locator,
            self._policy(timeout),
            error=StateTimeout,
        )

    def wait_for_seconds(self, seconds: float) -> None:
        """Unconditional pause.

        Only for transitions with no observable state to wait on; prefer any
        of the wait_for_* predicates.
        """
        logger.debug(f"[engine] fixed pause of {seconds}s")
        time.sleep(seconds)

    # ---------------------------------------------------------- state checks

    def is_displayed(self, locator: Locator) -> bool:
        with self.session.implicit_wait_suspended() as driver:
            try:
                return driver.find_element(*locator.as_tuple()).is_displayed()
            except IGNORED_EXCEPTIONS:
                return False

    def is_present(self, locator: Locator) -> bool:
        with self.session.implicit_wait_suspended() as driver:
            return len(driver.find_elements(*locator.as_tuple())) > 0

    def is_enabled(self, locator: Locator) -> bool:
        with self.session.implicit_wait_suspended() as driver:
            try:
                return driver.find_element(*locator.as_tuple()).is_enabled()
            except IGNORED_EXCEPTIONS:
                return False

    # ---------------------------------------------------------------- clicks

    def click(self, locator: Locator) -> None:
        with self._acting(locator, "click"):
            self.wait_for_clickable(locator).click()
        logger.debug(f"[engine] clicked {locator}")

    def double_click(self, locator: Locator) -> None:
        with self._acting(locator, "double-click"):
            element = self.wait_for_present(locator)
            ActionChains(self.driver).double_click(element).perform()

    def right_click(self, locator: Locator) -> None:
        with self._acting(locator, "right-click"):
            element = self.wait_for_present(locator)
            ActionChains(self.driver).context_click(element).perform()

    # ---------------------------------------------------------------- typing

    def clear_and_type(self, locator: Locator, text: str) -> None:
        with self._acting(locator, "type into"):
            element = self.wait_for_visible(locator)
            element.clear()
            element.send_keys(text)
        logger.debug(f"[engine] typed {len(text)} chars into {locator}")

    def type(self, locator: Locator, text: str) -> None:
        with self._acting(locator, "type into"):
            self.wait_for_visible(locator).send_keys(text)

    def type_with_delay(self, locator: Locator, text: str, delay: float) -> None:
        with self._acting(locator, "type into"):
            element = self.wait_for_visible(locator)
            element.click()
            for character in text:
                element.send_keys(character)
                time.sleep(delay)

    def clear(self, locator: Locator) -> None:
        with self._acting(locator, "clear"):
            self.wait_for_visible(locator).clear()

    # ----------------------------------------------------------------- reads

    def get_text(self, locator: Locator) -> str:
        with self._acting(locator, "read text of"):
            return self.wait_for_visible(locator).text

    def get_attribute(self, locator: Locator, name: str) -> Optional[str]:
        with self._acting(locator, f"read {name} of"):
            value = self.wait_for_present(locator).get_attribute(name)
        return ABSENT if value is None else value

    def get_css_value(self, locator: Locator, property_name: str) -> str:
        with self._acting(locator, f"read {property_name} of"):
            return self.wait_for_present(locator).value_of_css_property(property_name)

    # ---------------------------------------------------------------- select

    def _select(self, locator: Locator) -> Select:
        return Select(self.wait_for_present(locator))

    def select_by_visible_text(self, locator: Locator, text: str) -> None:
        with self._acting(locator, "select from"):
            self._select(locator).select_by_visible_text(text)

    def select_by_value(self, locator: Locator, value: str) -> None:
        with self._acting(locator, "select from"):
            self._select(locator).select_by_value(value)

    def select_by_index(self, locator: Locator, index: int) -> None:
        with self._acting(locator, "select from"):
            self._select(locator).select_by_index(index)

    def get_dropdown_options(self, locator: Locator) -> List[str]:
        with self._acting(locator, "list options of"):
            return [option.text for option in self._select(locator).options]

    def get_selected_option(self, locator: Locator) -> str:
        with self._acting(locator, "read selection of"):
            return self._select(locator).first_selected_option.text

    # ------------------------------------------------------------- scrolling

    def scroll_to_element(self, locator: Locator) -> None:
        with self._acting(locator, "scroll to"):
            element = self.wait_for_present(locator)
            self.driver.execute_script("arguments[0].scrollIntoView(true);", element)

    def scroll_to_element_and_wait(self, locator: Locator) -> None:
        self.scroll_to_element(locator)
        self.wait_for_visible(locator)

    def scroll_to_top(self) -> None:
        self.driver.execute_script("window.scrollTo(0, 0);")

    def scroll_to_bottom(self) -> None:
        self.driver.execute_script("window.scrollTo(0, document.body.scrollHeight);")

    def scroll_by_pixels(self, pixels: int) -> None:
        self.driver.execute_script("window.scrollBy(0, arguments[0]);", pixels)

    # ----------------------------------------------------------------- mouse

    def hover(self, locator: Locator) -> None:
        with self._acting(locator, "hover over"):
            element = self.wait_for_present(locator)
            ActionChains(self.driver).move_to_element(element).perform()

    def drag_and_drop(self, source: Locator, target: Locator) -> None:
        with self._acting(source, "drag"):
            source_element = self.wait_for_present(source)
            target_element = self.wait_for_present(target)
            ActionChains(self.driver).drag_and_drop(source_element, target_element).perform()

    def drag_by_offset(self, locator: Locator, x_offset: int, y_offset: int) -> None:
        with self._acting(locator, "drag"):
            element = self.wait_for_present(locator)
            ActionChains(self.driver).drag_and_drop_by_offset(element, x_offset, y_offset).perform()

    # -------------------------------------------------------------- keyboard

    def press_enter(self, locator: Locator) -> None:
        with self._acting(locator, "press Enter in"):
            self.wait_for_visible(locator).send_keys(Keys.ENTER)

    def press_tab(self) -> None:
        ActionChains(self.driver).send_keys(Keys.TAB).perform()

    def press_escape(self) -> None:
        ActionChains(self.driver).send_keys(Keys.ESCAPE).perform()

    def _chord(self, key: str) -> None:
        ActionChains(self.driver).key_down(Keys.CONTROL).send_keys(key).key_up(Keys.CONTROL).perform()

    def select_all(self) -> None:
        self._chord("a")

    def copy(self) -> None:
        self._chord("c")

    def paste(self) -> None:
        self._chord("v")

    # ---------------------------------------------------------------- script

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.driver.execute_script(script, *args)

    def execute_async_script(self, script: str, *args: Any) -> Any:
        return self.driver.execute_async_script(script, *args)

    def get_page_title_via_js(self) -> str:
        return self.execute_script("return document.title;")

    def get_page_url_via_js(self) -> str:
        return self.execute_script("return window.location.href;")

    def highlight(self, locator: Locator) -> None:
        with self._acting(locator, "highlight"):
            element = self.wait_for_present(locator)
            self.driver.execute_script("arguments[0].style.border='3px solid red';", element)

    def unhighlight(self, locator: Locator) -> None:
        with self._acting(locator, "unhighlight"):
            element = self.wait_for_present(locator)
            self.driver.execute_script("arguments[0].style.border='';", element)

    # ---------------------------------------------------------------- alerts

    def _alert(self):
        return self._until(EC.alert_is_present(), "alert")

    def accept_alert(self) -> None:
        self._alert().accept()

    def dismiss_alert(self) -> None:
        self._alert().dismiss()

    def get_alert_text(self) -> str:
        return self._alert().text

    def type_in_alert(self, text: str) -> None:
        self._alert().send_keys(text)

    # -------------------------------------------------------- windows/frames

    def current_window_handle(self) -> str:
        return self.driver.current_window_handle

    def window_handles(self) -> List[str]:
        return list(self.driver.window_handles)

    def switch_to_window_by_index(self, index: int) -> None:
        self._until(lambda d: len(d.window_handles) > index, f"window #{index}")
        self.driver.switch_to.window(self.driver.window_handles[index])

    def switch_to_window_by_title(self, title: str) -> None:
        original = self.driver.current_window_handle

        def _window_titled(driver):
            for handle in driver.window_handles:
                driver.switch_to.window(handle)
                if driver.title == title:
                    return handle
            return False

        try:
            self._until(_window_titled, f"window titled {title!r}")
        except StateTimeout:
            self.driver.switch_to.window(original)
            raise

    def switch_to_frame(self, frame: Union[Locator, int]) -> None:
        if isinstance(frame, Locator):
            self._until(EC.frame_to_be_available_and_switch_to_it(frame.as_tuple()), "frame", frame)
        else:
            self._until(EC.frame_to_be_available_and_switch_to_it(frame), f"frame #{frame}")

    def switch_to_parent_frame(self) -> None:
        self.driver.switch_to.parent_frame()

    def switch_to_default_content(self) -> None:
        self.driver.switch_to.default_content()

    # ---------------------------------------------------------------- lookup

    def find_element(self, locator: Locator) -> WebElement:
        return self.wait_for_present(locator)

    def find_elements(self, locator: Locator) -> List[WebElement]:
        with self.session.implicit_wait_suspended() as driver:
            return driver.find_elements(*locator.as_tuple())

    def get_element_count(self, locator: Locator) -> int:
        return len(self.find_elements(locator))

    # ------------------------------------------------------------ navigation

    def navigate_to(self, url: str) -> None:
        logger.debug(f"[engine] navigating to {url}")
        try:
            self.driver.get(url)
        except TimeoutException as exc:
            raise NavigationFailure(
                f"Page {url} did not load within {self.session.page_load_timeout:g}s",
                condition="page load",
            ) from exc

    def navigate_back(self) -> None:
        self.driver.back()

    def navigate_forward(self) -> None:
        self.driver.forward()

    def refresh(self) -> None:
        self.driver.refresh()

    def current_url(self) -> str:
        return self.driver.current_url

    def page_title(self) -> str:
        return self.driver.title

    # --------------------------------------------------------------- cookies

    def add_cookie(self, name: str, value: str) -> None:
        self.driver.add_cookie({"name": name, "value": value})

    def get_cookie(self, name: str) -> Optional[Dict[str, Any]]:
        return self.driver.get_cookie(name)

    def delete_cookie(self, name: str) -> None:
        self.driver.delete_cookie(name)

    def delete_all_cookies(self) -> None:
        self.driver.delete_all_cookies()

    def take_screenshot(self) -> bytes:
        return self.driver.get_screenshot_as_png()
