import logging
from typing import Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from .session import DEFAULT_IMPLICIT_WAIT, DEFAULT_PAGE_LOAD_TIMEOUT, Session
from .types import BrowserType, WaitPolicy

logger = logging.getLogger("cartpilot")


def _build_driver(browser: BrowserType, headless: bool):
    if browser == BrowserType.FIREFOX:
        options = FirefoxOptions()
        if headless:
            options.add_argument("-headless")
        return webdriver.Firefox(options=options)
    if browser == BrowserType.EDGE:
        options = EdgeOptions()
        if headless:
            options.add_argument("--headless=new")
        return webdriver.Edge(options=options)
    options = ChromeOptions()
    if headless:
        options.add_argument("--headless=new")
    return webdriver.Chrome(options=options)


def start_session(
    browser: Optional[str] = None,
    headless: bool = False,
    wait_policy: Optional[WaitPolicy] = None,
    implicit_wait: float = DEFAULT_IMPLICIT_WAIT,
    page_load_timeout: float = DEFAULT_PAGE_LOAD_TIMEOUT,
) -> Session:
    """Launch a browser and hand back a ready Session.

    Unknown or empty browser names fall back to chrome. The caller owns the
    returned session and must call ``release`` on it.
    """
    browser_type = BrowserType.parse(browser)
    logger.debug(f"[provision] starting {browser_type.value} (headless={headless})")
    driver = _build_driver(browser_type, headless)
    try:
        driver.maximize_window()
        driver.implicitly_wait(implicit_wait)
        driver.set_page_load_timeout(page_load_timeout)
    except Exception:
        driver.quit()
        raise
    return Session(
        driver=driver,
        browser=browser_type,
        wait_policy=wait_policy or WaitPolicy(),
        implicit_wait=implicit_wait,
        page_load_timeout=page_load_timeout,
    )
