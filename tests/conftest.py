"""
Pytest fixtures for cartpilot tests.
"""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from cartpilot.automation.selenium_engine import SeleniumEngine  # noqa: E402
from cartpilot.automation.session import Session  # noqa: E402
from cartpilot.pages import HomePage, ProductDetailsPage, SearchResultsPage  # noqa: E402

from tests.fakes import FAST_POLICY, FakeDriver, FakeElement, RecordingReporter  # noqa: E402


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def session(driver):
    return Session(driver=driver, wait_policy=FAST_POLICY)


@pytest.fixture
def engine(session):
    return SeleniumEngine(session)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def no_settle(monkeypatch):
    """Drop the fixed pauses pages take after add-to-cart."""
    monkeypatch.setattr("cartpilot.pages.product_details_page.CONFIRMATION_SETTLE_SECONDS", 0)
    monkeypatch.setattr("cartpilot.pages.search_results_page.ADD_TO_CART_SETTLE_SECONDS", 0)


@pytest.fixture
def storefront(driver):
    """A fake driver populated with every element of the happy path."""
    driver.title = "Amazon.com. Spend less. Smile more."
    driver.add(HomePage.SEARCH_BOX, FakeElement(tag_name="input"))
    driver.add(HomePage.SEARCH_BUTTON, FakeElement(tag_name="input"))
    driver.add(SearchResultsPage.FIRST_PRODUCT_TITLE, FakeElement(text="Acme Laptop 15\""))
    driver.add(SearchResultsPage.FIRST_PRODUCT_LINK, FakeElement(tag_name="a"))
    driver.add(SearchResultsPage.CART_COUNT, FakeElement(text="1"))
    driver.add(ProductDetailsPage.PRODUCT_TITLE, FakeElement(text="Acme Laptop 15\" 16GB"))
    driver.add(ProductDetailsPage.PRICE, FakeElement(text="$799.99"))
    driver.add(ProductDetailsPage.ADD_TO_CART_BUTTON, FakeElement(tag_name="input"))
    driver.add(ProductDetailsPage.CART_CONFIRMATION, FakeElement(text="Added to Basket"))
    return driver
