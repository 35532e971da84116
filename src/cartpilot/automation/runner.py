from dataclasses import dataclass
import logging
from datetime import datetime
from typing import List, Optional

from selenium.common.exceptions import WebDriverException

from ..pages import HomePage, ProductDetailsPage, SearchResultsPage
from ..reporting import NullReporter, Reporter
from .selenium_engine import SeleniumEngine
from .session import Session
from .types import ScenarioResult, ScenarioStatus

logger = logging.getLogger("cartpilot")


class ScenarioFailure(Exception):
    """A verification step of the scenario did not hold."""
    pass


@dataclass
class CartScenario:
    name: str
    product: str
    quantity: Optional[str] = None
    description: str = ""


DEFAULT_SCENARIOS: List[CartScenario] = [
    CartScenario("Add Laptop to Cart", "laptop", description="User adds a laptop to cart"),
    CartScenario("Add Mobile Phone to Cart", "mobile phone", description="User adds a mobile phone to cart"),
    CartScenario(
        "Add Headphones with Quantity to Cart",
        "headphones",
        quantity="2",
        description="User adds headphones with custom quantity to cart",
    ),
]


class AddToCartRunner:
    """Drives search -> product -> add-to-cart on one borrowed session.

    The runner decides pass/fail and captures screenshots; it never releases
    the session.
    """

    def __init__(self, session: Session, base_url: str, reporter: Optional[Reporter] = None):
        self.session = session
        self.base_url = base_url
        self.reporter = reporter or NullReporter()
        self.engine = SeleniumEngine(session)

    def _step(self, result: ScenarioResult, message: str) -> None:
        result.steps.append(message)
        self.reporter.pass_(message)

    def _capture(self, name: str) -> None:
        try:
            self.reporter.attach_screenshot(self.engine.take_screenshot(), name)
        except WebDriverException as e:
            logger.warning(f"[runner] could not take screenshot {name}: {e}")

    def run(self, scenario: CartScenario) -> ScenarioResult:
        result = ScenarioResult(name=scenario.name, status=ScenarioStatus.PASSED)
        home = HomePage(self.session, self.reporter, engine=self.engine)
        results_page = SearchResultsPage(self.session, self.reporter, engine=self.engine)
        product_page = ProductDetailsPage(self.session, self.reporter, engine=self.engine)

        try:
            home.navigate_to_home(self.base_url)
            self.reporter.info(f"Navigated to home page: {self.base_url}")
            if not home.is_search_box_displayed():
                raise ScenarioFailure("Search box is not displayed")
            self._step(result, "Search box is displayed on home page")

            home.search_product(scenario.product)
            self._step(result, f"Searched for {scenario.product}")

            title = results_page.get_first_product_title()
            if not title:
                raise ScenarioFailure("First product title is empty")
            self._step(result, f"First product found: {title}")

            results_page.click_first_product()
            self._step(result, "Clicked on first product")

            product_title = product_page.get_product_title()
            self._step(result, f"Product title displayed: {product_title}")
            self.reporter.info(f"Product price: {product_page.get_product_price()}")

            if scenario.quantity:
                if product_page.set_quantity(scenario.quantity):
                    self._step(result, f"Set quantity to {scenario.quantity}")
                else:
                    result.warnings.append("Quantity field not available, proceeding with default")

            if not product_page.is_add_to_cart_button_displayed():
                raise ScenarioFailure("Add to cart button not available")
            product_page.add_to_cart()
            self._step(result, "Clicked Add to Cart button")

            if product_page.wait_for_cart_confirmation():
                self._step(result, "Product added to cart successfully")
            else:
                result.warnings.append("Cart confirmation not observed")
            result.message = "Product added to cart"
        except Exception as e:
            logger.debug(f"[runner] {scenario.name} failed", exc_info=True)
            result.status = ScenarioStatus.FAILED
            result.error = str(e)
            result.message = f"{type(e).__name__}: {e}"
            self.reporter.fail(f"Test failed: {result.message}")
            self._capture(f"Scenario_Failed_{scenario.name}")
        else:
            self._capture(f"Scenario_Passed_{scenario.name}")
        finally:
            self._clear_cookies()
            result.finished_at = datetime.now()

        return result

    def _clear_cookies(self) -> None:
        try:
            self.engine.delete_all_cookies()
        except WebDriverException as e:
            logger.debug(f"[runner] could not clear cookies: {e}")
