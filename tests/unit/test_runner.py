"""Tests for the add-to-cart scenario runner."""

from selenium.common.exceptions import WebDriverException

from cartpilot.automation.runner import DEFAULT_SCENARIOS, AddToCartRunner, CartScenario
from cartpilot.automation.types import ScenarioStatus
from cartpilot.pages import ProductDetailsPage

BASE_URL = "https://www.amazon.com"


class TestHappyPath:
    def test_scenario_passes(self, session, storefront, reporter, no_settle) -> None:
        """
        Given: A storefront where every element of the flow is present
        When: The laptop scenario runs
        Then: It passes, records its steps and attaches a screenshot
        """
        runner = AddToCartRunner(session, BASE_URL, reporter)
        result = runner.run(CartScenario("Add Laptop to Cart", "laptop"))

        assert result.status is ScenarioStatus.PASSED
        assert result.passed
        assert result.error is None
        assert "Clicked Add to Cart button" in result.steps
        assert "Product added to cart successfully" in result.steps
        assert result.warnings == []
        assert storefront.history == [BASE_URL]
        assert [name for _, name in reporter.screenshots] == ["Scenario_Passed_Add Laptop to Cart"]
        assert reporter.messages("fail") == []

    def test_price_is_reported(self, session, storefront, reporter, no_settle) -> None:
        AddToCartRunner(session, BASE_URL, reporter).run(CartScenario("laptop", "laptop"))
        assert "Product price: $799.99" in reporter.messages("info")

    def test_cookies_cleared_after_run(self, session, storefront, no_settle) -> None:
        storefront.add_cookie({"name": "session-id", "value": "abc"})
        AddToCartRunner(session, BASE_URL).run(CartScenario("laptop", "laptop"))
        assert storefront.cookies == {}

    def test_runner_does_not_release_session(self, session, storefront, no_settle) -> None:
        AddToCartRunner(session, BASE_URL).run(CartScenario("laptop", "laptop"))
        assert storefront.quit_called == 0
        assert not session.released


class TestSoftFailures:
    def test_missing_quantity_control_is_a_warning(self, session, storefront, reporter, no_settle) -> None:
        scenario = CartScenario("Add Headphones with Quantity to Cart", "headphones", quantity="2")
        result = AddToCartRunner(session, BASE_URL, reporter).run(scenario)

        assert result.status is ScenarioStatus.PASSED
        assert "Quantity field not available, proceeding with default" in result.warnings
        assert reporter.messages("warning")

    def test_quantity_is_set_when_control_present(self, session, storefront, no_settle) -> None:
        field = storefront.add(ProductDetailsPage.QUANTITY)
        scenario = CartScenario("qty", "headphones", quantity="2")
        result = AddToCartRunner(session, BASE_URL).run(scenario)

        assert result.passed
        assert field.value == "2"
        assert "Set quantity to 2" in result.steps

    def test_missing_confirmation_still_passes(self, session, storefront, reporter) -> None:
        storefront.remove(ProductDetailsPage.CART_CONFIRMATION)
        result = AddToCartRunner(session, BASE_URL, reporter).run(CartScenario("laptop", "laptop"))

        assert result.passed
        assert "Cart confirmation not observed" in result.warnings


class TestHardFailures:
    def test_missing_add_to_cart_fails_with_screenshot(self, session, storefront, reporter, no_settle) -> None:
        """
        Given: A product page that never renders the add-to-cart button
        When: The scenario runs
        Then: It fails, attaches a failure screenshot and still clears cookies
        """
        storefront.remove(ProductDetailsPage.ADD_TO_CART_BUTTON)
        storefront.add_cookie({"name": "session-id", "value": "abc"})

        result = AddToCartRunner(session, BASE_URL, reporter).run(CartScenario("Add Laptop to Cart", "laptop"))

        assert result.status is ScenarioStatus.FAILED
        assert "Add to cart button not available" in result.message
        assert [name for _, name in reporter.screenshots] == ["Scenario_Failed_Add Laptop to Cart"]
        assert reporter.messages("fail")
        assert storefront.cookies == {}

    def test_missing_search_box_fails(self, session, driver, reporter) -> None:
        result = AddToCartRunner(session, BASE_URL, reporter).run(CartScenario("laptop", "laptop"))
        assert result.status is ScenarioStatus.FAILED
        assert "Search box is not displayed" in result.error

    def test_missing_product_title_propagates_as_failure(self, session, storefront, no_settle) -> None:
        storefront.remove(ProductDetailsPage.PRODUCT_TITLE)
        result = AddToCartRunner(session, BASE_URL).run(CartScenario("laptop", "laptop"))
        assert result.status is ScenarioStatus.FAILED
        assert result.message.startswith("ElementNotFound")

    def test_screenshot_error_does_not_mask_result(self, session, storefront, reporter, monkeypatch) -> None:
        storefront.remove(ProductDetailsPage.ADD_TO_CART_BUTTON)

        def broken_screenshot():
            raise WebDriverException("session deleted")

        monkeypatch.setattr(storefront, "get_screenshot_as_png", broken_screenshot)
        result = AddToCartRunner(session, BASE_URL, reporter).run(CartScenario("laptop", "laptop"))

        assert result.status is ScenarioStatus.FAILED
        assert reporter.screenshots == []


def test_default_scenarios() -> None:
    assert [s.product for s in DEFAULT_SCENARIOS] == ["laptop", "mobile phone", "headphones"]
    assert DEFAULT_SCENARIOS[2].quantity == "2"
