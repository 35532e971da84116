import logging

from ..automation.errors import InteractionError
from ..automation.types import Locator
from .base_page import BasePage

logger = logging.getLogger("cartpilot")

# The basket badge updates without any element we can wait on.
ADD_TO_CART_SETTLE_SECONDS = 2


class SearchResultsPage(BasePage):
    FIRST_PRODUCT_TITLE = Locator.xpath("(//span[@class='a-size-medium a-color-base a-text-normal'])[1]")
    FIRST_PRODUCT_LINK = Locator.xpath("(//h2//a)[1]")
    FIRST_PRODUCT_LINK_FALLBACK = Locator.xpath(
        "(//div[@data-component-type='s-search-result'][1]//h2//a)[1]"
    )
    ADD_TO_CART_BUTTON = Locator.xpath("(//span[text()='Add to basket'])[1]")
    CART_COUNT = Locator.id("nav-cart-count-container")

    def get_first_product_title(self) -> str:
        return self.engine.get_text(self.FIRST_PRODUCT_TITLE)

    def click_first_product(self) -> None:
        """Open the first result.

        Uses the fallback link when the primary one is not on the page; a
        failure on whichever is chosen propagates.
        """
        if self.engine.is_present(self.FIRST_PRODUCT_LINK):
            self.engine.click(self.FIRST_PRODUCT_LINK)
            logger.debug("[pages] opened first product via primary locator")
        else:
            self.engine.click(self.FIRST_PRODUCT_LINK_FALLBACK)
            logger.debug("[pages] opened first product via fallback locator")

    def add_first_product_to_cart(self) -> bool:
        """Add the first result straight from the listing.

        Not every listing offers the button, so a missing one is only a
        warning; returns whether the click happened.
        """
        try:
            self.engine.click(self.ADD_TO_CART_BUTTON)
        except InteractionError as e:
            self.soft_failure(f"Add to cart button not available on search results page: {e}")
            return False
        self.engine.wait_for_seconds(ADD_TO_CART_SETTLE_SECONDS)
        return True

    def get_cart_count(self) -> str:
        return self.engine.get_text(self.CART_COUNT)

    def is_add_to_cart_button_displayed(self) -> bool:
        return self.engine.is_displayed(self.ADD_TO_CART_BUTTON)

    def is_results_page_loaded(self, expected_title: str = "Amazon") -> bool:
        return expected_title in (self.engine.page_title() or "")
