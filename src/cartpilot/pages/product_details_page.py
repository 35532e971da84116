"""Product details page.

Absent-element policy per verb:

- ``get_product_title``, ``add_to_cart``, ``buy_now``: hard, errors propagate.
- ``wait_for_cart_confirmation``, ``set_quantity``: soft, logged as a warning
  and reported, the scenario continues.
- ``get_product_price``: sentinel, returns ``PRICE_NOT_AVAILABLE``.
"""
import logging
from typing import Optional

from ..automation.errors import InteractionError
from ..automation.types import Locator
from .base_page import BasePage

logger = logging.getLogger("cartpilot")

PRICE_NOT_AVAILABLE = "Price not available"

# The confirmation toast animates in after it becomes visible.
CONFIRMATION_SETTLE_SECONDS = 2


class ProductDetailsPage(BasePage):
    PRODUCT_TITLE = Locator.id("productTitle")
    ADD_TO_CART_BUTTON = Locator.id("add-to-cart-button")
    BUY_NOW_BUTTON = Locator.id("buy-now-button")
    QUANTITY = Locator.id("quantity")
    PRICE = Locator.id("a-autoid-0-announce")
    CART_CONFIRMATION = Locator.xpath("//span[contains(text(), 'Added to Basket')]")

    def get_product_title(self) -> str:
        return self.engine.get_text(self.PRODUCT_TITLE)

    def add_to_cart(self) -> None:
        """Click add-to-cart. Confirmation is checked separately."""
        self.engine.click(self.ADD_TO_CART_BUTTON)

    def buy_now(self) -> None:
        self.engine.click(self.BUY_NOW_BUTTON)

    def wait_for_cart_confirmation(self, timeout: Optional[float] = None) -> bool:
        """Wait for the "Added to Basket" confirmation.

        The confirmation UI is not shown consistently, so a timeout is logged
        and reported as a warning instead of raised. This can hide a real
        add-to-cart failure; callers that care should verify the cart count.
        """
        try:
            self.engine.wait_for_visible(self.CART_CONFIRMATION, timeout=timeout)
        except InteractionError as e:
            self.soft_failure(f"Cart confirmation popup not found: {e}")
            return False
        self.engine.wait_for_seconds(CONFIRMATION_SETTLE_SECONDS)
        return True

    def set_quantity(self, quantity: str) -> bool:
        """Set the quantity field; returns False when the page has none."""
        if not self.engine.is_present(self.QUANTITY):
            self.soft_failure(f"Quantity control not present, keeping default quantity (wanted {quantity})")
            return False
        try:
            self.engine.clear_and_type(self.QUANTITY, quantity)
        except InteractionError as e:
            self.soft_failure(f"Could not set quantity to {quantity}: {e}")
            return False
        logger.debug(f"[pages] quantity set to {quantity}")
        return True

    def get_product_price(self) -> str:
        try:
            return self.engine.get_text(self.PRICE)
        except InteractionError:
            logger.debug("[pages] price element missing, returning sentinel")
            return PRICE_NOT_AVAILABLE

    def is_add_to_cart_button_displayed(self) -> bool:
        return self.engine.is_displayed(self.ADD_TO_CART_BUTTON)
