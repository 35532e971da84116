from ..automation.types import Locator
from .base_page import BasePage


class HomePage(BasePage):
    SEARCH_BOX = Locator.id("twotabsearchtextbox")
    SEARCH_BUTTON = Locator.id("nav-search-submit-button")
    ACCOUNT_LIST = Locator.id("nav-link-accountList")

    def navigate_to_home(self, url: str) -> None:
        self.engine.navigate_to(url)

    def search_product(self, product_name: str) -> None:
        """Type the product name into the search box and submit.

        Missing search controls are a hard failure.
        """
        self.engine.clear_and_type(self.SEARCH_BOX, product_name)
        self.engine.click(self.SEARCH_BUTTON)

    def is_search_box_displayed(self) -> bool:
        return self.engine.is_displayed(self.SEARCH_BOX)

    def is_account_list_displayed(self) -> bool:
        return self.engine.is_displayed(self.ACCOUNT_LIST)
