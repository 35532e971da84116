"""Page objects for the storefront under test."""

from .base_page import BasePage
from .home_page import HomePage
from .search_results_page import SearchResultsPage
from .product_details_page import ProductDetailsPage, PRICE_NOT_AVAILABLE

__all__ = [
    'BasePage',
    'HomePage',
    'SearchResultsPage',
    'ProductDetailsPage',
    'PRICE_NOT_AVAILABLE',
]
