"""One object holding every resource API for a UI session."""

from __future__ import annotations

from typing import Any, Callable

from dollerselectro.infrastructure.api.analytics import AnalyticsAPI
from dollerselectro.infrastructure.api.auth import AuthAPI
from dollerselectro.infrastructure.api.cart import CartAPI
from dollerselectro.infrastructure.api.chat import ChatAPI
from dollerselectro.infrastructure.api.client import ApiClient
from dollerselectro.infrastructure.api.customers import CustomersAPI
from dollerselectro.infrastructure.api.low_stock_alerts import LowStockAlertsAPI
from dollerselectro.infrastructure.api.messages import MessagesAPI
from dollerselectro.infrastructure.api.newsletter import NewsletterAPI
from dollerselectro.infrastructure.api.orders import OrdersAPI
from dollerselectro.infrastructure.api.products import ProductsAPI
from dollerselectro.infrastructure.api.promo_codes import PromoCodesAPI
from dollerselectro.infrastructure.api.quiz import QuizAPI


class ShopClient:
    """
    Shared ApiClient plus the resource APIs built on it.

    Auth calls go through a second client with the 401 refresh turned off; both
    clients read tokens from the same storage.
    """

    def __init__(
        self,
        storage: Any,
        base_url: str | None = None,
        timeout: float | None = None,
        on_unauthorized: Callable[[str], None] | None = None,
    ) -> None:
        self.storage = storage
        self.client = ApiClient(
            base_url=base_url,
            storage=storage,
            timeout=timeout,
            on_unauthorized=on_unauthorized,
        )
        self.auth = AuthAPI.for_storage(base_url=self.client.base_url, storage=storage, timeout=timeout)
        self.messages = MessagesAPI(self.client)
        self.chat = ChatAPI(self.client)
        self.products = ProductsAPI(self.client)
        self.orders = OrdersAPI(self.client)
        self.customers = CustomersAPI(self.client)
        self.analytics = AnalyticsAPI(self.client)
        self.low_stock_alerts = LowStockAlertsAPI(self.client)
        self.newsletter = NewsletterAPI(self.client)
        self.quiz = QuizAPI(self.client)
        self.promo_codes = PromoCodesAPI(self.client)
        self.cart = CartAPI(self.client)
