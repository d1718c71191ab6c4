"""REST client for the DollersElectro backend and its per-resource wrappers."""

from dollerselectro.infrastructure.api.client import ApiClient, ApiError, error_message
from dollerselectro.infrastructure.api.shop import ShopClient

__all__ = ["ApiClient", "ApiError", "ShopClient", "error_message"]
