from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmptyCartPolicy(str, Enum):
    """What happens to the persisted cart when removals leave it empty.

    CLEAR drops the stored copy at once. RETAIN leaves the last non-empty
    snapshot in storage until an explicit ``clear()`` or a completed checkout.
    """

    CLEAR = "clear"
    RETAIN = "retain"


class StorefrontSettings(BaseSettings):
    """Settings for the storefront client, read from ``MAEVA_*`` variables or ``.env``."""

    api_base_url: str = Field(default="http://localhost:8000", description="Base URL of the MAEVA API")
    storage_path: str | None = Field(default=None, description="JSON file backing local storage; in-memory if unset")
    cart_key: str = Field(default="cart")
    last_order_key: str = Field(default="lastOrder")
    wishlist_key: str = Field(default="wishlist")
    max_quantity_per_change: int = Field(default=20, ge=1)
    empty_cart_policy: EmptyCartPolicy = Field(default=EmptyCartPolicy.CLEAR)
    request_timeout: float = Field(default=30.0, gt=0, description="Seconds before an API call is abandoned")

    model_config = SettingsConfigDict(
        env_prefix="MAEVA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
