"""Shipping options offered at checkout.

Shared between the ordering backend (which publishes the list) and the
storefront client (which lets the shopper pick one). Prices are flat, in DZD.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ShippingOption:
    id: str
    name: str
    price: float
    days: str

    def to_dict(self) -> dict:
        return asdict(self)


SHIPPING_OPTIONS: tuple[ShippingOption, ...] = (
    ShippingOption(id="standard", name="Livraison standard", price=500, days="3-5 jours ouvrables"),
    ShippingOption(id="express", name="Livraison express", price=1000, days="1-2 jours ouvrables"),
    ShippingOption(id="free", name="Livraison gratuite", price=0, days="5-7 jours ouvrables"),
)

DEFAULT_SHIPPING_OPTION_ID = "standard"


def get_shipping_option(option_id: str) -> ShippingOption:
    """Return the option with the given id, or raise ``KeyError``."""
    for option in SHIPPING_OPTIONS:
        if option.id == option_id:
            return option
    raise KeyError(option_id)
