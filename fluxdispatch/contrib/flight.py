"""Flight destination stores: a chained ``wait_for`` example.

Three stores react to the same actions:

- ``CountryStore`` tracks the selected country.
- ``CityStore`` tracks the selected city, and picks the country's default
  city when the country changes (waits for ``CountryStore``).
- ``FlightPriceStore`` tracks the base price for the selection and waits
  for ``CityStore`` on both country and city updates.

A ``country-update`` payload is therefore handled in the order
country -> city -> price, whatever order the stores registered in.
"""

from __future__ import annotations

import abc
import logging

from fluxdispatch.core.dispatcher import Dispatcher
from fluxdispatch.models.callbacks import Payload

logger = logging.getLogger(__name__)

COUNTRY_UPDATE = "country-update"
CITY_UPDATE = "city-update"

DEFAULT_CITIES: dict[str, str] = {
    "australia": "sydney",
    "france": "paris",
    "japan": "tokyo",
    "united-kingdom": "london",
    "usa": "new-york",
}

BASE_PRICES: dict[str, int] = {
    "sydney": 1450,
    "melbourne": 1390,
    "paris": 620,
    "lyon": 540,
    "tokyo": 1120,
    "osaka": 1080,
    "london": 480,
    "new-york": 710,
}

# Fallback fare for cities without a published base price
DEFAULT_PRICE = 999


class _Store(abc.ABC):
    """Common store plumbing: a dispatch token and a handling log."""

    name = "store"

    def __init__(self, handled_log: list[str]) -> None:
        self._handled_log = handled_log
        self._dispatcher: Dispatcher | None = None
        self.dispatch_token: str | None = None

    def attach(self, dispatcher: Dispatcher) -> str:
        """Register this store's callback and keep the token."""
        self._dispatcher = dispatcher
        self.dispatch_token = dispatcher.register(self.on_payload)
        return self.dispatch_token

    @abc.abstractmethod
    def on_payload(self, payload: Payload) -> None:
        """React to a dispatched payload."""

    def _record(self) -> None:
        self._handled_log.append(self.name)


class CountryStore(_Store):
    name = "country"

    def __init__(self, handled_log: list[str]) -> None:
        super().__init__(handled_log)
        self.country: str | None = None

    def on_payload(self, payload: Payload) -> None:
        if payload.get("action_type") == COUNTRY_UPDATE:
            self.country = payload["selected_country"]
            self._record()


class CityStore(_Store):
    name = "city"

    def __init__(self, handled_log: list[str], country_store: CountryStore) -> None:
        super().__init__(handled_log)
        self.city: str | None = None
        self._country_store = country_store

    def on_payload(self, payload: Payload) -> None:
        action = payload.get("action_type")
        if action == CITY_UPDATE:
            self.city = payload["selected_city"]
            self._record()
        elif action == COUNTRY_UPDATE:
            self._dispatcher.wait_for([self._country_store.dispatch_token])
            self.city = default_city_for(self._country_store.country)
            self._record()


class FlightPriceStore(_Store):
    name = "price"

    def __init__(self, handled_log: list[str], city_store: CityStore) -> None:
        super().__init__(handled_log)
        self.price: int | None = None
        self._city_store = city_store

    def on_payload(self, payload: Payload) -> None:
        if payload.get("action_type") in (COUNTRY_UPDATE, CITY_UPDATE):
            self._dispatcher.wait_for([self._city_store.dispatch_token])
            self.price = price_for(self._city_store.city)
            self._record()


def default_city_for(country: str | None) -> str | None:
    """Return the default city for a country, or None if unknown."""
    if country is None:
        return None
    return DEFAULT_CITIES.get(country)


def price_for(city: str | None) -> int | None:
    if city is None:
        return None
    return BASE_PRICES.get(city, DEFAULT_PRICE)


class FlightDestinationForm:
    """Wires the three stores to one dispatcher.

    The price store registers first and the country store last, so the
    broadcast order alone would get every ``country-update`` wrong; the
    ``wait_for`` chain is what produces the correct result.
    """

    def __init__(self, dispatcher: Dispatcher | None = None) -> None:
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self.handled_log: list[str] = []
        self.country_store = CountryStore(self.handled_log)
        self.city_store = CityStore(self.handled_log, self.country_store)
        self.price_store = FlightPriceStore(self.handled_log, self.city_store)
        for store in (self.price_store, self.city_store, self.country_store):
            store.attach(self.dispatcher)

    def select_country(self, country: str) -> None:
        logger.info("Selecting country %s", country)
        self.handled_log.clear()
        self.dispatcher.dispatch(
            {"action_type": COUNTRY_UPDATE, "selected_country": country}
        )

    def select_city(self, city: str) -> None:
        logger.info("Selecting city %s", city)
        self.handled_log.clear()
        self.dispatcher.dispatch({"action_type": CITY_UPDATE, "selected_city": city})
