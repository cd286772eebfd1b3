"""Integration: flight destination stores ordered through wait_for."""

from __future__ import annotations

import pytest

from fluxdispatch.contrib.flight import (
    _Store,
    DEFAULT_PRICE,
    FlightDestinationForm,
    default_city_for,
    price_for,
)
from fluxdispatch.core.dispatcher import Dispatcher


class TestFlightDestinationForm:
    def test_registration_order_is_reversed(self):
        form = FlightDestinationForm()
        assert form.dispatcher.tokens == [
            form.price_store.dispatch_token,
            form.city_store.dispatch_token,
            form.country_store.dispatch_token,
        ]

    def test_country_update_order(self):
        form = FlightDestinationForm()
        form.select_country("australia")

        assert form.handled_log == ["country", "city", "price"]
        assert form.country_store.country == "australia"
        assert form.city_store.city == "sydney"
        assert form.price_store.price == 1450

    def test_city_update_skips_country(self):
        form = FlightDestinationForm()
        form.select_country("france")
        form.select_city("lyon")

        assert form.handled_log == ["city", "price"]
        assert form.country_store.country == "france"
        assert form.city_store.city == "lyon"
        assert form.price_store.price == 540

    def test_unknown_country(self):
        form = FlightDestinationForm()
        form.select_country("atlantis")

        assert form.city_store.city is None
        assert form.price_store.price is None

    def test_uses_given_empty_dispatcher(self):
        dispatcher = Dispatcher()
        form = FlightDestinationForm(dispatcher)
        assert form.dispatcher is dispatcher
        assert len(dispatcher) == 3


class TestStoreBase:
    def test_base_store_is_abstract(self):
        with pytest.raises(TypeError):
            _Store([])


class TestLookups:
    def test_default_city(self):
        assert default_city_for("japan") == "tokyo"
        assert default_city_for(None) is None

    def test_price_fallback(self):
        assert price_for("reykjavik") == DEFAULT_PRICE
        assert price_for(None) is None
