"""Worked examples built on the Dispatcher."""

from fluxdispatch.contrib.flight import (
    CityStore,
    CountryStore,
    FlightDestinationForm,
    FlightPriceStore,
)

__all__ = [
    "CityStore",
    "CountryStore",
    "FlightDestinationForm",
    "FlightPriceStore",
]
