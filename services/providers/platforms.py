"""Adapters for the supported bus booking platforms."""

from __future__ import annotations

from typing import TYPE_CHECKING

from services.providers.adapter import GatewayPlatformAdapter
from services.providers.base import ProviderId

if TYPE_CHECKING:
    from datetime import date


class AbhiBusAdapter(GatewayPlatformAdapter):
    """AbhiBus search."""

    provider = ProviderId.ABHIBUS
    endpoint = "/AbhiBusAPI/bus-data/"


class MakeMyTripAdapter(GatewayPlatformAdapter):
    """MakeMyTrip search. The platform expects dates as dd-MM-yyyy."""

    provider = ProviderId.MAKEMYTRIP
    endpoint = "/MakeMyTripAPI/mmt-bus/"

    def _format_date(self, travel_date: date) -> str:
        return travel_date.strftime("%d-%m-%Y")


class PaytmAdapter(GatewayPlatformAdapter):
    """Paytm search."""

    provider = ProviderId.PAYTM
    endpoint = "/PaytmBusAPI/paytm-bus/"


class GoibiboAdapter(GatewayPlatformAdapter):
    """Goibibo search."""

    provider = ProviderId.GOIBIBO
    endpoint = "/GoibiboAPI/goibibo-bus/"


PLATFORM_ADAPTERS: dict[ProviderId, type[GatewayPlatformAdapter]] = {
    ProviderId.ABHIBUS: AbhiBusAdapter,
    ProviderId.MAKEMYTRIP: MakeMyTripAdapter,
    ProviderId.PAYTM: PaytmAdapter,
    ProviderId.GOIBIBO: GoibiboAdapter,
}
