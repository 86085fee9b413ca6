"""Per-area compensation and billing rates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..config import Settings, settings
from ..models.domain import Area


@dataclass(frozen=True, slots=True)
class AreaRates:
    courier_rate: float
    company_rate: float


UNKNOWN_AREA_RATES = AreaRates(courier_rate=0.0, company_rate=0.0)


class RateTable:
    """Static rate lookup keyed by area code.

    Unknown areas resolve to zero rates instead of raising so that entries
    recorded against a retired or mistyped pincode add nothing to payout or
    profit rather than breaking a whole report.
    """

    def __init__(self, areas: Iterable[Area], *, courier_rate: float, rvp_area: str) -> None:
        self.courier_rate = float(courier_rate)
        self.rvp_area = rvp_area
        self._areas: dict[str, Area] = {area.code: area for area in areas}

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "RateTable":
        config = config or settings
        areas = [
            Area(
                code=code,
                name=config.area_names.get(code, code),
                company_rate=rate,
                courier_rate=config.courier_rate_overrides.get(code),
            )
            for code, rate in config.area_rates.items()
        ]
        return cls(areas, courier_rate=config.courier_rate, rvp_area=config.rvp_area)

    @property
    def areas(self) -> tuple[Area, ...]:
        return tuple(self._areas.values())

    def area(self, code: str) -> Optional[Area]:
        return self._areas.get(code)

    def rates_for(self, code: str) -> AreaRates:
        area = self._areas.get(code)
        if area is None:
            return UNKNOWN_AREA_RATES
        courier_rate = area.courier_rate if area.courier_rate is not None else self.courier_rate
        return AreaRates(courier_rate=courier_rate, company_rate=area.company_rate)

    def rvp_rates(self) -> AreaRates:
        return self.rates_for(self.rvp_area)

    def display_name(self, code: str) -> str:
        area = self._areas.get(code)
        return area.name if area else code

    def as_dict(self) -> Mapping[str, dict]:
        return {
            code: {
                "name": area.name,
                "courier_rate": self.rates_for(code).courier_rate,
                "company_rate": area.company_rate,
            }
            for code, area in self._areas.items()
        }


def default_rate_table() -> RateTable:
    return RateTable.from_settings(settings)
