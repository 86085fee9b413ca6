"""Domain models for delivery activity, cash movements and the courier directory."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional


ALL = "All"


@dataclass(frozen=True, slots=True)
class Area:
    """A pincode served by the operator with its billing rate."""

    code: str
    name: str
    company_rate: float
    courier_rate: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Courier:
    """A delivery boy listed in the operator's directory."""

    id: str
    name: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class DeliveryEntry:
    """One courier's recorded activity for a day, with counters per area."""

    id: str
    date: datetime
    courier_name: str
    delivered: Mapping[str, int] = field(default_factory=dict)
    returned: Mapping[str, int] = field(default_factory=dict)
    rvp: int = 0
    expected_cod: float = 0.0
    actual_cod_collected: float = 0.0
    cod_shortage_reason: Optional[str] = None
    on_spot_advance: float = 0.0
    courier_id: Optional[str] = None

    @property
    def total_delivered(self) -> int:
        return sum(count or 0 for count in self.delivered.values())

    @property
    def total_returned(self) -> int:
        return sum(count or 0 for count in self.returned.values())

    @property
    def areas(self) -> tuple[str, ...]:
        return tuple(sorted(set(self.delivered) | set(self.returned)))


@dataclass(frozen=True, slots=True)
class AdvancePayment:
    """Cash advanced to a courier outside of a delivery entry."""

    id: str
    date: datetime
    courier_name: str
    amount: float
    courier_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CompanyCodPayment:
    """COD cash remitted by the operator to the contracting company."""

    id: str
    date: datetime
    amount: float
    notes: Optional[str] = None


@dataclass(frozen=True, slots=True)
class OwnerExpense:
    """An operator-level business cost."""

    id: str
    date: datetime
    amount: float
    description: str = ""
