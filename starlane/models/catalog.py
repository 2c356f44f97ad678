"""Read-only reference data: perks, upgrades, items, vessels, events, map."""

from dataclasses import dataclass, field

from .event import RandomEvent
from .location import LocationGraph
from .vessel import Vessel


@dataclass(frozen=True)
class Perk:
    """Player-level travel perk (e.g., navigator)."""

    id: str
    name: str
    fuel_mod: float = 1.0
    time_mod: float = 1.0
    hull_decay_mod: float = 1.0


@dataclass(frozen=True)
class Upgrade:
    """Installable vessel upgrade.

    Multipliers stack multiplicatively across installed upgrades; the
    additive fields stack by summing.
    """

    id: str
    name: str
    fuel_burn_mod: float = 1.0
    travel_time_mod: float = 1.0
    hull_resistance: float = 0.0  # Fraction of event hull damage absorbed
    event_chance_bonus: float = 0.0
    passive_repair_rate: float = 0.0  # Fraction of max hull restored per day


@dataclass(frozen=True)
class Item:
    """Cargo or consumable item."""

    id: str
    name: str
    consumable: bool = False


@dataclass
class Catalog:
    """All externally loaded reference data, keyed by stable string IDs."""

    graph: LocationGraph
    vessels: dict[str, Vessel] = field(default_factory=dict)
    perks: dict[str, Perk] = field(default_factory=dict)
    upgrades: dict[str, Upgrade] = field(default_factory=dict)
    items: dict[str, Item] = field(default_factory=dict)
    events: list[RandomEvent] = field(default_factory=list)

    def get_event(self, event_id: str) -> RandomEvent | None:
        for event in self.events:
            if event.id == event_id:
                return event
        return None

    def item_name(self, item_id: str) -> str:
        item = self.items.get(item_id)
        return item.name if item else item_id
