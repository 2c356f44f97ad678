"""Reference data loading.

The catalog (map, vessels, perks, upgrades, items, events) lives in a JSON
file. It is validated with pydantic schemas and converted into the frozen
model dataclasses the engine works with.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..engine.routes import build_route_table
from ..models.catalog import Catalog, Item, Perk, Upgrade
from ..models.event import (
    Choice,
    Condition,
    ConditionKind,
    DynamicValue,
    Effect,
    EffectKind,
    Outcome,
    RandomEvent,
)
from ..models.game import Game
from ..models.location import Location, LocationGraph, TravelEdge
from ..models.vessel import Vessel, VesselState
from .constants import (
    DEFAULT_EVENT_WEIGHT,
    DOCKING_LOCATION_ID,
    RNG_SEED_DEFAULT,
    STARTING_CREDITS,
    STARTING_LOCATION_ID,
    STARTING_VESSEL_ID,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "catalog.json"


class DynamicValueSchema(BaseModel):
    base: float = 0
    scale_with: str | None = None
    factor: float = 1


class EffectSchema(BaseModel):
    type: str
    value: float | DynamicValueSchema = 0
    target: str | None = None


class ConditionSchema(BaseModel):
    type: str
    operator: str = "GTE"
    value: float | str | list[str] | DynamicValueSchema = 0
    target: str | None = None


class OutcomeSchema(BaseModel):
    id: str
    text: str
    title: str | None = None
    weight: float = Field(default=1, ge=0)
    effects: list[EffectSchema] = Field(default_factory=list)


class ChoiceSchema(BaseModel):
    id: str
    text: str
    result_text: str = ""
    requirements: list[ConditionSchema] = Field(default_factory=list)
    effects: list[EffectSchema] = Field(default_factory=list)
    outcomes: list[OutcomeSchema] = Field(default_factory=list)


class EventSchema(BaseModel):
    id: str
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    weight: float = Field(default=DEFAULT_EVENT_WEIGHT, ge=0)
    requirements: list[ConditionSchema] = Field(default_factory=list)
    choices: list[ChoiceSchema] = Field(min_length=1)


class LocationSchema(BaseModel):
    id: str
    name: str
    distance: float = Field(ge=0)


class RouteSchema(BaseModel):
    """Explicit directed edge."""

    model_config = ConfigDict(populate_by_name=True)

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    fuel_cost: float = Field(ge=0)
    time: float = Field(ge=0)


class VesselSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    max_fuel: float = Field(ge=0)
    max_health: float = Field(gt=0)
    cargo_capacity: int = Field(ge=0)
    attributes: list[str] = Field(default_factory=list)
    vessel_class: str = Field(default="C", alias="class")


class PerkSchema(BaseModel):
    id: str
    name: str
    fuel_mod: float = 1.0
    time_mod: float = 1.0
    hull_decay_mod: float = 1.0


class UpgradeSchema(BaseModel):
    id: str
    name: str
    fuel_burn_mod: float = 1.0
    travel_time_mod: float = 1.0
    hull_resistance: float = Field(default=0.0, ge=0, le=1)
    event_chance_bonus: float = 0.0
    passive_repair_rate: float = Field(default=0.0, ge=0)


class ItemSchema(BaseModel):
    id: str
    name: str
    consumable: bool = False


class CatalogFile(BaseModel):
    """Top-level layout of a catalog JSON file."""

    locations: list[LocationSchema] = Field(min_length=1)
    routes: list[RouteSchema] | None = None  # Derived from distances when absent
    vessels: list[VesselSchema] = Field(default_factory=list)
    perks: list[PerkSchema] = Field(default_factory=list)
    upgrades: list[UpgradeSchema] = Field(default_factory=list)
    items: list[ItemSchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


def _to_value(value):
    if isinstance(value, DynamicValueSchema):
        return DynamicValue(base=value.base, scale_with=value.scale_with, factor=value.factor)
    return value


def _to_effects(schemas: list[EffectSchema], owner: str) -> list[Effect]:
    effects = []
    for schema in schemas:
        try:
            kind = EffectKind(schema.type.lower())
        except ValueError:
            logger.warning(f"Unknown effect type '{schema.type}' in {owner}, skipping")
            continue
        effects.append(Effect(kind=kind, value=_to_value(schema.value), target=schema.target))
    return effects


def _to_conditions(schemas: list[ConditionSchema], owner: str) -> list[Condition]:
    conditions = []
    for schema in schemas:
        try:
            kind = ConditionKind(schema.type.lower())
        except ValueError:
            logger.warning(f"Unknown condition type '{schema.type}' in {owner}, skipping")
            continue
        value = _to_value(schema.value)
        if isinstance(value, list):
            value = tuple(value)
        conditions.append(
            Condition(kind=kind, operator=schema.operator, value=value, target=schema.target)
        )
    return conditions


def _to_event(schema: EventSchema) -> RandomEvent:
    choices = []
    for choice in schema.choices:
        owner = f"{schema.id}/{choice.id}"
        choices.append(
            Choice(
                id=choice.id,
                text=choice.text,
                result_text=choice.result_text,
                effects=_to_effects(choice.effects, owner),
                requirements=_to_conditions(choice.requirements, owner),
                outcomes=[
                    Outcome(
                        id=o.id,
                        text=o.text,
                        title=o.title,
                        weight=o.weight,
                        effects=_to_effects(o.effects, f"{owner}/{o.id}"),
                    )
                    for o in choice.outcomes
                ],
            )
        )
    return RandomEvent(
        id=schema.id,
        title=schema.title,
        description=schema.description,
        tags=frozenset(schema.tags),
        weight=schema.weight,
        requirements=_to_conditions(schema.requirements, schema.id),
        choices=choices,
    )


def catalog_from_dict(data: dict[str, Any]) -> Catalog:
    """Validate raw catalog data and build a Catalog.

    Args:
        data: Parsed catalog JSON

    Returns:
        Catalog ready for a Game

    Raises:
        pydantic.ValidationError: If the data does not match the schema
        ValueError: If a route references an unknown location
    """
    parsed = CatalogFile.model_validate(data)

    locations = [Location(id=l.id, name=l.name, distance=l.distance) for l in parsed.locations]
    if parsed.routes is None:
        edges = build_route_table(locations)
    else:
        known = {l.id for l in locations}
        edges = {}
        for route in parsed.routes:
            if route.from_id not in known or route.to_id not in known:
                raise ValueError(f"Route {route.from_id}->{route.to_id} references unknown location")
            edges[(route.from_id, route.to_id)] = TravelEdge(
                fuel_cost=route.fuel_cost, time=route.time
            )

    return Catalog(
        graph=LocationGraph(locations={l.id: l for l in locations}, edges=edges),
        vessels={
            v.id: Vessel(
                id=v.id,
                name=v.name,
                max_fuel=v.max_fuel,
                max_health=v.max_health,
                cargo_capacity=v.cargo_capacity,
                attributes=tuple(v.attributes),
                vessel_class=v.vessel_class,
            )
            for v in parsed.vessels
        },
        perks={p.id: Perk(**p.model_dump()) for p in parsed.perks},
        upgrades={u.id: Upgrade(**u.model_dump()) for u in parsed.upgrades},
        items={i.id: Item(**i.model_dump()) for i in parsed.items},
        events=[_to_event(e) for e in parsed.events],
    )


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load the catalog from a JSON file (the bundled catalog by default)."""
    path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    with open(path) as f:
        data = json.load(f)
    catalog = catalog_from_dict(data)
    logger.debug(
        f"Loaded catalog from {path}: {len(catalog.graph.locations)} locations, "
        f"{len(catalog.vessels)} vessels, {len(catalog.events)} events"
    )
    return catalog


def new_game(
    catalog: Catalog,
    seed: int = RNG_SEED_DEFAULT,
    vessel_id: str = STARTING_VESSEL_ID,
    location_id: str = STARTING_LOCATION_ID,
    credits: int = STARTING_CREDITS,
) -> Game:
    """Create a fresh game with one fully fuelled vessel.

    Args:
        catalog: Reference data
        seed: RNG seed
        vessel_id: Starting vessel
        location_id: Starting location
        credits: Starting credits

    Returns:
        New Game on day 1

    Raises:
        ValueError: If the vessel or location is unknown
    """
    vessel = catalog.vessels.get(vessel_id)
    if vessel is None:
        raise ValueError(f"Unknown vessel: {vessel_id}")

    game = Game(seed=seed, catalog=catalog, current_location_id=location_id)
    game.player.credits = credits
    game.player.add_vessel(vessel_id, VesselState.full(vessel))
    if catalog.graph.has_location(DOCKING_LOCATION_ID):
        game.docking_location_id = DOCKING_LOCATION_ID
    return game
