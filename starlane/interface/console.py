"""Console rendering for the text front end."""

from ..engine.collaborators import Presentation
from ..engine.executor import TravelOutcome, TravelResult
from ..engine.travel_service import TravelService
from ..models.event import EventPrompt
from ..models.game import Game

# Report prefixes for visual differentiation
REPORT_EMOJIS = {
    "modal": "📣",
    "event": "✨",
    "result": "📜",
    "travel": "🚀",
    "alert": "⚠️",
}


class ConsolePresentation(Presentation):
    """Prints presentation calls to stdout."""

    def queue_modal(self, kind, title, body, on_dismiss=None, **opts):
        print(f"\n{REPORT_EMOJIS['modal']} {title}")
        print(f"   {body}")

    def show_random_event_modal(self, prompt: EventPrompt, on_choice):
        event = prompt.event
        print(f"\n{REPORT_EMOJIS['event']} {event.title}")
        if event.description:
            print(f"   {event.description}")
        for index, choice in enumerate(event.choices, start=1):
            suffix = "  (unavailable)" if choice.id in prompt.disabled_choice_ids else ""
            print(f"   {index}. {choice.text}{suffix}")
        print("   Type a number to choose.")

    def show_event_result_modal(self, title, body, on_continue):
        print(f"\n{REPORT_EMOJIS['result']} {title}")
        print(f"   {body}")
        print("   Type 'continue' to resume your trip.")

    def show_travel_animation(self, from_loc, to_loc, quote, damage_percent, on_done):
        print(
            f"\n{REPORT_EMOJIS['travel']} {from_loc.name} -> {to_loc.name}: "
            f"{quote.time} days, {quote.fuel_cost} fuel, hull -{damage_percent:.1f}%"
        )
        on_done()

    def create_floating_text(self, text, pos=None, color=None):
        print(f"{REPORT_EMOJIS['alert']}  {text}")


def show_status(game: Game) -> None:
    """Print the clock, location and active vessel."""
    location = game.catalog.graph.get(game.current_location_id)
    print(f"\nDay {game.day} at {location.name}   Credits: {game.player.credits:,}")
    vessel, state = game.active_vessel(), game.active_state()
    if vessel is None or state is None:
        print("No active vessel.")
        return
    print(
        f"{vessel.name}  Fuel {state.fuel:.0f}/{vessel.max_fuel:.0f}  "
        f"Hull {state.health:.0f}/{vessel.max_health:.0f}  "
        f"Cargo {game.player.cargo_used()}/{vessel.cargo_capacity}"
    )
    if vessel.attributes:
        print(f"Traits: {', '.join(vessel.attributes)}")
    inventory = game.player.active_inventory()
    for item_id, quantity in sorted(inventory.items()):
        print(f"  {game.catalog.item_name(item_id)}: {quantity}")
    if len(game.player.owned_vessel_ids) > 1:
        print(f"Fleet: {', '.join(game.player.owned_vessel_ids)}")


def show_routes(service: TravelService) -> None:
    """Print every destination with its current quote."""
    graph = service.game.catalog.graph
    print("\nDestination        Fuel   Days")
    for destination_id, quote in service.routes():
        if quote is None:
            continue
        name = graph.get(destination_id).name
        print(f"  {name:<16} {quote.fuel_cost:>5}  {quote.time:>5}   ({destination_id})")


def show_result(result: TravelResult) -> None:
    """Print the outcome of a travel request that the modals did not cover."""
    if result.outcome is TravelOutcome.ARRIVED:
        print(f"{result.message} ({result.days} days, {result.fuel_spent} fuel)")
        for notice in result.notices:
            print(f"  {notice}")
    elif result.outcome is TravelOutcome.NO_OP:
        print("You are already here.")
