"""Balance and configuration constants.

These are data, not engine contract: tests that depend on an exact value
import it from here rather than hard-coding it.
"""

# Hull wear
HULL_DECAY_PER_TRAVEL_DAY = 1 / 7  # Flat hull damage per travel day
HULL_WARNING_PERCENT = 30
HULL_CRITICAL_PERCENT = 15

# Random events
RANDOM_EVENT_CHANCE = 0.07  # Base probability per trip
EVENT_CHANCE_PER_DISTANCE = 0.0001  # Added per unit of distance travelled
EVENT_CONTEXT_TAG = "space"  # Catalog tag for in-transit events
DEFAULT_EVENT_WEIGHT = 10

# Innate traits
SOLAR_SAIL_CHANCE = 0.15
TRAVELLER_TRIP_INTERVAL = 20  # Full restore every N trips
SELF_REPAIR_RATE = 0.10  # Fraction of max hull restored on arrival
FUEL_SCOOP_RATE = 0.15  # Fraction of max fuel restored on arrival
FUEL_RECLAIM_RATE = 0.25  # Fraction of fuel just spent that is refunded

# Consumables
INSTANT_DRIVE_ITEM_ID = "folded_drive"

# Route derivation (used when the catalog lists no explicit routes)
FUEL_PER_DISTANCE = 0.5
DAYS_PER_DISTANCE = 0.05
MIN_ROUTE_DAYS = 1

# Docking simulation
DOCKING_LOCATION_ID = "sol_station"

# Screens
SCREEN_MARKET = "market"
SCREEN_NAVIGATION = "navigation"

# Player defaults
STARTING_CREDITS = 5000
STARTING_LOCATION_ID = "earth"
STARTING_VESSEL_ID = "wanderer"

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
