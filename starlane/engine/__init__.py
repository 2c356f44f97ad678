"""Travel engine components."""

from .collaborators import (
    Collaborators,
    DockingSync,
    MissionService,
    NewsTicker,
    Presentation,
    RecordingPresentation,
)
from .events import EventEngine, EventResolution, TriggerOutcome, TriggerResult
from .executor import TravelBlock, TravelExecutor, TravelOutcome, TravelResult
from .modifiers import TravelQuote, compute_quote
from .planner import TravelPlanner
from .routes import build_route_table
from .travel_service import TravelService

__all__ = [
    "Collaborators",
    "DockingSync",
    "MissionService",
    "NewsTicker",
    "Presentation",
    "RecordingPresentation",
    "EventEngine",
    "EventResolution",
    "TriggerOutcome",
    "TriggerResult",
    "TravelBlock",
    "TravelExecutor",
    "TravelOutcome",
    "TravelResult",
    "TravelQuote",
    "compute_quote",
    "TravelPlanner",
    "build_route_table",
    "TravelService",
]
