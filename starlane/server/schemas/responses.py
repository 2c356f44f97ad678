"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    day: int
    location: str
    tripPhase: str  # noqa: N815
    isGameOver: bool  # noqa: N815
    gameOverReason: str | None = None  # noqa: N815
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    seed: int
    state: dict


class RoutesResponse(BaseModel):
    """Quotes for every destination reachable from the current location."""

    gameId: str  # noqa: N815
    origin: str
    routes: list[dict]


class TravelResponse(BaseModel):
    """Result of a travel request or a resumed trip."""

    outcome: str
    block: str | None = None
    message: str = ""
    quote: dict | None = None
    event: dict | None = None
    notices: list[str] = Field(default_factory=list)
    presentation: list[dict] = Field(default_factory=list)
    state: dict


class ChoiceResponse(BaseModel):
    """Result of an event choice."""

    eventId: str  # noqa: N815
    choiceId: str  # noqa: N815
    outcomeId: str | None = None  # noqa: N815
    title: str
    text: str
    effects: list[dict] = Field(default_factory=list)
    presentation: list[dict] = Field(default_factory=list)
    state: dict


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    details: dict | None = None
