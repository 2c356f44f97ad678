"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, Field


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    vessel: str | None = Field(default=None, description="Starting vessel ID")
    alwaysEvent: bool = Field(  # noqa: N815
        default=False, description="Trigger a random event on every trip (debug)"
    )


class TravelRequest(BaseModel):
    """Request to travel to a location."""

    destination: str = Field(description="Destination location ID")
    useInstantDrive: bool = Field(  # noqa: N815
        default=False, description="Spend one instant drive instead of fuel and days"
    )


class ChoiceRequest(BaseModel):
    """Player's choice for the event currently shown."""

    choice: str = Field(min_length=1, description="Choice ID")
