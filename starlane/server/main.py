"""FastAPI server for Starlane.

Provides an HTTP API to start games, travel, answer random events and resume
interrupted trips. Every response carries the presentation calls the engine
made while handling the request.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..engine.executor import TravelResult
from .schemas.requests import ChoiceRequest, CreateGameRequest, TravelRequest
from .schemas.responses import (
    ChoiceResponse,
    CreateGameResponse,
    ErrorResponse,
    GameStateResponse,
    RoutesResponse,
    TravelResponse,
)
from .session import GameSession, GameSessionManager, serialize_prompt, serialize_quote

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()

NOT_FOUND = {404: {"model": ErrorResponse}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Starlane server starting...")
    yield
    logger.info("Starlane server shutting down...")
    sessions.cleanup_all()


app = FastAPI(
    title="Starlane API",
    description="Web API for travel and random events in Starlane",
    version="0.1.0",
    lifespan=lifespan,
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _travel_response(session: GameSession, result: TravelResult) -> TravelResponse:
    return TravelResponse(
        outcome=result.outcome.value,
        block=result.block.value if result.block else None,
        message=result.message,
        quote=serialize_quote(result.quote) or None,
        event=serialize_prompt(result.prompt),
        notices=result.notices,
        presentation=session.drain_presentation(),
        state=session.get_state(),
    )


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Starlane",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new game.

    Example:
        POST /api/games
        {"seed": 42, "vessel": "wanderer", "alwaysEvent": false}
    """
    try:
        session = sessions.create_session(
            seed=request.seed, vessel_id=request.vessel, always_event=request.alwaysEvent
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CreateGameResponse(gameId=session.id, seed=session.game.seed, state=session.get_state())


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse, responses=NOT_FOUND)
async def get_game_state(game_id: str):
    """Get current game state."""
    session = _get_session(game_id)
    game = session.game
    return GameStateResponse(
        gameId=game_id,
        day=game.day,
        location=game.current_location_id,
        tripPhase=game.trip.phase.value,
        isGameOver=game.is_game_over,
        gameOverReason=game.game_over_reason,
        state=session.get_state(),
    )


@app.get("/api/games/{game_id}/routes", response_model=RoutesResponse, responses=NOT_FOUND)
async def get_routes(game_id: str):
    """List destinations reachable from the current location with their quotes."""
    session = _get_session(game_id)
    return RoutesResponse(
        gameId=game_id, origin=session.game.current_location_id, routes=session.routes()
    )


@app.post("/api/games/{game_id}/travel", response_model=TravelResponse, responses=NOT_FOUND)
async def travel(game_id: str, request: TravelRequest):
    """Request a trip.

    Blocked requests are not HTTP errors: the response carries outcome
    "blocked" with the reason, and the game state is unchanged.

    Example:
        POST /api/games/game-abc123/travel
        {"destination": "mars"}
    """
    session = _get_session(game_id)
    result = session.travel(request.destination, request.useInstantDrive)
    return _travel_response(session, result)


@app.post("/api/games/{game_id}/choice", response_model=ChoiceResponse, responses=NOT_FOUND)
async def choose(game_id: str, request: ChoiceRequest):
    """Answer the random event currently shown."""
    session = _get_session(game_id)
    try:
        resolution = session.choose(request.choice)
    except LookupError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ChoiceResponse(
        eventId=resolution.event_id,
        choiceId=resolution.choice_id,
        outcomeId=resolution.outcome_id,
        title=resolution.title,
        text=resolution.text,
        effects=[
            asdict(effect) | {"kind": effect.kind.value} for effect in resolution.effects
        ],
        presentation=session.drain_presentation(),
        state=session.get_state(),
    )


@app.post("/api/games/{game_id}/continue", response_model=TravelResponse, responses=NOT_FOUND)
async def continue_trip(game_id: str):
    """Resume a trip after its event result was shown."""
    session = _get_session(game_id)
    try:
        result = session.resume()
    except LookupError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _travel_response(session, result)


@app.delete("/api/games/{game_id}", responses=NOT_FOUND)
async def delete_game(game_id: str):
    """Delete a game session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    raise HTTPException(status_code=404, detail="Game not found")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
