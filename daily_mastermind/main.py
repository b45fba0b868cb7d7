'''
Daily Mastermind API

Endpoints:
GET    /puzzle                                -> today's puzzle info (never the secret)
GET    /players/{player_id}/session           -> start or restore today's session
POST   /players/{player_id}/session/colors    -> select a colour
DELETE /players/{player_id}/session/colors    -> delete the last colour
POST   /players/{player_id}/session/submit    -> submit the current guess
POST   /players/{player_id}/session/reset     -> restart an unfinished attempt
GET    /players/{player_id}/session/share     -> share text once finished

Commands that are not valid right now (submit with 3 colours, anything after
the game ended, ...) are no-ops: 200 with "applied": false.
'''

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .db import SessionLocal
from .bootstrap_db import create_all    # dev-only: create tables
from .logging_config import configure_logging
from .puzzle import day_index, formatted_date, time_until_next_puzzle
from .repository import SqlStorage
from .session import CompletionEvent, Session, utc_now
from .share import feedback_pegs
from .store import SessionStore

from .schemas import (
    ColorOut,
    ColorRequest,
    CommandOut,
    CompletionOut,
    GuessRecordOut,
    PuzzleOut,
    SessionOut,
    ShareOut,
)

configure_logging(config.LOG_LEVEL)

app = FastAPI(title="Daily Mastermind API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# --- Dev convenience: auto-create tables locally ---
if config.APP_ENV == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()

# Process-wide registry of live sessions (one storage namespace per player)
live_sessions = SessionStore(lambda owner: SqlStorage(SessionLocal, owner))

# Tests override this to get a fixed clock and a throwaway DB
def get_sessions() -> SessionStore:
    return live_sessions

# ---------------- Helpers ----------------

def _to_session_out(player_id: str, session: Session) -> SessionOut:
    return SessionOut(
        player_id=player_id,
        day_index=session.day_index,
        date=formatted_date(session.puzzle_date),
        status=session.status,
        won=session.won,
        message=session.message,
        guesses=[
            GuessRecordOut(
                colors=list(r.colors),
                black=r.feedback.exact_matches,
                white=r.feedback.color_matches,
                pegs=feedback_pegs(r.feedback),
            )
            for r in session.guesses
        ],
        current_guess=list(session.current_guess),
        guesses_used=session.guesses_used,
        max_guesses=config.MAX_GUESSES,
        elapsed=session.elapsed_display(),
        # Keep UI behavior: when the game ends, include the secret
        secret=list(session.secret) if session.is_terminal else None,
        next_puzzle_in=session.next_puzzle_in() if session.is_terminal else None,
    )

def _to_completion_out(event: CompletionEvent | None) -> CompletionOut | None:
    if event is None:
        return None
    return CompletionOut(
        completed=event.completed,
        elapsed_seconds=event.elapsed_seconds,
        guesses_used=event.guesses_used,
        difficulty=event.difficulty,
    )

def _run(sessions: SessionStore, player_id: str, command: str, *args) -> CommandOut:
    session, applied, completion = sessions.apply(player_id, command, *args)
    return CommandOut(
        applied=applied,
        session=_to_session_out(player_id, session),
        completion=_to_completion_out(completion),
    )

# ---------------- Routes ----------------

@app.get("/puzzle", response_model=PuzzleOut, summary="Today's puzzle")
def get_puzzle() -> PuzzleOut:
    now = utc_now()
    return PuzzleOut(
        day_index=day_index(now, config.LAUNCH_DATE),
        date=formatted_date(now),
        code_length=config.CODE_LENGTH,
        max_guesses=config.MAX_GUESSES,
        palette=[
            ColorOut(index=i, name=c.name, letter=c.letter, hex=c.hex)
            for i, c in enumerate(config.PALETTE)
        ],
        next_puzzle_in=time_until_next_puzzle(now),
    )

@app.get("/players/{player_id}/session", response_model=SessionOut, summary="Start or restore today's session")
def get_session(
    player_id: str,
    sessions: SessionStore = Depends(get_sessions),
) -> SessionOut:
    return _to_session_out(player_id, sessions.get_or_start(player_id))

@app.post("/players/{player_id}/session/colors", response_model=CommandOut, summary="Select a colour")
def select_color(
    player_id: str,
    payload: ColorRequest,
    sessions: SessionStore = Depends(get_sessions),
) -> CommandOut:
    return _run(sessions, player_id, "select_color", payload.color)

@app.delete("/players/{player_id}/session/colors", response_model=CommandOut, summary="Delete the last colour")
def delete_last(
    player_id: str,
    sessions: SessionStore = Depends(get_sessions),
) -> CommandOut:
    return _run(sessions, player_id, "delete_last")

@app.post("/players/{player_id}/session/submit", response_model=CommandOut, summary="Submit the current guess")
def submit(
    player_id: str,
    sessions: SessionStore = Depends(get_sessions),
) -> CommandOut:
    return _run(sessions, player_id, "submit")

@app.post("/players/{player_id}/session/reset", response_model=CommandOut, summary="Restart an unfinished attempt")
def reset(
    player_id: str,
    sessions: SessionStore = Depends(get_sessions),
) -> CommandOut:
    return _run(sessions, player_id, "reset")

@app.get("/players/{player_id}/session/share", response_model=ShareOut, summary="Shareable result text")
def share(
    player_id: str,
    sessions: SessionStore = Depends(get_sessions),
) -> ShareOut:
    session = sessions.get_or_start(player_id)
    if not session.is_terminal:
        raise HTTPException(status_code=409, detail="Game not finished. Nothing to share yet.")
    return ShareOut(text=session.share_text())
