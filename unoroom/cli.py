"""CLI entry point."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from unoroom.config import Settings

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO room engine: run local rooms and bot games")


def _settings(log_level: Optional[str]) -> Settings:
    settings = Settings.from_env()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


def _make_store(settings: Settings, state_dir: Optional[Path]):
    from unoroom.room.store import InMemoryStateStore, JsonFileStateStore

    directory = state_dir or settings.state_dir
    if directory:
        return JsonFileStateStore(directory)
    return InMemoryStateStore()


def _bots(players: int, uno_call_rate: float, rng: random.Random) -> dict:
    from unoroom.agents.random_agent import RandomAgent

    if not 2 <= players <= 5:
        raise typer.BadParameter("players must be between 2 and 5")
    return {
        f"conn_{i}": RandomAgent(
            name=f"Bot{i + 1}",
            seed=rng.randint(0, 2**31 - 1),
            uno_call_rate=uno_call_rate,
        )
        for i in range(players)
    }


@app.command()
def simulate(
    players: int = typer.Option(4, "--players", "-n", help="Number of bots (2-5)"),
    uno_call_rate: float = typer.Option(
        0.8, "--uno-call-rate", help="Chance a bot remembers to call UNO"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    state_dir: Optional[Path] = typer.Option(
        None, "--state-dir", help="Persist the room as JSON under this directory"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Run a single bot game through a local room."""
    from unoroom.orchestration.game_runner import GameRunner

    settings = _settings(log_level)
    seed = seed if seed is not None else settings.seed
    rng = random.Random(seed)
    runner = GameRunner(
        _bots(players, uno_call_rate, rng),
        settings=settings,
        rng=random.Random(rng.randint(0, 2**31 - 1)),
        store=_make_store(settings, state_dir),
    )
    result = runner.run()
    typer.echo(f"Winner: {result.winner or 'None (unfinished)'}")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def tournament(
    players: int = typer.Option(2, "--players", "-n", help="Number of bots (2-5)"),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    uno_call_rate: float = typer.Option(0.8, "--uno-call-rate", help="Chance a bot remembers to call UNO"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Run a tournament."""
    from unoroom.orchestration.tournament import run_tournament

    settings = _settings(log_level)
    seed = seed if seed is not None else settings.seed
    bots = _bots(players, uno_call_rate, random.Random(seed))
    wins = run_tournament(bots, num_games=games, seed=seed, settings=settings)
    typer.echo("Tournament results:")
    for name, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {name}: {w} wins")


@app.command()
def replay(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON-lines event script"),
    room: str = typer.Option("replay", "--room", "-r", help="Room key"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    state_dir: Optional[Path] = typer.Option(None, "--state-dir", help="Persist the room as JSON under this directory"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Feed a scripted session through a room and print every outbound message.

    Each line is ``{"conn": id, "event": "connect"|"close"}`` or
    ``{"conn": id, "message": {...}}``.
    """
    from unoroom.room.dispatcher import RoomDispatcher
    from unoroom.room.messages import encode_server_message
    from unoroom.room.transport import LocalTransport

    settings = _settings(log_level)
    seed = seed if seed is not None else settings.seed
    transport = LocalTransport()
    dispatcher = RoomDispatcher(
        room,
        _make_store(settings, state_dir),
        transport,
        settings=settings,
        rng=random.Random(seed) if seed is not None else None,
    )

    for lineno, line in enumerate(script.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        try:
            event = json.loads(line)
            conn = event["conn"]
        except (json.JSONDecodeError, KeyError, TypeError):
            raise typer.BadParameter(f"line {lineno}: expected an object with a 'conn' field")

        kind = event.get("event")
        if kind == "connect":
            transport.attach(conn)
            dispatcher.on_connect(conn)
        elif kind == "close":
            transport.detach(conn)
            dispatcher.on_close(conn)
        elif "message" in event:
            dispatcher.on_message(conn, json.dumps(event["message"]))
        else:
            raise typer.BadParameter(f"line {lineno}: unknown event {kind!r}")

        for cid in transport.list_connections():
            for out in transport.drain(cid):
                typer.echo(f"{cid} <- {encode_server_message(out)}")


if __name__ == "__main__":
    app()
