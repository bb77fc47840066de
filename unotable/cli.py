"""CLI entry point."""

from __future__ import annotations

import logging
import random
from typing import Optional

import typer

from unotable.config import Settings

app = typer.Typer(help="UNO-style card game server")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-H", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    database: Optional[str] = typer.Option(None, "--database", "-d", help="SQLite file for profiles"),
    turn_timeout: Optional[float] = typer.Option(
        None, "--turn-timeout", "-t", help="Seconds a player has to act before a forced draw"
    ),
    conceal_hands: Optional[bool] = typer.Option(
        None, "--conceal-hands/--show-hands", help="Hide opponents' hands in state broadcasts"
    ),
) -> None:
    """Run the websocket game server."""
    import uvicorn

    from unotable.transport import create_app

    settings = Settings.from_env()
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if database is not None:
        settings.database = database
    if turn_timeout is not None:
        settings.turn_timeout = turn_timeout
    if conceal_hands is not None:
        settings.conceal_hands = conceal_hands

    _configure_logging(settings.log_level)
    typer.echo(f"Serving on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


@app.command()
def simulate(
    players: int = typer.Option(4, "--players", "-n", min=2, max=4, help="Number of random agents"),
    rounds: int = typer.Option(1, "--rounds", "-r", min=1, help="Rounds to play"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every reaction"),
) -> None:
    """Play rounds between random agents in-process and print the wins."""
    from unotable.agents import RandomAgent
    from unotable.orchestration import SimulationRunner
    from unotable.services import InMemoryProfileStore

    _configure_logging("DEBUG" if verbose else "WARNING")
    rng = random.Random(seed)
    profiles = InMemoryProfileStore(rng=rng)
    player_ids = [f"player_{i}" for i in range(players)]

    for n in range(rounds):
        agents = {pid: RandomAgent(name=pid, rng=rng) for pid in player_ids}
        runner = SimulationRunner(agents, seed=rng.randint(0, 2**31 - 1), profiles=profiles)
        result = runner.run()
        typer.echo(f"Round {n + 1}: winner {result.winner or 'None (stalled)'} after {result.num_turns} turns")

    typer.echo("Wins:")
    for profile in sorted(profiles.get_profiles(player_ids), key=lambda p: -p.wins):
        typer.echo(f"  {profile.user_id} ({profile.name}): {profile.wins}")


if __name__ == "__main__":
    app()
