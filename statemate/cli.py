"""
Statemate CLI - Command-line interface for the engine.

Usage:
    statemate play [--multiplayer] [--seed N]       Play in the terminal
    statemate simulate [--games N] [--seed N]       Autoplay and tally outcomes
    statemate serve [--host H] [--port P]           Run the HTTP API
"""

import argparse
from collections import Counter
import logging
import random
import sys

from .config import LOG_LEVEL


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Statemate - Political Crisis Round Engine",
        prog="statemate",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--multiplayer", action="store_true", help="Seat simulated ministers")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument("--name", default="You", help="Your display name")

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Autoplay games with random choices")
    sim_parser.add_argument("--games", type=int, default=100, help="Number of games")
    sim_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    sim_parser.add_argument("--multiplayer", action="store_true", help="Multiplayer engine")
    sim_parser.add_argument("--diversion", action="store_true", help="Play every round in diversion mode")
    sim_parser.add_argument("--idle", action="store_true", help="Never vote; only decay applies")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, input_fn=input):
    """Interactive game. Each prompt is one decision; 'wait' expires the round."""
    from .engine_core import RoundEngine, MultiplayerRoundEngine

    engine_cls = MultiplayerRoundEngine if args.multiplayer else RoundEngine
    engine = engine_cls(seed=args.seed, human_name=args.name)
    action_ids = engine.spec.action_ids

    print(f"{engine.spec.scenario_name}")
    print(f"Actions: {', '.join(action_ids)}")
    print("Other commands: wait, divert, quit\n")

    while engine.is_active:
        _print_round(engine)
        try:
            choice = input_fn("> ").strip().lower()
        except EOFError:
            choice = "quit"

        if choice == "quit":
            print("Game abandoned.")
            return
        if choice == "wait":
            _expire_round(engine)
            continue
        if choice == "divert":
            result = engine.set_diversion_mode(not engine.state.diversion)
            print(result.state_changes[0] if result.accepted else f"Ignored: {result.message}")
            continue

        result = engine.submit_action(choice)
        if not result.accepted:
            print(f"Ignored: {result.message}")
            continue
        for change in result.state_changes:
            print(f"  {change}")
        _expire_round(engine)

    _print_outcome(engine)


def cmd_simulate(args):
    """Autoplay N games and print the outcome distribution."""
    from .engine_core import RoundEngine, MultiplayerRoundEngine
    from .bots import RandomPolicy
    from .session import GameLoop
    from .games.crisis.spec import create_crisis_spec

    spec = create_crisis_spec()
    rng = random.Random(args.seed)
    engine_cls = MultiplayerRoundEngine if args.multiplayer else RoundEngine
    tiers: Counter = Counter()
    averages = []

    for _ in range(args.games):
        engine = engine_cls(spec=spec, rng=rng)
        policy = None if args.idle else RandomPolicy(rng=rng)
        report = GameLoop(engine, policy=policy, diversion=args.diversion).run()
        tiers[report.outcome.tier] += 1
        averages.append(report.outcome.average)

    print(f"Simulated {args.games} game(s)")
    for tier in spec.outcome_tiers:
        count = tiers[tier.tier]
        share = 100.0 * count / args.games if args.games else 0.0
        print(f"  {tier.tier:<10} {count:>5}  ({share:.1f}%)")
    if averages:
        print(f"Mean final average: {sum(averages) / len(averages):.1f}")


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("statemate.api.app:app", host=args.host, port=args.port)


def _print_round(engine):
    state = engine.state
    stats = ", ".join(f"{k} {v}" for k, v in state.stats.as_dict().items())
    print(f"Round {state.round_number}/{state.max_rounds} | CRISIS: {state.crisis.title}")
    print(f"  {state.crisis.description}")
    print(f"  Stats: {stats}")
    if state.is_multiplayer:
        print(f"  Diversion: {'on' if state.diversion else 'off'}")


def _expire_round(engine):
    """Tick until the round ends. The terminal has no wall clock."""
    # Votes are cleared on advance, so read them before ticking
    voters = engine.state.participants
    round_number = engine.state.round_number
    while engine.is_active and engine.state.round_number == round_number:
        engine.tick()
    for participant in voters:
        print(f"  {participant.name}: {participant.vote or 'no vote'}")


def _print_outcome(engine):
    outcome = engine.outcome
    stats = ", ".join(f"{k} {v}" for k, v in engine.state.stats.as_dict().items())
    print(f"\n{outcome.label.upper()} (average {outcome.average:.1f})")
    print(f"Final stats: {stats}")


if __name__ == "__main__":
    main()
