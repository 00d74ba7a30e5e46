"""
Console front end for the round engine.

Plays rounds at a `RoundTable` from the terminal, carrying the balance from
one round into the next.
"""

import argparse
import logging
import os
from typing import Callable, List, Optional

from roundsharp.engine import RoundTable
from roundsharp.errors import RoundError
from roundsharp.state import Round, RoundPhase

logger = logging.getLogger(__name__)

OUTCOME_MESSAGES = {
    "player_blackjack": "Blackjack! You win 3:2.",
    "player_wins": "You win!",
    "push": "Push. Your wager is returned.",
    "dealer_wins": "Dealer wins.",
    "dealer_blackjack": "Dealer has blackjack.",
}


def render(round_: Round) -> str:
    """Format the player-visible view of a round."""
    view = round_.view()
    player = view["player"]
    dealer = view["dealer"]
    lines = [
        f"Dealer: {' '.join(dealer['hand'])}  ({dealer['value']})",
        f"You:    {' '.join(player['hand'])}  ({player['value']}"
        f"{', soft' if player['is_soft'] else ''})",
        f"Wager: {view['wager']}  Balance: {view['bankroll']}",
    ]
    return "\n".join(lines)


def play_round(
    table: RoundTable,
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> Optional[Round]:
    """
    Play one round interactively.

    Returns:
        The finished round, or None if the player quit at the betting prompt
    """
    read = read or input
    write = write or print
    balance = table.wallet()
    round_ = None
    while round_ is None:
        answer = read(f"Balance {balance}. Your bet (q to quit): ").strip().lower()
        if answer in ("q", "quit"):
            return None
        try:
            bet = int(answer)
        except ValueError:
            write(f"Not a number: {answer!r}")
            continue
        try:
            round_ = table.open_round(bet)
        except RoundError as exc:
            write(str(exc))

    while round_.phase is RoundPhase.PLAYER_TURN:
        write(render(round_))
        action = read("(h)it or (s)tand? ").strip().lower()
        if action in ("h", "hit"):
            table.hit(round_.id)
        elif action in ("s", "stand"):
            table.stand(round_.id)
        else:
            write("Please answer h or s.")

    write(render(round_))
    write(OUTCOME_MESSAGES[round_.outcome.value])
    return round_


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function to start the game.

    Parses command-line arguments, sets up logging and plays rounds until the
    player quits or the requested number of rounds has been played.
    """
    parser = argparse.ArgumentParser(description="Play blackjack rounds in the console.")
    parser.add_argument(
        "--bankroll", type=int, default=1000, help="Opening and fallback bankroll"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed the shuffle for a repeatable game"
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=0,
        help="Number of rounds to play; 0 plays until you quit",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("ROUNDSHARP_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (defaults to $ROUNDSHARP_LOG_LEVEL or WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    table = RoundTable({"default_bankroll": args.bankroll, "seed": args.seed})
    played = 0
    while args.rounds <= 0 or played < args.rounds:
        if play_round(table) is None:
            break
        played += 1

    logger.info("Played %d rounds, final balance %d", played, table.wallet())
    print(f"Final balance: {table.wallet()}")


if __name__ == "__main__":
    main()
