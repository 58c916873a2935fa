#!/usr/bin/env python3
"""Play the poker pot odds puzzle in the terminal."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cidzor.game.cards import Card, parse_cards
from cidzor.game.evaluator import best_five, describe
from cidzor.game.odds import Decision, evaluate_decision
from cidzor.game.puzzle import PuzzleConfig, PuzzleGenerator, PuzzleState, analyze_spot
from cidzor.logging_utils import setup_logging


def render_cards(cards: list[Card]) -> Text:
    """Cards as colored text, red suits in red."""
    text = Text()
    for i, card in enumerate(cards):
        if i:
            text.append(" ")
        text.append(f"[{card.pretty}]", style="bold red" if card.is_red else "bold")
    return text


def render_puzzle(console: Console, puzzle: PuzzleState) -> None:
    """Show the spot: hole cards, board, money, opponent's cards."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("You have", render_cards(puzzle.player))
    table.add_row("Board is", render_cards(puzzle.board))
    table.add_row("Pot", f"${puzzle.pot}")
    table.add_row("Opponent all-in", f"${puzzle.bet}")
    table.add_row("Opponent accidentally shows", render_cards(puzzle.opponent))

    title = "Poker Pot Odds Puzzle"
    if puzzle.is_fallback:
        title += " [yellow](unconstrained deal)[/]"
    console.print(Panel(table, title=title, expand=False))


def render_results(
    console: Console,
    puzzle: PuzzleState,
    decision: Decision,
    show_outs: bool,
) -> None:
    """Show pot odds, odds against and whether the decision was right."""
    result = evaluate_decision(
        decision, puzzle.outs.count, puzzle.pot, puzzle.bet, puzzle.outs.remaining
    )

    table = Table(title="Results", show_header=False)
    table.add_column(style="bold")
    table.add_column(justify="right")

    table.add_row("Pot odds ratio", f"{result.pot_odds_ratio:.2f}:1")
    table.add_row(
        "Pot odds",
        f"${puzzle.bet} / ${puzzle.pot + 2 * puzzle.bet} = {result.pot_odds_percentage:.1f}%",
    )
    table.add_row(
        "Odds against (outs)",
        f"{puzzle.outs.count} / {puzzle.outs.remaining} = {result.odds_against_percentage:.1f}%",
    )

    _, player_best = best_five(puzzle.player + puzzle.board)
    _, opponent_best = best_five(puzzle.opponent + puzzle.board)
    table.add_row(
        "Your hand",
        f"{describe(puzzle.player_score)} ({' '.join(c.pretty for c in player_best)})",
    )
    table.add_row(
        "Opponent's hand",
        f"{describe(puzzle.opponent_score)} ({' '.join(c.pretty for c in opponent_best)})",
    )
    console.print(table)

    if show_outs:
        outs = render_cards(puzzle.outs.cards) if puzzle.outs.cards else Text("none")
        console.print(Text("Outs: ").append_text(outs))
        if puzzle.outs.chops:
            console.print(Text("Chops: ").append_text(render_cards(puzzle.outs.chops)))

    console.print()
    console.print(f"Correct decision: [bold]{result.correct.value.upper()}[/]")
    console.print(f"Your decision: {result.decision.value.upper()}")
    console.print(f"Reasoning: {result.reasoning()}")
    if result.is_correct:
        console.print("[bold green]Correct![/]")
    else:
        console.print("[bold red]Not quite.[/]")


def parse_fixed_spot(spec: str) -> tuple[list[Card], list[Card], list[Card]]:
    """Parse 'P1P2 B1B2B3B4 O1O2' into (player, board, opponent)."""
    groups = spec.split()
    if len(groups) != 3:
        raise ValueError(
            f"Expected 3 card groups (player board opponent), got {len(groups)}"
        )
    player, board, opponent = (parse_cards(g) for g in groups)
    return player, board, opponent


def main():
    parser = argparse.ArgumentParser(
        description="Pot odds puzzle: call or fold an all-in on the turn"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible puzzle",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=1000,
        help="Deals to try before falling back (default: 1000)",
    )
    parser.add_argument(
        "--cards",
        help="Analyse a fixed spot instead, e.g. 'AsAh KsKh2d2c QsQh'",
    )
    parser.add_argument(
        "--pot",
        type=int,
        default=100,
        help="Pot for --cards (default: 100)",
    )
    parser.add_argument(
        "--bet",
        type=int,
        default=50,
        help="Opponent's all-in for --cards (default: 50)",
    )
    parser.add_argument(
        "--decision",
        choices=[d.value for d in Decision],
        help="Answer without prompting",
    )
    parser.add_argument(
        "--show-outs",
        action="store_true",
        help="List the out cards with the results",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()
    setup_logging(args.verbose, console=Console(stderr=True))

    try:
        if args.cards:
            player, board, opponent = parse_fixed_spot(args.cards)
            puzzle = analyze_spot(player, board, opponent, args.pot, args.bet)
        else:
            config = PuzzleConfig(max_attempts=args.max_attempts, seed=args.seed)
            puzzle = PuzzleGenerator(config).generate()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/]")
        return 1

    render_puzzle(console, puzzle)
    if args.verbose:
        console.print(puzzle.question())

    if args.decision:
        decision = Decision.parse(args.decision)
    else:
        answer = Prompt.ask(
            "Call or fold?",
            choices=[d.value for d in Decision],
            console=console,
        )
        decision = Decision.parse(answer)

    render_results(console, puzzle, decision, args.show_outs)
    return 0


if __name__ == "__main__":
    sys.exit(main())
