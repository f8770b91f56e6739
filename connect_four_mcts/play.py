#!/usr/bin/env python
"""
Play Connect Four against an MCTS agent.

Modes:
- human-vs-ai: one human player against the MCTS agent
- human-vs-human: two humans sharing the terminal
- ai-vs-ai: two MCTS agents playing each other
- analyze: run simulations from the empty board and print the move statistics

A human enters a column index. Non-numeric input is asked again; a column
that is out of range or full forfeits the game.
"""
import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text
from tqdm import tqdm

from connect_four_mcts.core.board import Board, GameResult
from connect_four_mcts.core.constants import (
    Player, COLS, PLAYER_SYMBOLS, DEFAULT_MCTS_ITERATIONS, ANALYZE_MCTS_ITERATIONS
)
from connect_four_mcts.core.game import Game
from connect_four_mcts.mcts.agent import MCTSAgent
from connect_four_mcts.mcts.config import MCTSConfig
from connect_four_mcts.mcts.node import MCTSNode
from connect_four_mcts.mcts.search import (
    mcts_search, get_action_statistics, get_principal_variation
)

logger = logging.getLogger(__name__)

PLAYER_STYLES = {
    Player.ONE: "bold red",
    Player.TWO: "bold blue",
}

MODES = ["human-vs-ai", "human-vs-human", "ai-vs-ai", "analyze"]


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Play Connect Four against an MCTS agent")

    parser.add_argument("--mode", type=str, default="human-vs-ai", choices=MODES,
                        help="Who plays: human-vs-ai, human-vs-human, ai-vs-ai, or analyze")
    parser.add_argument("--iterations", type=int, default=None,
                        help=f"Simulations per AI move (default {DEFAULT_MCTS_ITERATIONS}, "
                             f"{ANALYZE_MCTS_ITERATIONS} in analyze mode)")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Optional time limit per AI move in seconds")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible searches")
    parser.add_argument("--first", action="store_true",
                        help="Human moves first (human-vs-ai mode)")
    parser.add_argument("--verbose", action="store_true",
                        help="Print search statistics after every AI move")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")

    return parser.parse_args(argv)


def setup_logging(console: Console, debug: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def build_config(args) -> MCTSConfig:
    """Create the search configuration from command line arguments."""
    iterations = args.iterations
    if iterations is None:
        iterations = ANALYZE_MCTS_ITERATIONS if args.mode == "analyze" else DEFAULT_MCTS_ITERATIONS
    return MCTSConfig(
        iterations=iterations,
        time_limit=args.time_limit,
        seed=args.seed,
        verbose=args.verbose,
    )


def render_board(board: Board) -> Text:
    """Render the board with colored stones, top row first."""
    text = Text("| " + " | ".join(str(col) for col in range(COLS)) + " |\n\n")
    for row in board.rows_top_down():
        text.append("|")
        for cell in row:
            if cell is None:
                text.append("   |")
            else:
                text.append(" ")
                text.append(PLAYER_SYMBOLS[cell], style=PLAYER_STYLES[cell])
                text.append(" |")
        text.append("\n")
    return text


def player_label(player: Player) -> Text:
    return Text(f"{player} ({PLAYER_SYMBOLS[player]})", style=PLAYER_STYLES[player])


def parse_move(line: str) -> Optional[int]:
    """
    Parse a column index from a line of input.

    Returns:
        The column, or None when the line is not a number
    """
    try:
        return int(line.strip())
    except ValueError:
        return None


def get_human_move(console: Console, player: Player) -> int:
    """Prompt until the player enters a number."""
    while True:
        console.print(player_label(player), Text(", please select a column"))
        move = parse_move(console.input("> "))
        if move is not None:
            return move
        console.print("Please enter a column number.", style="yellow")


def think(console: Console, agent: MCTSAgent, board: Board, player: Player) -> int:
    """Run the agent's search behind a progress bar."""
    console.print(Text(f"{agent.name} is thinking..."), style=PLAYER_STYLES[player])
    with tqdm(total=agent.config.iterations, desc=agent.name, leave=False, unit="sim") as bar:
        return agent.select_action(board, player, progress=bar.update)


def announce_result(console: Console, game: Game) -> None:
    """Print the final board and the result banner."""
    console.print(render_board(game.board))
    console.print(Text("=== GAME OVER ===", style="bold yellow"))

    if game.forfeited_by is not None:
        console.print(
            Text(f"Invalid move by {game.forfeited_by}! - The other player wins!", style="bold")
        )

    if game.result is GameResult.DRAW:
        console.print(Text("Draw!", style="bold yellow"))
    else:
        console.print(player_label(game.winner), Text("wins!", style="bold green"))


def play_game(console: Console, args) -> Game:
    """Play one game in a human-vs-ai, human-vs-human or ai-vs-ai mode."""
    config = build_config(args)
    game = Game()

    agents = {}
    if args.mode == "human-vs-ai":
        ai_player = Player.TWO if args.first else Player.ONE
        agents[ai_player] = MCTSAgent(config=config, name="MCTS Agent")
    elif args.mode == "ai-vs-ai":
        for player in Player:
            agents[player] = MCTSAgent(config=config, name=f"MCTS {player}")

    for agent in agents.values():
        game.add_observer(lambda _player, move, agent=agent: agent.observe_move(move))

    while not game.game_over:
        console.print(render_board(game.board))
        player = game.current_player
        if player in agents:
            move = think(console, agents[player], game.board, player)
            console.print(player_label(player), Text(f"plays column {move}"))
        else:
            move = get_human_move(console, player)
        game.step(move)

    announce_result(console, game)
    return game


def analyze(console: Console, args) -> MCTSNode:
    """Run simulations from the empty board and print the root's move statistics."""
    config = build_config(args)
    root = MCTSNode(Board(), Player.ONE, rng=config.make_rng())

    with tqdm(total=config.iterations, desc="Analyzing", unit="sim") as bar:
        _, stats = mcts_search(root, config, progress=bar.update)

    table = Table(title=f"Opening moves after {root.visit_count()} simulations")
    table.add_column("Column", justify="right")
    table.add_column("Visits", justify="right")
    table.add_column("Win rate", justify="right")
    table.add_column("UCT", justify="right")
    for move, move_stats in get_action_statistics(root).items():
        table.add_row(
            str(move),
            str(move_stats["visits"]),
            f"{move_stats['win_rate']:.3f}",
            f"{move_stats['uct']:.4f}",
        )
    console.print(table)

    line = " ".join(str(move) for move, _ in get_principal_variation(root))
    console.print(f"Best move: {root.best_move()}  Principal variation: {line}")
    console.print(f"{stats['iterations_per_second']:.0f} simulations/s, {stats['node_count']} nodes")
    return root


def main(argv=None):
    """Main function."""
    args = parse_args(argv)
    console = Console()
    setup_logging(console, args.debug)

    try:
        if args.mode == "analyze":
            analyze(console, args)
            return

        console.print(Text("Welcome to Connect Four!", style="bold yellow"))
        while True:
            play_game(console, args)
            if args.mode == "ai-vs-ai":
                break
            play_again = console.input("\nPlay again? (y/n): ").strip().lower()
            if play_again not in ['y', 'yes']:
                console.print("Thanks for playing!")
                break
    except (KeyboardInterrupt, EOFError):
        console.print("\nGame interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
