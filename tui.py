# tui.py

import asyncio
import os

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from controller import GameController, GameListener
from phases import GameOverPhase, RoundActivePhase, RoundResolvedPhase
from settings import SCORE_OPTIONS, TIMER_OPTIONS, GameSettings, InvalidSettings
from shared import CHOICE_ICONS, TIMER_WARNING_SEC, Choice, Outcome

CHOICE_ALIASES = {
    "rock": Choice.ROCK, "r": Choice.ROCK,
    "paper": Choice.PAPER, "p": Choice.PAPER,
    "scissors": Choice.SCISSORS, "s": Choice.SCISSORS,
}

META_COMMANDS = ["help", "rules", "settings", "sound", "new", "menu", "quit"]

RULES_TEXT = (
    "[bold]Rock[/bold] crushes [bold]Scissors[/bold]\n"
    "[bold]Paper[/bold] covers [bold]Rock[/bold]\n"
    "[bold]Scissors[/bold] cut [bold]Paper[/bold]\n\n"
    "Pick before the timer runs out or a choice is made for you.\n"
    "A win scores 500 points, a tie 100, a loss nothing.\n"
    "First to the winning score takes the game."
)

OUTCOME_STYLES = {
    Outcome.PLAYER_WINS: "bold green",
    Outcome.OPPONENT_WINS: "bold red",
    Outcome.TIE: "bold yellow",
}


def clear_screen():
    """Clears the terminal screen."""
    os.system('cls' if os.name == 'nt' else 'clear')


def format_score(score: int) -> str:
    """Two-digit score, e.g. 5 -> '05'."""
    return f"{score:02d}"


def format_points(points: int) -> str:
    return f"{points:,}"


class GameUI(GameListener):
    """
    A REPL-style terminal front end. The controller's timer and this prompt
    share one asyncio loop, so ticks and keystrokes are handled one at a time.
    """

    def __init__(self, controller: GameController, settings: GameSettings = None):
        self.controller = controller
        # Edited in the settings menu and handed over when the next game starts.
        self.settings = settings or controller.settings
        self.console = Console()
        self.session = PromptSession(auto_suggest=AutoSuggestFromHistory())
        controller.add_listener(self)

    def run(self):
        asyncio.run(self.run_async())

    async def run_async(self):
        """The main game loop."""
        while True:
            clear_screen()

            legal_moves = self.controller.get_legal_moves()
            self._display_game_state(legal_moves)

            completer = WordCompleter(self._suggestions(), ignore_case=True)
            try:
                command_str = await self.session.prompt_async(
                    "> ",
                    completer=completer,
                    bottom_toolbar=self._bottom_toolbar,
                    refresh_interval=0.5,
                )
                await self._handle_command(command_str.strip().lower(), legal_moves)
            except (KeyboardInterrupt, EOFError):
                self.controller.reset_game()
                self.console.print("\n[bold yellow]Quitting game.[/bold yellow]")
                break

    # --- GameListener ---

    def on_tick(self, remaining_seconds: int):
        if 0 < remaining_seconds <= TIMER_WARNING_SEC:
            self._bell()
        app = self.session.app
        if app.is_running:
            app.invalidate()

    def on_round_resolved(self, player_choice, opponent_choice, outcome,
                          player_score, opponent_score, total_points):
        self._bell()
        # A timeout lands while the prompt is open; close it so the result shows.
        app = self.session.app
        if app.is_running and not app.is_done:
            app.exit(result="")

    def _bell(self):
        if not self.controller.settings.sound_enabled:
            return
        app = self.session.app
        if app.is_running:
            app.output.bell()
            app.output.flush()
        else:
            self.console.bell()

    # --- Rendering ---

    def _display_game_state(self, legal_moves: list):
        phase = self.controller.phase

        self.console.print(Rule(f"[bold]Rock Paper Scissors - {phase.get_name()}[/bold]"))
        self.console.print(Columns([self._create_score_panel(), self._create_settings_panel()], expand=True))
        self.console.print(self._create_round_panel())
        self.console.print(self._create_actions_panel(legal_moves))

    def _create_score_panel(self) -> Panel:
        state = self.controller.state
        status = Text()
        status.append("You ", style="bold cyan")
        status.append(format_score(state.player_score), style="bold")
        status.append("  :  ")
        status.append(format_score(state.opponent_score), style="bold")
        status.append(" CPU", style="bold red")
        status.append(f"\nPoints: {format_points(state.total_points)}", style="bold yellow")
        status.append(f"\nRounds: {state.rounds_played}", style="dim")
        return Panel(status, title="[green]Score[/green]", border_style="green")

    def _create_settings_panel(self) -> Panel:
        table = Table(show_header=False, box=None)
        table.add_row("Timer", f"{self.settings.timer_duration_seconds}s")
        table.add_row("Winning score", str(self.settings.winning_score))
        table.add_row("Sound", "on" if self.settings.sound_enabled else "off")
        return Panel(table, title="[yellow]Settings[/yellow]", border_style="yellow")

    def _create_round_panel(self) -> Panel:
        phase = self.controller.phase

        if isinstance(phase, RoundActivePhase):
            remaining = self.controller.round.remaining_seconds
            style = "bold red" if remaining <= TIMER_WARNING_SEC else "bold"
            body = Text.assemble(("Time left: ", "dim"), (f"{remaining}s", style),
                                 "\nMake your choice!")
            return Panel(body, title="[bold cyan]Round[/bold cyan]", border_style="cyan")

        if isinstance(phase, RoundResolvedPhase):
            return self._create_result_panel()

        if isinstance(phase, GameOverPhase):
            return self._create_game_over_panel()

        return Panel(
            Text("Beat the computer at Rock Paper Scissors.\nType 'rules' to learn how to play.", justify="center"),
            title="[bold]Welcome[/bold]",
        )

    def _create_result_panel(self) -> Panel:
        result = self.controller.last_result
        style = OUTCOME_STYLES[result.outcome]

        lines = [
            Text(result.title, style=style, justify="center"),
            Text(f"{CHOICE_ICONS[result.player_choice]}   vs   {CHOICE_ICONS[result.opponent_choice]}",
                 justify="center"),
            Text(result.message, justify="center"),
            Text(f"+{format_points(result.points)} points", style="yellow", justify="center"),
        ]
        if result.timed_out:
            lines.append(Text("Time ran out, a choice was made for you.", style="dim", justify="center"))
        return Panel(Group(*lines), title=f"[bold]Round {result.round_number}[/bold]", border_style=style)

    def _create_game_over_panel(self) -> Panel:
        state = self.controller.state
        winner = state.winner()
        player_style = "bold green" if winner == "player" else "dim"
        opponent_style = "bold green" if winner == "opponent" else "dim"

        scores = Text(justify="center")
        scores.append(f"You {state.player_score}", style=player_style)
        scores.append("  -  ")
        scores.append(f"{state.opponent_score} CPU", style=opponent_style)

        headline = "You won the game!" if winner == "player" else "The computer won the game."
        return Panel(
            Group(
                Text(headline, style="bold magenta", justify="center"),
                scores,
                Text(f"Total points: {format_points(state.total_points)}", style="bold yellow", justify="center"),
            ),
            title="[bold magenta]GAME OVER[/bold magenta]",
            border_style="magenta",
        )

    def _create_actions_panel(self, legal_moves: list) -> Panel:
        """Panel listing all available, numbered actions."""
        table = Table(show_header=True, header_style="bold magenta", box=None)
        table.add_column("Num", justify="center", style="bold", width=5)
        table.add_column("Action", no_wrap=True)

        for i, move in enumerate(legal_moves, 1):
            table.add_row(f"[{i}]", move[0])

        if not legal_moves:
            table.add_row("", Text("(No actions available)", style="dim"))

        return Panel(table, title="[bold]Available Actions[/bold]")

    def _bottom_toolbar(self):
        current = self.controller.round
        if self.controller.state.round_active and current is not None:
            if current.remaining_seconds <= TIMER_WARNING_SEC:
                return HTML(f'<style bg="ansired" fg="ansiwhite"> Time left: {current.remaining_seconds}s </style>')
            return HTML(f" Time left: <b>{current.remaining_seconds}s</b>")
        return HTML(" Type <b>help</b> for commands")

    def _suggestions(self) -> list:
        if isinstance(self.controller.phase, RoundActivePhase):
            return ["rock", "paper", "scissors"] + META_COMMANDS
        if isinstance(self.controller.phase, RoundResolvedPhase):
            return ["next"] + META_COMMANDS
        return META_COMMANDS

    # --- User Input ---

    async def _handle_command(self, command_str: str, legal_moves: list):
        """Parses a command and executes it."""
        if not command_str:
            return
        if command_str in ("quit", "q", "exit"):
            raise EOFError
        if command_str == "help":
            self.console.print(
                "[bold]Help:[/bold]\n"
                "- Type the number of an action, or rock/paper/scissors (r/p/s).\n"
                "- `next`: Continue after a result.\n"
                "- `new`: Start a new game.  `menu`: Back to the main menu.\n"
                "- `rules`, `settings`, `sound`: Rules, game options, toggle sound.\n"
                "- `quit`: Exit the game."
            )
            await self._pause()
            return
        if command_str == "rules":
            self.console.print(Panel(RULES_TEXT, title="[bold]How to Play[/bold]", border_style="cyan"))
            await self._pause()
            return
        if command_str == "settings":
            await self._edit_settings()
            return
        if command_str == "sound":
            self.settings = self.settings.toggle_sound()
            self.console.print(f"[bold]Sound {'on' if self.settings.sound_enabled else 'off'}[/bold] (from the next game)")
            await asyncio.sleep(1)
            return
        if command_str == "new":
            await self._start_game()
            return
        if command_str == "menu":
            self.controller.reset_game()
            return
        if command_str == "next":
            self.controller.advance()
            return
        if command_str in CHOICE_ALIASES:
            self.controller.submit_choice(CHOICE_ALIASES[command_str])
            return

        try:
            move_idx = int(command_str)
        except ValueError:
            await self._show_error(f"Invalid command: '{command_str}'. Type 'help' for a list of commands.")
            return

        if not 1 <= move_idx <= len(legal_moves):
            await self._show_error(f"Error: '{move_idx}' is not a valid action number.")
            return

        action = legal_moves[move_idx - 1][1]
        if action[0] == 'START_GAME':
            await self._start_game()
        else:
            # The round may have timed out while the prompt was open; the controller drops stale actions.
            self.controller.process_action(action)

    async def _start_game(self):
        try:
            self.controller.start_game(self.settings)
        except InvalidSettings as e:
            await self._show_error(f"Cannot start: {e}")

    async def _edit_settings(self):
        if self.controller.state.round_active:
            await self._show_error("Settings can be changed between rounds.")
            return

        timer = await self._ask_option("Seconds per round", TIMER_OPTIONS, self.settings.timer_duration_seconds)
        score = await self._ask_option("Winning score", SCORE_OPTIONS, self.settings.winning_score)
        self.settings = self.settings.with_changes(timer_duration_seconds=timer, winning_score=score)
        self.console.print("[bold green]Settings saved.[/bold green] They apply from the next game.")
        await asyncio.sleep(1)

    async def _ask_option(self, label: str, options: tuple, current: int) -> int:
        completer = WordCompleter([str(option) for option in options])
        choices = "/".join(str(option) for option in options)
        answer = await self.session.prompt_async(f"{label} ({choices}) [{current}]: ", completer=completer)
        answer = answer.strip()
        if not answer:
            return current
        try:
            value = int(answer)
        except ValueError:
            value = None
        if value not in options:
            self.console.print(f"[bold red]'{answer}' is not one of {choices}, keeping {current}.[/bold red]")
            return current
        return value

    async def _pause(self):
        await self.session.prompt_async("Press Enter to continue...")

    async def _show_error(self, message: str):
        self.console.print(f"[bold red]{message}[/bold red]")
        await asyncio.sleep(1.5)
