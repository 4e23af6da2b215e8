"""
Tudor Life - Main Entry Point

A text life simulation: one year per turn, from birth in a Tudor household
to death, then a fresh life in a new family.

This module provides configuration, logging setup, the interactive command
line and a non-interactive demo mode.
"""

import sys
from pathlib import Path

# Add the project root to the Python path for module discovery
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import argparse
import logging
from dataclasses import dataclass
from typing import Optional

from src.data_models import DiceRoller
from src.game_state import LifeController, LifeState, TurnOutcome
from src.interactions import available_activities
from src.observability.run_log import get_run_log
from src.tables.era_tables import DEFAULT_LOCATION, DEFAULT_START_YEAR, LOCATION_DESCRIPTIONS
from src.tables.job_tables import get_available_jobs


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class GameConfig:
    """Configuration for a play session."""

    seed: Optional[int] = None
    location: str = DEFAULT_LOCATION
    start_year: int = DEFAULT_START_YEAR

    # Export the run log as JSON on exit
    run_log_path: Optional[Path] = None

    # Narrative lines shown by the 'log' command
    max_log_lines: int = 20

    verbose: bool = False

    def __post_init__(self):
        """Ensure paths are Path objects."""
        if isinstance(self.run_log_path, str):
            self.run_log_path = Path(self.run_log_path)


def create_controller(config: GameConfig) -> LifeController:
    """Seed the dice and start the first life."""
    if config.seed is not None:
        DiceRoller.set_seed(config.seed)
        get_run_log().set_seed(config.seed)
    return LifeController(location=config.location, start_year=config.start_year)


# =============================================================================
# INTERACTIVE CLI
# =============================================================================

class LifeCLI:
    """Interactive command-line interface for the game."""

    def __init__(self, controller: LifeController, config: Optional[GameConfig] = None):
        self.controller = controller
        self.config = config or GameConfig()
        self.running = False
        self._shown = 0
        self.commands = {
            "status": self.cmd_status,
            "age": self.cmd_age,
            "choose": self.cmd_choose,
            "ok": self.cmd_ok,
            "family": self.cmd_family,
            "talk": self.cmd_talk,
            "job": self.cmd_job,
            "jobs": self.cmd_jobs,
            "take": self.cmd_take,
            "resign": self.cmd_resign,
            "coworker": self.cmd_talk,
            "classmate": self.cmd_talk,
            "work": self.cmd_work,
            "activity": self.cmd_activity,
            "inventory": self.cmd_inventory,
            "eat": self.cmd_eat,
            "sell": self.cmd_sell,
            "log": self.cmd_log,
            "dice": self.cmd_dice,
            "help": self.cmd_help,
            "quit": self.cmd_quit,
            "exit": self.cmd_quit,
        }

    def run(self) -> None:
        """Run the interactive CLI loop."""
        self.running = True
        print("\n" + "=" * 60)
        print("TUDOR LIFE - Interactive Mode")
        print("=" * 60)
        print("Type 'help' for available commands, 'quit' to exit.\n")
        self.flush()

        while self.running:
            try:
                user_input = input(f"[{self.controller.state.value}]> ").strip()
                if not user_input:
                    continue

                self.process_command(user_input)

            except KeyboardInterrupt:
                print("\nInterrupted. Type 'quit' to exit.")
            except EOFError:
                self.running = False

        print("\nRequiescat in pace.")

    def process_command(self, user_input: str) -> None:
        """Process a user command."""
        parts = user_input.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if cmd in self.commands:
            self.commands[cmd](args)
            self.flush()
        else:
            print(f"Unknown command: {cmd}. Type 'help' for available commands.")

    def flush(self) -> None:
        """Print narrative lines written since the last flush, then any pending event."""
        log = self.controller.narrative_log
        for line in log[self._shown:]:
            print(f"  {line.text}")
        self._shown = len(log)

        state = self.controller.state
        if state == LifeState.AWAITING_CHOICE:
            descriptor = self.controller.pending_event_descriptor()
            print()
            for option in descriptor["choices"]:
                preview = f"  [{option['preview']}]" if option["preview"] else ""
                print(f"    choose {option['id']:<14} {option['label']}{preview}")
        elif state in (LifeState.AWAITING_BIRTH_ACK, LifeState.AWAITING_DEATH_ACK):
            print("    (type 'ok' to continue)")

    def cmd_help(self, args: str) -> None:
        """Show help information."""
        print("""
Available Commands:
  age                   - Live another year
  choose ID             - Answer the pending event
  ok                    - Acknowledge a birth or a death
  status                - Show your character
  family                - Show parents and siblings
  talk TARGET ACTION    - Act toward family (father/mother/sibling id),
                          a coworker or a classmate (e.g., 'talk mother CHAT')
  coworker ID ACTION    - Same as talk, for a coworker
  classmate ID ACTION   - Same as talk, for a classmate
  jobs                  - List jobs open to your class
  take JOB_ID           - Take a job
  job                   - Show your job and coworkers
  resign                - Leave your job
  work                  - Do your chores
  activity [ID INDEX]   - List or perform an activity
  inventory             - Show what you carry
  eat ITEM_ID           - Eat a food item
  sell ITEM_ID          - Sell an item
  log                   - Show the recent story of your life
  dice                  - Show dice roll history
  help                  - Show this help
  quit/exit             - Exit the game
""")

    def cmd_status(self, args: str) -> None:
        """Show character status."""
        snap = self.controller.snapshot()
        print(f"\n{snap['name']}, aged {snap['age']} ({snap['social_class']}), {snap['year']} - {snap['era']}")
        print(f"  Health {snap['health']}  Honor {snap['honor']}  Faith {snap['faith']}  "
              f"Strength {snap['strength']}  Intelligence {snap['intelligence']}  Sanity {snap['sanity']}")
        print(f"  Money {snap['money']}  Food {snap['food']}  Job: {snap['job'] or 'none'}")
        if snap["traits"]:
            print(f"  Traits: {', '.join(snap['traits'])}")
        info = self.controller.state_machine.get_state_info()
        print(f"  State: {info['current_state']}  Life #{snap['lives_lived']}")
        if self.config.verbose:
            print(f"  Previous: {info['previous_state']}  Next: {', '.join(info['valid_triggers'])}")

    def cmd_age(self, args: str) -> None:
        """Advance one year."""
        result = self.controller.advance_year()
        if result.outcome == TurnOutcome.BLOCKED:
            print(result.messages[0])

    def cmd_choose(self, args: str) -> None:
        if not args:
            print("Usage: choose CHOICE_ID")
            return
        result = self.controller.resolve_choice(args.strip())
        if not result.accepted:
            print(result.messages[0])

    def cmd_ok(self, args: str) -> None:
        result = self.controller.acknowledge()
        if not result.accepted:
            print(result.messages[0])

    def cmd_family(self, args: str) -> None:
        """Show family information."""
        character = self.controller.character
        family = character.family
        print("\nFamily:")
        print("-" * 40)
        for key, parent in (("father", family.father), ("mother", family.mother)):
            status = f"aged {parent.age}" if parent.alive else "dead"
            print(f"  {key:<8} {parent.name}, {status}, relationship {parent.relationship}")
        for sibling in character.siblings:
            print(f"  {sibling.id:<8} {sibling.name}, aged {sibling.age}, relationship {sibling.relationship}")
        if character.classmates:
            print("Classmates:")
            for classmate in character.classmates:
                print(f"  {classmate.id:<8} {classmate.name}, relationship {classmate.relationship}")
        print("-" * 40)

    def cmd_talk(self, args: str) -> None:
        parts = args.split()
        if len(parts) != 2:
            print("Usage: talk TARGET ACTION")
            return
        result = self.controller.interact(parts[0], parts[1].upper())
        if result.blocked:
            print(result.message)

    def cmd_jobs(self, args: str) -> None:
        """List jobs for the character's class."""
        for listing in get_available_jobs(self.controller.character.social_class):
            print(f"  {listing.id:<18} {listing.title:<22} {listing.income:>4} coins/yr  "
                  f"needs {listing.requirements.describe()}")

    def cmd_job(self, args: str) -> None:
        job = self.controller.character.current_job
        if job is None:
            print("You have no job.")
            return
        print(f"\n{job.title}: {job.description}")
        for coworker in job.coworkers:
            print(f"  {coworker.id:<8} {coworker.name} ({coworker.role}), relationship {coworker.relationship}")

    def cmd_take(self, args: str) -> None:
        if not args:
            print("Usage: take JOB_ID")
            return
        result = self.controller.take_job(args.strip())
        if result.blocked:
            print(result.message)

    def cmd_resign(self, args: str) -> None:
        result = self.controller.resign_job()
        if result.blocked:
            print(result.message)

    def cmd_work(self, args: str) -> None:
        result = self.controller.work()
        if result.blocked:
            print(result.message)

    def cmd_activity(self, args: str) -> None:
        """List activities, or perform one."""
        parts = args.split()
        if len(parts) != 2:
            for activity in available_activities(self.controller.character):
                print(f"  {activity.id:<12} {activity.label}")
                for index, option in enumerate(activity.choices):
                    print(f"      {index}: {option.label}  {option.preview()}")
            return
        try:
            index = int(parts[1])
        except ValueError:
            print("Usage: activity ID INDEX")
            return
        result = self.controller.do_activity(parts[0], index)
        if result.blocked:
            print(result.message)

    def cmd_inventory(self, args: str) -> None:
        items = self.controller.character.inventory
        if not items:
            print("You carry nothing.")
        for item in items:
            print(f"  {item.id:<16} {item.name} ({item.item_type.value}, worth {item.value})")

    def cmd_eat(self, args: str) -> None:
        result = self.controller.eat(args.strip())
        if result.blocked:
            print(result.message)

    def cmd_sell(self, args: str) -> None:
        result = self.controller.sell(args.strip())
        if result.blocked:
            print(result.message)

    def cmd_log(self, args: str) -> None:
        """Show the recent narrative."""
        lines = self.controller.narrative_log[-self.config.max_log_lines:]
        print(f"\nYour Story (last {len(lines)} lines):")
        print("-" * 40)
        for line in lines:
            print(f"  {line.text}")
        print("-" * 40)

    def cmd_dice(self, args: str) -> None:
        """Show dice roll history."""
        rolls = DiceRoller.get_roll_log()
        print("\nDice Roll History (last 10):")
        print("-" * 40)
        for roll in rolls[-10:]:
            print(f"  {roll}")
        print("-" * 40)

    def cmd_quit(self, args: str) -> None:
        """Quit the game."""
        self.running = False


# =============================================================================
# NON-INTERACTIVE DEMO
# =============================================================================

def run_auto_years(controller: LifeController, years: int) -> int:
    """
    Live `years` turns, always taking the first option and acknowledging
    births and deaths. Returns the number of deaths seen.
    """
    deaths = 0
    for _ in range(years):
        result = controller.advance_year()
        if result.outcome == TurnOutcome.BLOCKED:
            logger.warning("Demo turn blocked; clearing the pending state")
        while controller.state != LifeState.IDLE:
            if controller.state == LifeState.AWAITING_CHOICE:
                first = controller.pending_event.choices[0]
                controller.resolve_choice(first.id)
            else:
                if controller.state == LifeState.AWAITING_DEATH_ACK:
                    deaths += 1
                controller.acknowledge()
    return deaths


# =============================================================================
# ARGUMENTS AND ENTRY POINT
# =============================================================================

def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tudor Life - live one year at a time in Tudor England",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.main                      # Play interactively
  python -m src.main --seed 42            # Reproducible life
  python -m src.main --auto-years 60      # Watch a life unfold unattended
  python -m src.main --run-log run.json   # Save the dice and transition log
        """
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible run",
    )
    parser.add_argument(
        "--location",
        type=str,
        default=DEFAULT_LOCATION,
        choices=sorted(LOCATION_DESCRIPTIONS),
        help=f"Where lives begin (default: {DEFAULT_LOCATION})",
    )
    parser.add_argument(
        "--start-year",
        type=int,
        default=DEFAULT_START_YEAR,
        help=f"Birth year of each new life (default: {DEFAULT_START_YEAR})",
    )
    parser.add_argument(
        "--run-log",
        type=Path,
        default=None,
        help="Write the run log as JSON to this file on exit",
    )
    parser.add_argument(
        "--auto-years",
        type=int,
        default=0,
        metavar="N",
        help="Play N years non-interactively, always taking the first option",
    )
    parser.add_argument(
        "--max-log-lines",
        type=int,
        default=20,
        help="Narrative lines shown by the 'log' command (default: 20)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def create_config_from_args(args: argparse.Namespace) -> GameConfig:
    """Create GameConfig from parsed arguments."""
    return GameConfig(
        seed=args.seed,
        location=args.location,
        start_year=args.start_year,
        run_log_path=args.run_log,
        max_log_lines=args.max_log_lines,
        verbose=args.verbose,
    )


def main(argv: Optional[list[str]] = None) -> LifeController:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    config = create_config_from_args(args)

    print("=" * 60)
    print("TUDOR LIFE v0.1.0")
    print("=" * 60)

    controller = create_controller(config)

    if args.auto_years > 0:
        deaths = run_auto_years(controller, args.auto_years)
        for line in controller.narrative_log[-config.max_log_lines:]:
            print(f"  {line.text}")
        print(f"\n{args.auto_years} years lived, {deaths} death(s).")
    else:
        cli = LifeCLI(controller, config)
        cli.run()

    if config.run_log_path is not None:
        get_run_log().save(str(config.run_log_path))

    return controller


if __name__ == "__main__":
    main()
