"""
Tests for the command-line entry point: argument parsing, configuration,
the interactive command dispatcher and the unattended demo mode.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from src.game_state.state_machine import LifeState
from src.main import (
    GameConfig,
    LifeCLI,
    create_config_from_args,
    create_controller,
    main,
    parse_arguments,
    run_auto_years,
)
from src.observability.run_log import get_run_log
from tests.helpers import forced_dice, make_character, make_job


@pytest.fixture
def cli(seeded_dice):
    from src.game_state.life_controller import LifeController

    return LifeCLI(LifeController(character=make_character(age=8)))


class TestArguments:

    def test_defaults(self):
        args = parse_arguments([])
        assert args.seed is None
        assert args.location == "England"
        assert args.start_year == 1500
        assert args.auto_years == 0
        assert not args.verbose

    def test_config_from_args(self):
        args = parse_arguments(["--seed", "42", "--run-log", "out.json", "--start-year", "1530", "-v"])
        config = create_config_from_args(args)
        assert config.seed == 42
        assert config.start_year == 1530
        assert config.run_log_path == Path("out.json")
        assert config.verbose

    def test_unknown_location_rejected(self):
        with pytest.raises(SystemExit):
            parse_arguments(["--location", "Atlantis"])

    def test_string_path_converted(self):
        assert GameConfig(run_log_path="run.json").run_log_path == Path("run.json")


class TestController:

    def test_seeded_controllers_match(self):
        first = create_controller(GameConfig(seed=11))
        second = create_controller(GameConfig(seed=11))
        assert first.character.full_name == second.character.full_name
        assert first.character.social_class == second.character.social_class
        assert get_run_log().get_seed() == 11


class TestCommands:

    def test_unknown_command(self, cli, capsys):
        cli.process_command("joust")
        assert "Unknown command: joust" in capsys.readouterr().out

    def test_age_shows_choices(self, cli, capsys):
        cli.process_command("age")
        out = capsys.readouterr().out
        assert "Year 1521" in out
        assert "choose " in out
        assert cli.controller.state == LifeState.AWAITING_CHOICE

    def test_age_twice_is_refused(self, cli, capsys):
        cli.process_command("age")
        capsys.readouterr()
        cli.process_command("age")
        assert "You must deal with what is before you first" in capsys.readouterr().out

    def test_choose(self, cli, capsys):
        cli.process_command("age")
        first = cli.controller.pending_event.choices[0].id
        cli.process_command(f"choose {first}")
        assert cli.controller.state in (LifeState.IDLE, LifeState.AWAITING_DEATH_ACK)

    def test_choose_unknown(self, cli, capsys):
        cli.process_command("age")
        capsys.readouterr()
        cli.process_command("choose nonsense")
        assert "'nonsense' is not one of the options." in capsys.readouterr().out

    def test_ok_with_nothing_pending(self, cli, capsys):
        cli.process_command("ok")
        assert "There is nothing to acknowledge." in capsys.readouterr().out

    def test_status_and_family(self, cli, capsys):
        cli.process_command("status")
        cli.process_command("family")
        out = capsys.readouterr().out
        assert "Thomas Smith, aged 8" in out
        assert "father" in out and "John" in out

    def test_verbose_status_shows_state_machine(self, seeded_dice, capsys):
        from src.game_state.life_controller import LifeController

        cli = LifeCLI(LifeController(character=make_character(age=8)), GameConfig(verbose=True))
        with forced_dice(chances={"sibling birth": False}):
            cli.process_command("age")
        capsys.readouterr()
        cli.process_command("status")
        out = capsys.readouterr().out
        assert "State: awaiting_choice" in out
        assert "Previous: idle" in out
        assert "Next: choice_resolved, character_died" in out

    def test_talk(self, cli, capsys):
        cli.process_command("talk mother chat")
        out = capsys.readouterr().out
        assert cli.controller.character.has_interacted("mother", "CHAT")
        assert out.strip()

    def test_talk_usage(self, cli, capsys):
        cli.process_command("talk mother")
        assert "Usage: talk TARGET ACTION" in capsys.readouterr().out

    def test_refused_coworker_action_is_printed(self, seeded_dice, capsys):
        from src.game_state.life_controller import LifeController

        character = make_character(age=20, money=2)
        character.current_job = make_job()
        cli = LifeCLI(LifeController(character=character))
        cli.process_command("coworker coworker_0 tavern")
        assert "You do not have enough coins for the tavern." in capsys.readouterr().out

    def test_activity_listing_and_bad_index(self, cli, capsys):
        cli.process_command("activity")
        assert "carry_wood" in capsys.readouterr().out
        cli.process_command("activity carry_wood x")
        assert "Usage: activity ID INDEX" in capsys.readouterr().out

    def test_jobs_and_job(self, cli, capsys):
        cli.process_command("jobs")
        cli.process_command("job")
        out = capsys.readouterr().out
        assert "field_plower" in out
        assert "You have no job." in out

    def test_quit(self, cli):
        cli.running = True
        cli.process_command("quit")
        assert not cli.running

    def test_run_loop_ends_on_eof(self, cli, capsys):
        with patch("builtins.input", side_effect=["status", EOFError]):
            cli.run()
        assert "Requiescat in pace." in capsys.readouterr().out


class TestAutoMode:

    def test_run_auto_years_leaves_controller_idle(self, seeded_dice):
        controller = create_controller(GameConfig(seed=3))
        deaths = run_auto_years(controller, 30)
        assert deaths >= 0
        assert controller.state == LifeState.IDLE
        assert len(get_run_log().get_turns()) == 30

    def test_main_auto_saves_run_log(self, tmp_path, capsys):
        path = tmp_path / "run.json"
        controller = main(["--seed", "5", "--auto-years", "10", "--run-log", str(path)])
        assert path.exists()
        assert controller.state == LifeState.IDLE
        assert "10 years lived" in capsys.readouterr().out
