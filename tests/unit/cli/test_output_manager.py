# tests/unit/cli/test_output_manager.py
# Unit tests for OutputManager & the verbose logging helpers

from rich.console import Console

from cyclewatch.cli.output_manager import OutputManager
from cyclewatch.core.output import (
    NullOutputManager,
    OutputInterface,
    OutputLevel,
    get_output_manager,
)
from cyclewatch.core.types import Phase
from cyclewatch.core.verbose import init_verbose, vlog, vlog_phase
from cyclewatch.cw_io import console as console_module


class TestLevels:

    # * Verify OutputManager implements protocol
    def test_implements_protocol(self):
        assert isinstance(OutputManager(), OutputInterface)
        assert isinstance(NullOutputManager(), OutputInterface)

    # * Verify DEBUG requires dev_mode
    def test_debug_requires_dev_mode(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.DEBUG, dev_mode=False)
        assert manager.get_level() == OutputLevel.VERBOSE
        manager.initialize(requested_level=OutputLevel.DEBUG, dev_mode=True)
        assert manager.is_debug_enabled()

    # * Verify quiet wins over verbose
    def test_quiet_wins(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.VERBOSE, quiet=True)
        assert manager.get_level() == OutputLevel.QUIET
        assert manager.is_verbose_enabled() is False


class TestInitVerbose:

    # * Verify init_verbose registers a real manager at the requested level
    def test_registers_manager(self):
        init_verbose(enabled=True)
        manager = get_output_manager()
        assert isinstance(manager, OutputManager)
        assert manager.is_verbose_enabled()

    # * Verify verbose lines reach the console when enabled
    def test_vlog_prints(self):
        recorded = Console(record=True, width=120)
        previous = console_module.swap_console(recorded)
        try:
            init_verbose(enabled=True)
            vlog_phase(Phase.CYCLE, Phase.REST, 3)
            text = recorded.export_text()
        finally:
            console_module.swap_console(previous)
        assert "[PHASE]" in text
        assert "cycle -> rest" in text
        assert "Round 3" in text


class TestLogFile:

    # * Verify verbose & warning lines are written to the log file
    def test_log_file(self, tmp_path):
        log_path = tmp_path / "logs" / "run.log"
        init_verbose(enabled=True, log_file=log_path)
        vlog("STORE", "Saved session abc")
        get_output_manager().warning("careful")
        get_output_manager().close_log()
        content = log_path.read_text(encoding="utf-8")
        assert "[STORE] Saved session abc" in content
        assert "[WARNING] careful" in content
