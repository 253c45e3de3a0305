"""Tests for executor module."""

from pathlib import Path

from dev_toolbox.executor import (
    CommandResult,
    format_command,
    run_command,
    run_sequential_commands,
)


class TestFormatCommand:
    """Tests for format_command function."""

    def test_quotes_arguments(self) -> None:
        assert format_command(["echo", "hello world"]) == "echo 'hello world'"

    def test_plain(self) -> None:
        assert format_command(["npm", "install", "-D", "sass-embedded"]) == (
            "npm install -D sass-embedded"
        )


class TestRunCommand:
    """Tests for local command execution."""

    async def test_success(self) -> None:
        result = await run_command(["true"])
        assert isinstance(result, CommandResult)
        assert result.success is True
        assert result.exit_code == 0
        assert result.command == "true"

    async def test_failure(self) -> None:
        result = await run_command(["sh", "-c", "exit 3"])
        assert result.success is False
        assert result.exit_code == 3

    async def test_not_found(self) -> None:
        result = await run_command(["nonexistent_command_xyz"])
        assert result.success is False
        assert result.exit_code == 127

    async def test_capture(self) -> None:
        result = await run_command(["sh", "-c", "echo out; echo err >&2"], capture=True)
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"

    async def test_cwd(self, tmp_path: Path) -> None:
        result = await run_command(["pwd"], cwd=tmp_path, capture=True)
        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


class TestRunSequentialCommands:
    """Tests for run_sequential_commands function."""

    async def test_runs_in_order(self, tmp_path: Path) -> None:
        log = tmp_path / "log"
        result = await run_sequential_commands(
            [["sh", "-c", f"echo one >> {log}"], ["sh", "-c", f"echo two >> {log}"]]
        )
        assert result.success is True
        assert log.read_text() == "one\ntwo\n"

    async def test_stops_at_first_failure(self, tmp_path: Path) -> None:
        marker = tmp_path / "third"
        result = await run_sequential_commands(
            [["true"], ["sh", "-c", "exit 2"], ["touch", str(marker)]]
        )
        assert result.success is False
        assert result.exit_code == 2
        assert result.command == "sh -c 'exit 2'"
        assert not marker.exists()

    async def test_empty(self) -> None:
        result = await run_sequential_commands([])
        assert result.success is True
