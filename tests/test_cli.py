"""Tests for the command-line entry point."""

from click.testing import CliRunner

from taskpal import __version__
from taskpal.cli import main


class TestCli:
    """Test running Taskpal from the command line."""

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_commands_persist_between_runs(self, tmp_path):
        data_file = tmp_path / "tasks.md"
        runner = CliRunner()

        first = runner.invoke(main, ["--data-file", str(data_file), "-c", "todo read book #fun", "-c", "deadline report /by 26/08/2020 23:59"])
        assert first.exit_code == 0
        assert "Now you have 2 tasks in the list." in first.output
        assert data_file.exists()

        second = runner.invoke(main, ["--data-file", str(data_file), "-c", "done 2", "-c", "list"])
        assert second.exit_code == 0
        assert "1.[T][✗] read book #fun" in second.output
        assert "2.[D][✓] report (by: 26 Aug 2020, 11:59 PM)" in second.output

    def test_failing_command_exits_with_error(self, tmp_path):
        result = CliRunner().invoke(main, ["--data-file", str(tmp_path / "tasks.md"), "-c", "delete 1", "-c", "todo a"])

        assert result.exit_code == 1
        assert "☹ OOPS!!! Task 1 not found." in result.output
        assert "Got it. I've added this task:" in result.output

    def test_bye_stops_batch(self, tmp_path):
        result = CliRunner().invoke(main, ["--data-file", str(tmp_path / "tasks.md"), "-c", "bye", "-c", "todo a"])

        assert result.exit_code == 0
        assert "Bye. Hope to see you again soon!" in result.output
        assert "Got it." not in result.output

    def test_corrupt_task_file(self, tmp_path):
        data_file = tmp_path / "tasks.md"
        data_file.write_text("this is not a task\n", encoding="utf-8")

        result = CliRunner().invoke(main, ["--data-file", str(data_file), "-c", "list"])

        assert result.exit_code == 1
        assert "OOPS" in result.output
        assert data_file.read_text(encoding="utf-8") == "this is not a task\n"

    def test_interactive_session(self, tmp_path):
        result = CliRunner().invoke(main, ["--data-file", str(tmp_path / "tasks.md")], input="todo water plants\nlist\nbye\n")

        assert result.exit_code == 0
        assert "1.[T][✗] water plants" in result.output
        assert "Bye. Hope to see you again soon!" in result.output

    def test_interactive_end_of_input(self, tmp_path):
        result = CliRunner().invoke(main, ["--data-file", str(tmp_path / "tasks.md")], input="")

        assert result.exit_code == 0

    def test_config_file_sets_data_dir(self, tmp_path):
        data_dir = tmp_path / "elsewhere"
        config_path = tmp_path / "config.yaml"
        config_path.write_text(f"data_dir: {data_dir}\n", encoding="utf-8")

        result = CliRunner().invoke(main, ["--config", str(config_path), "-c", "todo a"])

        assert result.exit_code == 0
        assert (data_dir / "tasks.md").exists()
