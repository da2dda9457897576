"""
Integration tests for CommandRunner against real child processes.
"""
import _thread
import os
import sys
import threading
import time
import pytest
from stackup.RUNNERS.command_runner import CommandRunner
from stackup.exceptions import CommandTimeoutError


class TestCommandRunner:
    """Tests for CommandRunner."""

    def test_streams_lines_and_returns_exit_code(self):
        """Each stream's lines reach its own callback, without newlines."""
        out, err = [], []
        code = CommandRunner().run(
            [sys.executable, "-c",
             "import sys; print('one'); print('two'); print('oops', file=sys.stderr); sys.exit(3)"],
            on_stdout=out.append,
            on_stderr=err.append,
        )
        assert code == 3
        assert out == ["one", "two"]
        assert err == ["oops"]

    def test_large_output_on_both_streams(self):
        """Filling both pipes does not deadlock."""
        out, err = [], []
        script = (
            "import sys\n"
            "for i in range(5000):\n"
            "    print('o' * 100)\n"
            "    print('e' * 100, file=sys.stderr)\n"
        )
        code = CommandRunner().run([sys.executable, "-c", script], on_stdout=out.append, on_stderr=err.append)
        assert code == 0
        assert len(out) == 5000
        assert len(err) == 5000

    def test_cwd(self, tmp_path):
        """Commands run in the requested directory."""
        out = []
        CommandRunner().run([sys.executable, "-c", "import os; print(os.getcwd())"],
                            cwd=str(tmp_path), on_stdout=out.append)
        assert out == [str(tmp_path.resolve())] or out == [str(tmp_path)]

    def test_callbacks_are_optional(self):
        """Output is drained even with no callback."""
        assert CommandRunner().run([sys.executable, "-c", "print('ignored')"]) == 0

    def test_run_shell_pipeline(self):
        """run_shell goes through the configured shell."""
        out = []
        code = CommandRunner(shell="sh").run_shell("printf 'a\\nb\\n' | tr a-z A-Z", on_stdout=out.append)
        assert code == 0
        assert out == ["A", "B"]

    def test_missing_binary_raises(self):
        """A command that cannot start raises OSError."""
        with pytest.raises(OSError):
            CommandRunner().run(["definitely-not-a-real-binary-xyz"])

    def test_timeout_kills_child(self):
        """A command past its deadline is killed and reported."""
        runner = CommandRunner(timeout=0.5)
        start = time.monotonic()
        with pytest.raises(CommandTimeoutError) as exc:
            runner.run([sys.executable, "-c", "import time; time.sleep(30)"])
        assert time.monotonic() - start < 10
        assert exc.value.timeout == 0.5

    def test_interrupt_kills_child(self):
        """Ctrl-C while waiting kills the child instead of waiting it out."""
        out = []
        script = "import os, time; print(os.getpid(), flush=True); time.sleep(30)"
        timer = threading.Timer(1.5, _thread.interrupt_main)
        timer.start()
        start = time.monotonic()
        try:
            with pytest.raises(KeyboardInterrupt):
                CommandRunner().run([sys.executable, "-c", script], on_stdout=out.append)
        finally:
            timer.cancel()
        assert time.monotonic() - start < 10
        assert out
        with pytest.raises(ProcessLookupError):
            os.kill(int(out[0]), 0)

    def test_timeout_kills_whole_pipeline(self):
        """Pipeline members holding the pipes are killed too."""
        runner = CommandRunner(shell="sh", timeout=0.5)
        start = time.monotonic()
        with pytest.raises(CommandTimeoutError):
            runner.run_shell("sleep 30 | cat")
        assert time.monotonic() - start < 10
