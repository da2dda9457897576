# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Execution of the docker CLI as child processes, streaming output line by line.
"""
import os
import signal
import subprocess
import threading
import time
from typing import Callable, IO, List, Optional
from ..exceptions import CommandTimeoutError

LineCallback = Callable[[str], None]

# Keeps the wait responsive to Ctrl-C
POLL_INTERVAL = 0.1


class CommandRunner:
    """
    Runs a command to completion and forwards each output line to a callback.

    stdout and stderr are drained on separate threads so a chatty child can
    never block on a full pipe. Callbacks are serialized, so a line is always
    delivered whole.
    """
    def __init__(self, shell: str = "bash", timeout: Optional[float] = None):
        """
        Initializes the runner.

        Args:
            shell (str): Shell used by run_shell.
            timeout (Optional[float]): Seconds to wait for each command. None waits forever.
        """
        self.shell = shell
        self.timeout = timeout
        self._lock = threading.Lock()

    def run(self,
            command: List[str],
            cwd: Optional[str] = None,
            on_stdout: Optional[LineCallback] = None,
            on_stderr: Optional[LineCallback] = None) -> int:
        """
        Runs the command and waits for it to exit.

        Args:
            command (List[str]): Command and arguments to execute.
            cwd (Optional[str]): Directory to run the command in.
            on_stdout (Optional[LineCallback]): Called with each stdout line.
            on_stderr (Optional[LineCallback]): Called with each stderr line.

        Returns:
            int: The exit code.

        Raises:
            CommandTimeoutError: If the command ran past the timeout. It is killed first.
            KeyboardInterrupt: If interrupted while waiting. The command is killed first.
            OSError: If the command could not be started.
        """
        process = subprocess.Popen(
            command,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            # Avoid shell=True for security reasons (CWE-78)
            shell=False,
            # Own process group, so a timeout also kills pipeline members
            start_new_session=True
        )

        readers = [
            threading.Thread(target=self._pump, args=(process.stdout, on_stdout), daemon=True),
            threading.Thread(target=self._pump, args=(process.stderr, on_stderr), daemon=True),
        ]
        for reader in readers:
            reader.start()

        try:
            self._wait(process)
        except subprocess.TimeoutExpired:
            self._kill(process)
            process.wait()
            raise CommandTimeoutError(command, self.timeout)
        except BaseException:
            # Ctrl-C does not reach the child, it has its own session
            self._kill(process)
            process.wait()
            raise
        finally:
            for reader in readers:
                reader.join()

        return process.returncode

    def run_shell(self,
                  script: str,
                  cwd: Optional[str] = None,
                  on_stdout: Optional[LineCallback] = None,
                  on_stderr: Optional[LineCallback] = None) -> int:
        """
        Runs a shell pipeline through `<shell> -c`.

        Args:
            script (str): The pipeline. Callers quote any interpolated values.

        Returns:
            int: The exit code of the pipeline.
        """
        return self.run([self.shell, "-c", script], cwd=cwd, on_stdout=on_stdout, on_stderr=on_stderr)

    def _wait(self, process: subprocess.Popen):
        """
        Waits for the child in short slices.

        Raises:
            subprocess.TimeoutExpired: Once the timeout has passed.
        """
        started = time.monotonic()
        while True:
            try:
                return process.wait(timeout=POLL_INTERVAL)
            except subprocess.TimeoutExpired:
                if self.timeout is not None and time.monotonic() - started >= self.timeout:
                    raise

    def _pump(self, stream: IO[str], callback: Optional[LineCallback]):
        """
        Reads a stream until EOF, handing each line to the callback.
        """
        with stream:
            for line in iter(stream.readline, ''):
                if callback is None:
                    continue
                with self._lock:
                    callback(line.rstrip('\r\n'))

    def _kill(self, process: subprocess.Popen):
        """
        Kills the child and everything it spawned.
        """
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (AttributeError, ProcessLookupError, PermissionError):
            process.kill()
