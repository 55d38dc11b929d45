"""Subprocess execution for native-image and its version probe."""

import subprocess
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path


class ProcessRunner:
    """Runs external commands synchronously.

    ``run`` hands the terminal to the child and blocks until it exits.
    ``probe`` captures stdout for scanning and always kills the child when
    the caller is done with it.
    """

    def run(self, command: Sequence[str], cwd: Path) -> int:
        """Run ``command`` with inherited standard streams.

        Args:
            command: Command and arguments.
            cwd: Working directory.

        Returns:
            The exit status.

        Raises:
            OSError: If the process cannot be started.
        """
        process = subprocess.Popen(list(command), cwd=cwd)
        try:
            return process.wait()
        except BaseException:
            process.kill()
            process.wait()
            raise

    @contextmanager
    def probe(self, command: Sequence[str]) -> Iterator[subprocess.Popen[str]]:
        """Start ``command`` with stdout piped as text.

        The process is killed and reaped on exit from the context, whether the
        caller finished reading or not.

        Raises:
            OSError: If the process cannot be started.
        """
        process = subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
        )
        try:
            yield process
        finally:
            process.kill()
            if process.stdout is not None:
                process.stdout.close()
            process.wait()
