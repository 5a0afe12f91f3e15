from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum

from barrel.errors import ProcessLaunchError

READ_BUFFER_SIZE = 1024
EXIT_SUCCESS = 0


class StreamMode(Enum):
    STDOUT_ONLY = "stdout"
    STDERR_ONLY = "stderr"
    COMBINED = "combined"


# (stdout, stderr) plumbing per mode; the captured channel always ends up on
# the child's stdout pipe. Same effect as the shell suffixes
# `2>/dev/null`, `2>&1 1>/dev/null` and `2>&1`.
_PLUMBING: dict[StreamMode, tuple[int, int]] = {
    StreamMode.STDOUT_ONLY: (subprocess.PIPE, subprocess.DEVNULL),
    StreamMode.STDERR_ONLY: (subprocess.DEVNULL, subprocess.PIPE),
    StreamMode.COMBINED: (subprocess.PIPE, subprocess.STDOUT),
}


@dataclass(frozen=True)
class ExecutionResult:
    invocation: str
    mode: StreamMode
    captured_output: str
    exit_status: int

    @property
    def ok(self) -> bool:
        return self.exit_status == EXIT_SUCCESS

    @property
    def terminated_by_signal(self) -> bool:
        # subprocess reports death by signal N as -N.
        return self.exit_status < 0


class ProcessRunner:
    """
    Runs a single shell invocation and captures one (or both) of its streams.

    Blocking, no timeout: the call returns only after the child has exited and
    its output has been drained.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("barrel")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def run(self, invocation: str, mode: StreamMode = StreamMode.STDOUT_ONLY) -> ExecutionResult:
        stdout, stderr = _PLUMBING[mode]
        self._logger.debug("RUN %s [%s]", invocation, mode.value)

        try:
            proc = subprocess.Popen(invocation, shell=True, stdout=stdout, stderr=stderr)
        except OSError as e:
            self._logger.error("Failed to launch: %s (%s)", invocation, e)
            raise ProcessLaunchError(invocation, str(e)) from e

        buf = bytearray()
        # Popen.__exit__ closes the pipes and waits on every exit path.
        with proc:
            # The captured channel is the only pipe Popen opened.
            stream = proc.stderr if mode is StreamMode.STDERR_ONLY else proc.stdout
            while True:
                chunk = stream.read(READ_BUFFER_SIZE)
                if not chunk:
                    break
                buf.extend(chunk)
        exit_status = proc.wait()

        self._logger.debug("EXIT %d %s", exit_status, invocation)
        return ExecutionResult(
            invocation=invocation,
            mode=mode,
            captured_output=buf.decode("utf-8", errors="replace"),
            exit_status=exit_status,
        )
