# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Launchable process handles built from command tokens."""

from __future__ import annotations

import logging
import shutil

# Bandit: commands are always argument vectors; ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from .errors import EmptyInputError

if TYPE_CHECKING:
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404
    from subprocess import Popen as _Popen  # nosec B404

LOGGER = logging.getLogger(__name__)

TIMEOUT_RETURNCODE: Final[int] = 124


class SubprocessExecutionError(RuntimeError):
    """Raised by :meth:`CommandProcess.run` when ``check`` is set and the exit status is non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int, stdout: str | None, stderr: str | None) -> None:
        super().__init__(f"{argv[0]} exited with status {returncode}: {stderr or '<no stderr>'}")
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _as_text(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode(errors="replace")
    return stream


@dataclass(frozen=True, slots=True)
class CommandProcess:
    """Executable and arguments ready to be handed to the process launcher."""

    executable: str
    args: tuple[str, ...] = ()
    cwd: Path | None = None
    env: Mapping[str, str] | None = field(default=None, compare=False)

    @classmethod
    def from_tokens(
        cls,
        tokens: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandProcess:
        """Split ``tokens`` into executable and arguments.

        Raises:
            EmptyInputError: If ``tokens`` is empty.
        """

        if not tokens:
            raise EmptyInputError("cannot build a process from an empty command")
        head, *rest = tokens
        return cls(executable=head, args=tuple(rest), cwd=cwd, env=env)

    @property
    def argv(self) -> list[str]:
        """Return the full argument vector, executable first."""

        return [self.executable, *self.args]

    def resolved_argv(self) -> list[str]:
        """Return :attr:`argv` with a relative executable looked up on ``PATH``.

        Raises:
            FileNotFoundError: If the executable cannot be found.
        """

        if Path(self.executable).is_absolute():
            return self.argv
        resolved = shutil.which(self.executable)
        if resolved is None:
            raise FileNotFoundError(f"executable {self.executable!r} was not found on PATH")
        return [resolved, *self.args]

    def _launch_options(self) -> dict[str, Any]:
        return {
            "cwd": str(self.cwd) if self.cwd is not None else None,
            "env": dict(self.env) if self.env is not None else None,
        }

    def start(self, **popen_kwargs: Any) -> _Popen[Any]:
        """Launch the process without waiting for it.

        Args:
            **popen_kwargs: Extra keyword arguments for :class:`subprocess.Popen`.

        Returns:
            subprocess.Popen: Handle of the started process.
        """

        argv = self.resolved_argv()
        LOGGER.debug("starting %s", argv)
        return subprocess.Popen(argv, **self._launch_options(), **popen_kwargs)  # nosec B603

    def run(
        self,
        *,
        check: bool = True,
        capture_output: bool = False,
        timeout: float | None = None,
    ) -> _CompletedProcess[str]:
        """Run the process to completion with text-mode output.

        A timeout does not raise; it yields a completed process with return
        code 124 and a note appended to ``stderr``.

        Raises:
            FileNotFoundError: If the executable cannot be found.
            SubprocessExecutionError: If ``check`` is set and the process fails.
        """

        argv = self.resolved_argv()
        LOGGER.debug("running %s", argv)
        try:
            completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
                argv,
                **self._launch_options(),
                check=False,
                capture_output=capture_output,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            note = f"timed out after {timeout}s"
            stderr = _as_text(exc.stderr)
            completed = subprocess.CompletedProcess(
                args=argv,
                returncode=TIMEOUT_RETURNCODE,
                stdout=_as_text(exc.stdout),
                stderr=f"{stderr}\n{note}" if stderr else note,
            )

        if check and completed.returncode != 0:
            raise SubprocessExecutionError(argv, completed.returncode, completed.stdout, completed.stderr)
        return completed


__all__: Final[tuple[str, ...]] = ("CommandProcess", "SubprocessExecutionError")
