from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from barrel.catalog import Builtin, Category, lookup
from barrel.errors import BinaryValidationError
from barrel.proc import EXIT_SUCCESS, ProcessRunner, StreamMode
from barrel.util import expand_path, is_executable

if TYPE_CHECKING:
    from barrel.config import EnvironmentConfig


class Architecture(Enum):
    X86_64 = "x86_64"
    ARM64 = "arm64"

    @classmethod
    def parse(cls, value: str) -> "Architecture":
        v = value.strip().lower()
        if v in {"x86_64", "x86-64", "amd64"}:
            return cls.X86_64
        if v in {"arm64", "aarch64"}:
            return cls.ARM64
        raise ValueError(f"Unknown architecture: {value!r} (expected x86_64 or arm64)")


DEFAULT_INSTALL_PATHS: dict[Architecture, str] = {
    Architecture.X86_64: "/usr/local/bin/brew",
    Architecture.ARM64: "/opt/homebrew/bin/brew",
}


class Environment:
    """
    A brew installation: where the binary lives and whether it has been
    confirmed to run.

    `validated` is a one-way latch owned by this instance. Share an
    Environment across threads only after validate() has returned.
    """

    def __init__(
        self,
        architecture: Architecture = Architecture.X86_64,
        binary_path: str | None = None,
        *,
        skip_validation: bool = False,
        runner: ProcessRunner | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if not isinstance(architecture, Architecture):
            raise ValueError(f"Unknown architecture: {architecture!r}")
        self._architecture = architecture
        if binary_path is None:
            binary_path = DEFAULT_INSTALL_PATHS[architecture]
        self._install_path = str(expand_path(binary_path))
        self._skip_validation = skip_validation
        self._logger = logger or logging.getLogger("barrel")
        self._runner = runner or ProcessRunner(logger=self._logger)
        self._validated = False
        self._install_version: str | None = None

    def __repr__(self) -> str:
        return (
            f"Environment(architecture={self._architecture.value!r}, "
            f"install_path={self._install_path!r}, validated={self._validated})"
        )

    @property
    def architecture(self) -> Architecture:
        return self._architecture

    @property
    def install_path(self) -> str:
        return self._install_path

    @property
    def install_version(self) -> str | None:
        return self._install_version

    @property
    def validated(self) -> bool:
        return self._validated

    @property
    def skip_validation(self) -> bool:
        return self._skip_validation

    @property
    def runner(self) -> ProcessRunner:
        return self._runner

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_available(self) -> tuple[bool, str | None]:
        p = Path(self._install_path)
        if not p.exists():
            return False, f"`{self._install_path}` does not exist"
        if not is_executable(p):
            return False, f"`{self._install_path}` is not an executable file"
        return True, None

    def validate(self, *, check: bool = False) -> BinaryValidationError | None:
        """
        Run `<binary> --version` once and latch the result.

        Returns None on success and the BinaryValidationError on a non-zero
        exit (raised instead when check=True). With skip_validation set no
        process is spawned at all; that mode exists for tests and gives no
        guarantee the binary runs.
        """
        if self._validated:
            self._logger.debug("%s already validated", self._install_path)
            return None

        if self._skip_validation:
            self._logger.warning("Skipping validation of %s (skip_validation is set).", self._install_path)
            self._validated = True
            return None

        invocation = f"{self._install_path} {lookup(Category.BUILTIN, Builtin.VERSION)}"
        res = self._runner.run(invocation, StreamMode.COMBINED)
        if res.exit_status != EXIT_SUCCESS:
            err = BinaryValidationError(self._install_path, res.exit_status, res.captured_output)
            self._logger.debug("%s", err)
            if check:
                raise err
            return err

        self._install_version = res.captured_output.split("\n", 1)[0]
        self._validated = True
        self._logger.info("Using %s at %s", self._install_version or "<unknown version>", self._install_path)
        return None


def create_environment(
    architecture: Architecture | None = None,
    binary_path: str | None = None,
    *,
    config: EnvironmentConfig | None = None,
    skip_validation: bool | None = None,
    runner: ProcessRunner | None = None,
    logger: logging.Logger | None = None,
) -> Environment:
    # Explicit arguments win over the config file, which wins over defaults.
    if config is not None:
        if architecture is None:
            architecture = config.architecture
        if binary_path is None:
            binary_path = config.binary_path
        if skip_validation is None:
            skip_validation = config.skip_validation

    return Environment(
        architecture or Architecture.X86_64,
        binary_path,
        skip_validation=bool(skip_validation),
        runner=runner,
        logger=logger,
    )
