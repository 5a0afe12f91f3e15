from __future__ import annotations

from typing import Any


class BarrelError(RuntimeError):
    """Base class for every error raised by barrel."""


class ProcessLaunchError(BarrelError):
    def __init__(self, invocation: str, reason: str | None = None) -> None:
        self.invocation = invocation
        self.reason = reason
        msg = f"Failed to launch process: {invocation}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class BinaryValidationError(BarrelError):
    """
    The brew binary was reachable but `--version` did not exit successfully.

    Returned (not raised) by Environment.validate() unless check=True.
    """

    def __init__(self, binary_path: str, exit_status: int, output: str) -> None:
        self.binary_path = binary_path
        self.exit_status = exit_status
        self.output = output
        msg = f"Binary validation failed ({exit_status}): {binary_path} --version"
        if output.strip():
            msg += f"\n{output.rstrip()}"
        super().__init__(msg)


class CatalogIntegrityError(BarrelError):
    # Programming error: a (category, identifier) pair without a head token.
    def __init__(self, category: Any, identifier: Any) -> None:
        self.category = category
        self.identifier = identifier
        super().__init__(f"No command head for {category!s}/{identifier!s}")
