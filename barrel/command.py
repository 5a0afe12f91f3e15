from __future__ import annotations

from typing import Sequence

from barrel.catalog import Category, Identifier, category_of, lookup
from barrel.environment import Environment
from barrel.proc import ExecutionResult, StreamMode

SEP = " "


class CommandBuilder:
    """
    One brew invocation: `<install_path> <head> <arg>...`.

    The chain is computed once here and reused by every execute(). Arguments
    are joined verbatim, without quoting, and the chain is run through a
    shell: callers must not pass untrusted text.
    """

    def __init__(
        self,
        environment: Environment,
        category: Category,
        identifier: Identifier | str,
        args: Sequence[str] = (),
    ) -> None:
        # Resolve first so a bad identifier fails before anything else.
        self._head = lookup(category, identifier)

        argv = list(args)
        for i, a in enumerate(argv):
            if not isinstance(a, str):
                raise TypeError(f"argument {i} must be a string, got {type(a).__name__}")

        self._environment = environment
        self._category = category
        self._identifier = identifier
        self._args = tuple(argv)
        self._chain = SEP.join([environment.install_path, self._head, *self._args])
        self._result: ExecutionResult | None = None

    def __repr__(self) -> str:
        return f"CommandBuilder({self._chain!r})"

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def category(self) -> Category:
        return self._category

    @property
    def identifier(self) -> Identifier | str:
        return self._identifier

    @property
    def head(self) -> str:
        return self._head

    @property
    def args(self) -> tuple[str, ...]:
        return self._args

    @property
    def chain(self) -> str:
        return self._chain

    @property
    def result(self) -> ExecutionResult | None:
        return self._result

    @property
    def captured_output(self) -> str | None:
        return self._result.captured_output if self._result is not None else None

    @property
    def exit_status(self) -> int | None:
        return self._result.exit_status if self._result is not None else None

    def execute(self) -> ExecutionResult:
        env = self._environment
        if not env.validated:
            env.logger.warning("Running %s against an unvalidated environment.", env.install_path)
        # Each call spawns again and replaces the previous result.
        self._result = env.runner.run(self._chain, StreamMode.COMBINED)
        return self._result


def build_command(environment: Environment, identifier: Identifier, *args: str) -> CommandBuilder:
    return CommandBuilder(environment, category_of(identifier), identifier, args)
