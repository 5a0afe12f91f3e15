"""
Typed access to the Homebrew command line.

    env = create_environment(Architecture.ARM64)
    env.validate(check=True)
    cmd = build_command(env, Builtin.INSTALL, "wget")
    cmd.execute()
"""

from barrel.catalog import Builtin, BuiltinDev, Category, External, category_of, heads, lookup
from barrel.command import CommandBuilder, build_command
from barrel.config import EnvironmentConfig, load_config_file
from barrel.environment import DEFAULT_INSTALL_PATHS, Architecture, Environment, create_environment
from barrel.errors import BarrelError, BinaryValidationError, CatalogIntegrityError, ProcessLaunchError
from barrel.proc import ExecutionResult, ProcessRunner, StreamMode
from barrel.util import setup_logger

__all__ = [
    "Architecture",
    "BarrelError",
    "BinaryValidationError",
    "Builtin",
    "BuiltinDev",
    "CatalogIntegrityError",
    "Category",
    "CommandBuilder",
    "DEFAULT_INSTALL_PATHS",
    "Environment",
    "EnvironmentConfig",
    "ExecutionResult",
    "External",
    "ProcessLaunchError",
    "ProcessRunner",
    "StreamMode",
    "build_command",
    "category_of",
    "create_environment",
    "heads",
    "load_config_file",
    "lookup",
    "setup_logger",
]
