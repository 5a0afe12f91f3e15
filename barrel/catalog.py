"""
Command catalog: (category, identifier) -> literal brew head token.

Tables are built once at import and checked for exhaustiveness there, so a
lookup on a declared identifier can never miss.
"""

from __future__ import annotations

from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Union

from barrel.errors import CatalogIntegrityError


class Category(Enum):
    BUILTIN = "builtin"
    BUILTIN_DEV = "builtin-dev"
    EXTERNAL = "external"

    def __str__(self) -> str:
        return self.value


class Builtin(Enum):
    CACHE = auto()
    CASKROOM = auto()
    CELLAR = auto()
    ENV = auto()
    PREFIX = auto()
    REPOSITORY = auto()
    VERSION = auto()
    ANALYTICS = auto()
    AUTOREMOVE = auto()
    CASKS = auto()
    CLEANUP = auto()
    COMMANDS = auto()
    COMPLETIONS = auto()
    CONFIG = auto()
    DEPS = auto()
    DESC = auto()
    DEVELOPER = auto()
    DOCTOR = auto()
    FETCH = auto()
    FORMULAE = auto()
    GIST_LOGS = auto()
    HELP = auto()
    HOME = auto()
    INFO = auto()
    INSTALL = auto()
    LEAVES = auto()
    LINK = auto()
    LIST = auto()
    LOG = auto()
    MIGRATE = auto()
    MISSING = auto()
    OPTIONS = auto()
    OUTDATED = auto()
    PIN = auto()
    POSTINSTALL = auto()
    READALL = auto()
    REINSTALL = auto()
    SEARCH = auto()
    SHELLENV = auto()
    TAP = auto()
    TAP_INFO = auto()
    UNINSTALL = auto()
    UNLINK = auto()
    UNPIN = auto()
    UNTAP = auto()
    UPDATE = auto()
    UPDATE_REPORT = auto()
    UPDATE_RESET = auto()
    UPGRADE = auto()
    USES = auto()
    VENDOR_INSTALL = auto()


class BuiltinDev(Enum):
    AUDIT = auto()
    BOTTLE = auto()
    BUMP = auto()
    BUMP_CASK_PR = auto()
    BUMP_FORMULA_PR = auto()
    BUMP_REVISION = auto()
    BUMP_UNVERSIONED_CASKS = auto()
    CAT = auto()
    COMMAND = auto()
    CREATE = auto()
    DISPATCH_BUILD_BOTTLE = auto()
    EDIT = auto()
    EXTRACT = auto()
    FORMULA = auto()
    GENERATE_MAN_COMPLETIONS = auto()
    INSTALL_BUNDLER_GEMS = auto()
    IRB = auto()
    LINKAGE = auto()
    LIVECHECK = auto()
    PR_AUTOMERGE = auto()
    PR_PUBLISH = auto()
    PR_PULL = auto()
    PR_UPLOAD = auto()
    PROF = auto()
    RELEASE = auto()
    RUBOCOP = auto()
    RUBY = auto()
    SH = auto()
    SPONSORS = auto()
    STYLE = auto()
    TAP_NEW = auto()
    TEST = auto()
    TESTS = auto()
    TYPECHECK = auto()
    UNBOTTLED = auto()
    UNPACK = auto()
    UPDATE_LICENSE_DATA = auto()
    UPDATE_MAINTAINERS = auto()
    UPDATE_PYTHON_RESOURCES = auto()
    UPDATE_TEST = auto()
    VENDOR_GEMS = auto()


class External(Enum):
    ASPELL_DICTIONARIES = auto()
    DETERMINE_REBOTTLE_RUNNERS = auto()
    POSTGRESQL_UPGRADE_DATABASE = auto()


Identifier = Union[Builtin, BuiltinDev, External]

IDENTIFIER_TYPES: Mapping[Category, type[Enum]] = MappingProxyType(
    {
        Category.BUILTIN: Builtin,
        Category.BUILTIN_DEV: BuiltinDev,
        Category.EXTERNAL: External,
    }
)


def _dashed(member: Enum) -> str:
    return member.name.lower().replace("_", "-")


# Most heads are the dashed lowercase name; only the exceptions are spelled out.
_BUILTIN_OVERRIDES: dict[Builtin, str] = {
    Builtin.CACHE: "--cache",
    Builtin.CASKROOM: "--caskroom",
    Builtin.CELLAR: "--cellar",
    Builtin.ENV: "--env",
    Builtin.PREFIX: "--prefix",
    Builtin.REPOSITORY: "--repository",
    Builtin.VERSION: "--version",
    Builtin.LOG: "logv",
}


def _build_table(enum_type: type[Enum], overrides: Mapping[Enum, str]) -> dict[Enum, str]:
    return {m: overrides.get(m, _dashed(m)) for m in enum_type}


def _check_exhaustive(tables: Mapping[Category, Mapping[Enum, str]]) -> None:
    for category, enum_type in IDENTIFIER_TYPES.items():
        table = tables.get(category)
        if table is None:
            raise CatalogIntegrityError(category, "<table>")
        for member in enum_type:
            head = table.get(member)
            if not isinstance(head, str) or not head:
                raise CatalogIntegrityError(category, member.name)
        extra = [k for k in table if not isinstance(k, enum_type)]
        if extra:
            raise CatalogIntegrityError(category, extra[0])


def _build_catalog() -> Mapping[Category, Mapping[Enum, str]]:
    tables: dict[Category, Mapping[Enum, str]] = {
        Category.BUILTIN: _build_table(Builtin, _BUILTIN_OVERRIDES),
        Category.BUILTIN_DEV: _build_table(BuiltinDev, {}),
        Category.EXTERNAL: _build_table(External, {}),
    }
    _check_exhaustive(tables)
    return MappingProxyType({c: MappingProxyType(dict(t)) for c, t in tables.items()})


_CATALOG = _build_catalog()


def _resolve(category: Category, identifier: Identifier | str) -> Enum:
    if not isinstance(category, Category):
        raise CatalogIntegrityError(category, identifier)
    enum_type = IDENTIFIER_TYPES[category]
    if isinstance(identifier, str):
        name = identifier.strip().upper().replace("-", "_")
        try:
            return enum_type[name]
        except KeyError:
            raise CatalogIntegrityError(category, identifier) from None
    if isinstance(identifier, enum_type):
        return identifier
    raise CatalogIntegrityError(category, identifier)


def lookup(category: Category, identifier: Identifier | str) -> str:
    """
    Return the head token for `identifier` within `category`.

    `identifier` is an enum member of the category's identifier type or its
    name ("TAP_INFO" and "tap-info" are equivalent). Anything outside the
    category raises CatalogIntegrityError.
    """
    member = _resolve(category, identifier)
    head = _CATALOG[category].get(member)
    if head is None:
        raise CatalogIntegrityError(category, identifier)
    return head


def category_of(identifier: Identifier) -> Category:
    for category, enum_type in IDENTIFIER_TYPES.items():
        if isinstance(identifier, enum_type):
            return category
    raise CatalogIntegrityError(None, identifier)


def heads(category: Category) -> Mapping[Enum, str]:
    if not isinstance(category, Category):
        raise CatalogIntegrityError(category, None)
    return _CATALOG[category]
