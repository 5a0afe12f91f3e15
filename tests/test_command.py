import pytest

from barrel.catalog import Builtin, BuiltinDev, Category, External
from barrel.command import CommandBuilder, build_command
from barrel.environment import Environment
from barrel.errors import CatalogIntegrityError
from barrel.proc import ExecutionResult, StreamMode


def test_echo_scenario():
    env = Environment(binary_path="/bin/echo", skip_validation=True)
    env.validate()
    cmd = CommandBuilder(env, Category.BUILTIN, Builtin.INSTALL, ["wget", "--force"])
    assert cmd.head == "install"
    assert cmd.chain == "/bin/echo install wget --force"

    res = cmd.execute()
    assert res.exit_status == 0
    assert res.captured_output == "install wget --force\n"
    assert cmd.captured_output == "install wget --force\n"
    assert cmd.exit_status == 0


@pytest.mark.parametrize(
    "category, identifier, args",
    [
        (Category.BUILTIN, Builtin.LIST, []),
        (Category.BUILTIN, Builtin.SEARCH, ["--cask", "fire fox", ""]),
        (Category.BUILTIN_DEV, BuiltinDev.BUMP_FORMULA_PR, ["--version=1.0", "foo"]),
        (Category.EXTERNAL, External.ASPELL_DICTIONARIES, ["z", "a"]),
    ],
)
def test_chain_preserves_order(category, identifier, args):
    env = Environment(binary_path="/usr/local/bin/brew")
    cmd = CommandBuilder(env, category, identifier, args)
    expected = " ".join(["/usr/local/bin/brew", cmd.head, *args])
    assert cmd.chain == expected
    assert cmd.chain.startswith(env.install_path + " " + cmd.head)
    assert cmd.args == tuple(args)


def test_accessors_empty_before_execute():
    cmd = CommandBuilder(Environment(), Category.BUILTIN, Builtin.DOCTOR)
    assert cmd.result is None
    assert cmd.captured_output is None
    assert cmd.exit_status is None


def test_missing_catalog_entry_spawns_nothing(spy_runner):
    runner = spy_runner()
    env = Environment(runner=runner)
    with pytest.raises(CatalogIntegrityError):
        CommandBuilder(env, Category.BUILTIN_DEV, Builtin.INSTALL, ["wget"])
    with pytest.raises(CatalogIntegrityError):
        CommandBuilder(env, Category.BUILTIN, "not-a-command")
    assert runner.calls == []


def test_non_string_args_are_rejected():
    with pytest.raises(TypeError):
        CommandBuilder(Environment(), Category.BUILTIN, Builtin.INSTALL, ["wget", 3])


def test_reexecute_overwrites(spy_runner):
    first = ExecutionResult("c", StreamMode.COMBINED, "one\n", 0)
    second = ExecutionResult("c", StreamMode.COMBINED, "two\n", 2)
    runner = spy_runner([first, second])
    env = Environment(binary_path="/opt/brew", runner=runner)
    cmd = CommandBuilder(env, Category.BUILTIN, Builtin.UPDATE)

    cmd.execute()
    assert cmd.captured_output == "one\n"
    cmd.execute()
    assert cmd.captured_output == "two\n"
    assert cmd.exit_status == 2
    assert runner.calls == [("/opt/brew update", StreamMode.COMBINED)] * 2


def test_reexecute_respawns_real_process(stub_binary, tmp_path):
    counter = tmp_path / "count"
    brew = stub_binary(f"echo x >> {counter}; wc -l < {counter}")
    env = Environment(binary_path=str(brew), skip_validation=True)
    cmd = build_command(env, Builtin.LIST)
    cmd.execute()
    cmd.execute()
    assert cmd.captured_output.strip() == "2"


def test_build_command_infers_category():
    cmd = build_command(Environment(binary_path="/b"), BuiltinDev.AUDIT, "--strict", "wget")
    assert cmd.category is Category.BUILTIN_DEV
    assert cmd.chain == "/b audit --strict wget"


def test_unvalidated_environment_warns(spy_runner, caplog):
    ok = ExecutionResult("c", StreamMode.COMBINED, "", 0)
    env = Environment(binary_path="/opt/brew", runner=spy_runner([ok]))
    with caplog.at_level("WARNING", logger="barrel"):
        build_command(env, Builtin.CLEANUP).execute()
    assert "unvalidated" in caplog.text
