import json
import sys
from pathlib import Path

import pytest

from soundbank.commands import CommandRegistry, CommandResponse, InvalidArguments, UnknownCommand, build_registry
from soundbank.store import BankStore


@pytest.fixture()
def registry(store: BankStore) -> CommandRegistry:
    return build_registry(store)


def test_registry_exposes_host_commands(registry: CommandRegistry) -> None:
    assert registry.names() == [
        "fs_bank_dir",
        "fs_exists",
        "fs_read_dir",
        "fs_read_text",
        "fs_remove",
        "fs_write_text",
    ]


def test_bank_dir_returns_root(registry: CommandRegistry, bank_root: Path) -> None:
    response = registry.invoke("fs_bank_dir")
    assert response == CommandResponse(ok=True, result=str(bank_root))
    assert bank_root.is_dir()


def test_write_read_list_remove_cycle(registry: CommandRegistry) -> None:
    write = registry.invoke("fs_write_text", {"relPath": "models/sms/a.json", "contents": "{}"})
    assert write.ok and write.result is None
    assert registry.invoke("fs_read_text", {"relPath": "models/sms/a.json"}).result == "{}"
    assert registry.invoke("fs_read_dir", {"relDir": "models/sms"}).result == ["a.json"]
    assert registry.invoke("fs_exists", {"relPath": "models/sms/a.json"}).result is True
    assert registry.invoke("fs_remove", {"relPath": "models/sms/a.json"}).ok
    assert registry.invoke("fs_exists", {"relPath": "models/sms/a.json"}).result is False


def test_missing_file_is_flattened_to_string(registry: CommandRegistry) -> None:
    response = registry.invoke("fs_read_text", {"relPath": "nope.txt"})
    assert response.ok is False
    assert response.result is None
    assert isinstance(response.error, str) and "nope.txt" in response.error


def test_escape_is_flattened_to_string(registry: CommandRegistry) -> None:
    response = registry.invoke("fs_write_text", {"relPath": "../x.txt", "contents": "x"})
    assert response.ok is False
    assert "escapes" in response.error


def test_unknown_command(registry: CommandRegistry) -> None:
    response = registry.invoke("fs_format_disk")
    assert response.ok is False
    assert "Unknown command" in response.error
    with pytest.raises(UnknownCommand):
        registry.dispatch("fs_format_disk")


@pytest.mark.parametrize(
    "args",
    [{}, {"relPath": 5}, {"relPath": "a.txt", "extra": True}],
)
def test_invalid_arguments(registry: CommandRegistry, args: dict) -> None:
    response = registry.invoke("fs_read_text", args)
    assert response.ok is False
    assert "Invalid arguments for fs_read_text" in response.error
    with pytest.raises(InvalidArguments):
        registry.dispatch("fs_read_text", args)


def test_invoke_json(registry: CommandRegistry) -> None:
    registry.invoke("fs_write_text", {"relPath": "a.txt", "contents": "hello"})
    payload = json.dumps({"command": "fs_read_text", "args": {"relPath": "a.txt"}})
    assert json.loads(registry.invoke_json(payload)) == {"ok": True, "result": "hello", "error": None}


def test_invoke_json_rejects_malformed_request(registry: CommandRegistry) -> None:
    response = json.loads(registry.invoke_json("not json"))
    assert response["ok"] is False
    assert response["error"].startswith("Invalid request")


def test_duplicate_registration() -> None:
    registry = CommandRegistry()

    @registry.command("ping")
    def ping() -> str:
        return "pong"

    assert registry.invoke("ping").result == "pong"
    with pytest.raises(ValueError):
        registry.register("ping", ping)


def test_unexpected_errors_propagate() -> None:
    registry = CommandRegistry()

    @registry.command("boom")
    def boom() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        registry.invoke("boom")


def test_nul_byte_is_flattened_to_string(registry: CommandRegistry) -> None:
    response = registry.invoke("fs_write_text", {"relPath": "a\x00b", "contents": "x"})
    assert response.ok is False
    assert "Invalid character" in response.error


@pytest.mark.skipif(sys.platform == "win32", reason="long-name errors differ on Windows")
def test_overlong_name_exists_and_remove(registry: CommandRegistry) -> None:
    name = "x" * 300
    assert registry.invoke("fs_exists", {"relPath": name}) == CommandResponse(ok=True, result=False)
    assert registry.invoke("fs_remove", {"relPath": name}).ok
