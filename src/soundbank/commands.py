"""Command dispatch boundary exposing the bank store to a host application."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import BankError
from .logging import get_logger
from .store import BankStore

logger = get_logger("commands")


class CommandRequest(BaseModel):
    """Incoming command invocation."""

    command: str
    args: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class CommandResponse(BaseModel):
    """Outcome of a command: a result on success, a flat message otherwise."""

    ok: bool
    result: Any | None = None
    error: str | None = None

    model_config = ConfigDict(extra="forbid")


class CommandError(BankError):
    """Raised when a command cannot be dispatched."""


class UnknownCommand(CommandError):
    def __init__(self, command: str) -> None:
        super().__init__(f"Unknown command: {command}")
        self.command = command


class InvalidArguments(CommandError):
    pass


class NoArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")


class RelPathArgs(BaseModel):
    rel_path: str = Field(alias="relPath")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class RelDirArgs(BaseModel):
    rel_dir: str = Field(alias="relDir")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class WriteTextArgs(BaseModel):
    rel_path: str = Field(alias="relPath")
    contents: str

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


CommandHandler = Callable[..., Any]


@dataclass(slots=True)
class _Registration:
    handler: CommandHandler
    args_model: Type[BaseModel]


class CommandRegistry:
    """Registry mapping command names to handlers with validated arguments."""

    def __init__(self) -> None:
        self._commands: Dict[str, _Registration] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        args_model: Optional[Type[BaseModel]] = None,
    ) -> None:
        if name in self._commands:
            raise ValueError(f"Handler already registered for {name}")
        self._commands[name] = _Registration(handler=handler, args_model=args_model or NoArgs)

    def command(
        self, name: str, args_model: Optional[Type[BaseModel]] = None
    ) -> Callable[[CommandHandler], CommandHandler]:
        def decorator(func: CommandHandler) -> CommandHandler:
            self.register(name, func, args_model)
            return func

        return decorator

    def names(self) -> list[str]:
        return sorted(self._commands)

    def dispatch(self, name: str, args: Mapping[str, Any] | None = None) -> Any:
        """Run ``name`` and return its raw result, raising on failure."""
        registration = self._commands.get(name)
        if registration is None:
            raise UnknownCommand(name)
        try:
            parsed = registration.args_model.model_validate(dict(args or {}))
        except ValidationError as exc:
            raise InvalidArguments(f"Invalid arguments for {name}: {_describe(exc)}") from exc
        return registration.handler(**parsed.model_dump())

    def invoke(self, name: str, args: Mapping[str, Any] | None = None) -> CommandResponse:
        """Run ``name`` and fold any bank error into a flat error string."""
        try:
            result = self.dispatch(name, args)
        except BankError as exc:
            logger.warning("command.failed", command=name, error=str(exc))
            return CommandResponse(ok=False, error=str(exc))
        logger.debug("command.ok", command=name)
        return CommandResponse(ok=True, result=result)

    def invoke_json(self, payload: str) -> str:
        """Parse a JSON request, invoke it, and return the JSON response."""
        try:
            request = CommandRequest.model_validate_json(payload)
        except ValidationError as exc:
            response = CommandResponse(ok=False, error=f"Invalid request: {_describe(exc)}")
        else:
            response = self.invoke(request.command, request.args)
        return response.model_dump_json()


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "request"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def build_registry(store: BankStore) -> CommandRegistry:
    """Register the bank file commands under their host-facing names."""
    registry = CommandRegistry()
    registry.register("fs_bank_dir", store.ensure_bank_dir)
    registry.register("fs_write_text", lambda rel_path, contents: store.write_text(rel_path, contents), WriteTextArgs)
    registry.register("fs_read_text", lambda rel_path: store.read_text(rel_path), RelPathArgs)
    registry.register("fs_read_dir", lambda rel_dir: store.read_dir(rel_dir), RelDirArgs)
    registry.register("fs_remove", lambda rel_path: store.remove(rel_path), RelPathArgs)
    registry.register("fs_exists", lambda rel_path: store.exists(rel_path), RelPathArgs)
    return registry


__all__ = [
    "CommandError",
    "CommandHandler",
    "CommandRegistry",
    "CommandRequest",
    "CommandResponse",
    "InvalidArguments",
    "UnknownCommand",
    "build_registry",
]
