"""Core data models used across resolver, controller, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_CONNECT_TIMEOUT_S = 10
DEFAULT_LOG_LEVEL = "WARNING"


class ControllerState(str, Enum):
    ACTIVE = "active"
    DISPOSED = "disposed"


class Action(str, Enum):
    CONNECT = "connect"
    DISCONNECT = "disconnect"


class Outcome(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ALREADY_CONNECTED = "already_connected"
    NOT_CONNECTED = "not_connected"
    CONNECT_FAILED = "connect_failed"
    DISCONNECT_FAILED = "disconnect_failed"


@dataclass(frozen=True)
class ConnectPolicy:
    page_timeout_s: int = DEFAULT_CONNECT_TIMEOUT_S
    require_authentication: bool = True


@dataclass(frozen=True)
class Settings:
    patterns: tuple[str, ...] = ()
    connect_timeout_s: int = DEFAULT_CONNECT_TIMEOUT_S
    require_authentication: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def connect_policy(self) -> ConnectPolicy:
        return ConnectPolicy(
            page_timeout_s=self.connect_timeout_s,
            require_authentication=self.require_authentication,
        )


@dataclass(frozen=True)
class OperationResult:
    name: str | None
    address: str
    action: Action
    ok: bool
    reason: Outcome
    status: int | None = None

    @property
    def label(self) -> str:
        return f"{self.name or '<unnamed>'} ({self.address})"
