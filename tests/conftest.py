"""Pytest configuration and shared fixtures.

Provides fabricated interfaces, a fake interface provider, and a recorder
that stands in for both the command executor and the process launcher so
tests can assert the exact order of OS operations.
"""

import asyncio
import sys
from pathlib import Path
from typing import Callable, Generator

import pytest

# Add parent directory to path so imports work
# This allows: from enums import ... to find /project/enums.py
sys.path.insert(0, str(Path(__file__).parent.parent))

from enums import InterfaceKind, OperStatus
from logging_config import setup_logging
from models import CommandResult, NetworkInterfaceInfo


# Configure logging once for entire test session
@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> Generator[None, None, None]:
    """Configure logging for all tests.

    Runs once before any tests (scope="session", autouse=True).
    """
    setup_logging(verbose=False)
    yield


class FakeProvider:
    """InterfaceProvider returning a fixed interface list."""

    def __init__(
        self,
        interfaces: list[NetworkInterfaceInfo] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.interfaces = interfaces or []
        self.error = error
        self.calls = 0

    def list_interfaces(self) -> list[NetworkInterfaceInfo]:
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.interfaces)


class FakeProcess:
    """Stands in for asyncio.subprocess.Process."""

    def __init__(
        self,
        stdout_lines: tuple[str, ...] = (),
        stderr_lines: tuple[str, ...] = (),
        exit_code: int = 0,
        exit_early: bool = False,
        block: bool = False,
    ) -> None:
        self.pid = 4242
        self.stdout = asyncio.StreamReader()
        self.stderr = asyncio.StreamReader()
        for line in stdout_lines:
            self.stdout.feed_data(f"{line}\n".encode())
        for line in stderr_lines:
            self.stderr.feed_data(f"{line}\n".encode())
        self.stdout.feed_eof()
        self.stderr.feed_eof()
        self.exit_code = exit_code
        self.returncode = exit_code if exit_early else None
        self.block = block
        self.terminated = False
        self.reaped = False
        self._exited = asyncio.Event()

    async def wait(self) -> int:
        if self.block:
            await self._exited.wait()
        if self.returncode is None:
            self.returncode = self.exit_code
        self.reaped = True
        return self.returncode

    def terminate(self) -> None:
        self.terminated = True
        self.returncode = -15
        self._exited.set()


class Recorder:
    """Records configuration commands and process spawns in one timeline."""

    def __init__(
        self,
        stdout_lines: tuple[str, ...] = (),
        stderr_lines: tuple[str, ...] = (),
        exit_code: int = 0,
        exit_early: bool = False,
        block: bool = False,
        spawn_error: Exception | None = None,
        failing: Callable[[list[str]], bool] | None = None,
    ) -> None:
        self.events: list[tuple[str, list[str]]] = []
        self.processes: list[FakeProcess] = []
        self.stdout_lines = stdout_lines
        self.stderr_lines = stderr_lines
        self.exit_code = exit_code
        self.exit_early = exit_early
        self.block = block
        self.spawn_error = spawn_error
        self.failing = failing or (lambda cmd: False)

    def executor(self, cmd: list[str]) -> CommandResult:
        self.events.append(("command", list(cmd)))
        if self.failing(cmd):
            return CommandResult(command=list(cmd), returncode=1, stderr="operation failed")
        return CommandResult(command=list(cmd), returncode=0)

    async def launcher(self, *argv: str, stdout=None, stderr=None) -> FakeProcess:
        self.events.append(("spawn", list(argv)))
        if self.spawn_error:
            raise self.spawn_error
        process = FakeProcess(
            stdout_lines=self.stdout_lines,
            stderr_lines=self.stderr_lines,
            exit_code=self.exit_code,
            exit_early=self.exit_early,
            block=self.block,
        )
        self.processes.append(process)
        return process

    @property
    def commands(self) -> list[list[str]]:
        return [argv for kind, argv in self.events if kind == "command"]

    @property
    def spawned(self) -> bool:
        return any(kind == "spawn" for kind, _ in self.events)


async def no_sleep(seconds: float) -> None:
    """Sleep replacement that only yields to the event loop."""
    await asyncio.sleep(0)


@pytest.fixture
def make_interface() -> Callable[..., NetworkInterfaceInfo]:
    """Factory for fabricated interfaces (up, physical, no addresses)."""

    def _make(
        name: str,
        ipv4: list[str] | None = None,
        gateways: list[str] | None = None,
        speed: int = 0,
        kind: InterfaceKind = InterfaceKind.PHYSICAL,
        status: OperStatus = OperStatus.UP,
        description: str | None = None,
    ) -> NetworkInterfaceInfo:
        return NetworkInterfaceInfo(
            name=name,
            description=description if description is not None else name,
            status=status,
            kind=kind,
            ipv4_addresses=ipv4 or [],
            gateways=gateways or [],
            speed=speed,
        )

    return _make


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    """Factory for fake interface providers."""

    def _make(*interfaces: NetworkInterfaceInfo, error: Exception | None = None) -> FakeProvider:
        return FakeProvider(list(interfaces), error=error)

    return _make


@pytest.fixture
def make_recorder() -> Callable[..., Recorder]:
    """Factory for command/spawn recorders."""
    return Recorder


@pytest.fixture
def fast_sleep() -> Callable[[float], object]:
    """Sleep replacement for readiness polling."""
    return no_sleep


@pytest.fixture
def home_network(make_interface) -> list[NetworkInterfaceInfo]:
    """Typical laptop: loopback, wired uplink, docker bridge."""
    return [
        make_interface("lo", ipv4=["127.0.0.1"], kind=InterfaceKind.LOOPBACK),
        make_interface(
            "eth0",
            ipv4=["192.168.1.100"],
            gateways=["192.168.1.1"],
            speed=1000,
        ),
        make_interface("docker0", ipv4=["172.17.0.1"], speed=10000),
    ]
