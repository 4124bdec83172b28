"""Shared tunnel lifecycle.

Each platform strategy supplies its device name, the tunnel arguments
and the ordered configuration commands; the lifecycle here decides when
they run:

    Windows/macOS: detect -> start process -> wait for device -> configure -> run
    Linux:         detect -> configure -> start process -> run

Configuration changes are never rolled back, whatever the outcome.
"""

import asyncio
import contextlib
import math
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

import config
from enums import Platform, RunState
from exceptions import TunnelStartError
from logging_config import get_logger
from models import ConfigStep, EgressInfo, PrimaryInterface, ProxyEndpoint, RunReport
from network.selector import InterfaceSelector
from tunnel import CommandRunner, TunnelProcess, TunnelProcessSupervisor
from utils import format_command, mask_tunnel_arguments, sanitize_for_log

logger = get_logger(__name__)

Sleeper = Callable[[float], Awaitable[None]]
EgressProbe = Callable[[], EgressInfo]


class TunnelStrategy(ABC):
    """Per-OS tunnel setup.

    Subclasses set the class attributes and implement configuration_steps().
    """

    platform: Platform
    device: str
    needs_gateway: bool = False
    configure_before_start: bool = False

    def __init__(
        self,
        selector: InterfaceSelector,
        runner: CommandRunner,
        supervisor: TunnelProcessSupervisor,
        proxy: ProxyEndpoint,
        executable: str,
        *,
        readiness_timeout: float = config.READINESS_TIMEOUT_SECONDS,
        poll_interval: float = config.READINESS_POLL_SECONDS,
        sleep: Sleeper = asyncio.sleep,
        egress_probe: EgressProbe | None = None,
    ) -> None:
        self.selector = selector
        self.runner = runner
        self.supervisor = supervisor
        self.proxy = proxy
        self.executable = executable
        self.readiness_timeout = readiness_timeout
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.egress_probe = egress_probe

    def tunnel_arguments(self, primary: PrimaryInterface) -> list[str]:
        """Arguments for the tunnel executable."""
        return [
            "-device",
            self.device,
            "-proxy",
            self.proxy.to_url(),
            "-interface",
            primary.name,
        ]

    @abstractmethod
    def configuration_steps(self, primary: PrimaryInterface) -> list[ConfigStep]:
        """Ordered OS commands that route traffic through the device."""

    async def run(self, report: RunReport) -> RunReport:
        """Drive the tunnel lifecycle until the process exits.

        Args:
            report: Report of this run (privilege gate already passed)

        Returns:
            The same report, in EXITED or FAILED state.
        """
        if self.needs_gateway:
            logger.info("Detecting primary network interface and gateway...")
        else:
            logger.info("Detecting primary network interface...")
        primary = self.selector.select_primary(include_gateway=self.needs_gateway)
        report.interface = primary.name
        report.gateway = primary.gateway
        logger.info("Using %s as the primary network interface", sanitize_for_log(primary.name))
        if primary.gateway:
            logger.info("Using %s as the primary gateway", primary.gateway)
        report.advance(RunState.INTERFACE_DETECTED)

        if self.configure_before_start:
            self._configure(primary, report)

        args = self.tunnel_arguments(primary)
        report.tunnel_command = [self.executable, *mask_tunnel_arguments(args, self.proxy)]
        logger.info(
            "Starting tun2socks with command: %s",
            sanitize_for_log(format_command(report.tunnel_command)),
        )

        handle: TunnelProcess | None = None
        try:
            handle = await self.supervisor.start(self.executable, args)
            report.advance(RunState.PROCESS_STARTED)

            if not self.configure_before_start:
                if await self._wait_for_device(handle):
                    self._configure(primary, report)

            if handle.returncode is None:
                report.advance(RunState.RUNNING)
                logger.info("tun2socks is running. Press Ctrl+C to stop.")
                if self.egress_probe is not None:
                    await self._check_egress(report)

            exit_code = await handle.wait()
        except (TunnelStartError, OSError) as e:
            self._log_failure(e, handle)
            report.fail(str(e))
            return report
        except asyncio.CancelledError:
            if handle is not None:
                handle.terminate()
                with contextlib.suppress(asyncio.TimeoutError):
                    await asyncio.wait_for(handle.wait(), config.TERMINATE_TIMEOUT_SECONDS)
            raise

        report.tunnel_exit_code = exit_code
        logger.info("tun2socks exited with code %s", exit_code)
        report.advance(RunState.EXITED)
        return report

    def _configure(self, primary: PrimaryInterface, report: RunReport) -> None:
        for step in self.configuration_steps(primary):
            logger.info("%s...", step.description)
            report.commands.append(self.runner.run(*step.command, description=step.description))
        report.advance(RunState.INTERFACE_CONFIGURED)

    async def _wait_for_device(self, handle: TunnelProcess) -> bool:
        """Poll until the tunnel's virtual device exists.

        The tunnel process gives no readiness signal. Configuration goes
        ahead once the device is seen, or when the timeout runs out.

        Returns:
            False if the process exited while waiting, True otherwise.
        """
        logger.info("Waiting for %s to be created by tun2socks...", self.device)
        if self.poll_interval > 0:
            attempts = max(1, math.ceil(self.readiness_timeout / self.poll_interval))
        else:
            attempts = 1

        for _ in range(attempts):
            if handle.returncode is not None:
                break
            if self.selector.interface_exists(self.device):
                logger.info("Interface %s is present", self.device)
                return True
            await self.sleep(self.poll_interval)

        if handle.returncode is not None:
            logger.warning(
                "tun2socks exited before %s was configured (code %s)",
                self.device,
                handle.returncode,
            )
            return False

        if self.selector.interface_exists(self.device):
            logger.info("Interface %s is present", self.device)
        else:
            logger.warning(
                "Interface %s not seen after %.1fs, configuring anyway",
                self.device,
                self.readiness_timeout,
            )
        return True

    async def _check_egress(self, report: RunReport) -> None:
        report.egress = await asyncio.to_thread(self.egress_probe)
        logger.info(
            "Egress through tunnel: %s (%s, %s)",
            sanitize_for_log(report.egress.external_ip),
            sanitize_for_log(report.egress.isp),
            sanitize_for_log(report.egress.country),
        )

    def _log_failure(self, error: Exception, handle: TunnelProcess | None) -> None:
        logger.error("Error running tun2socks: %s", sanitize_for_log(str(error)))
        if handle is None:
            return
        stdout, stderr = handle.partial_output()
        if stdout:
            logger.error("Output: %s", sanitize_for_log(stdout))
        if stderr:
            logger.error("Error: %s", sanitize_for_log(stderr))
