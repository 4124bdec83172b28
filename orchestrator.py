"""Orchestrator for tunnel setup.

Gates on privileges, picks the platform strategy and runs it once. All
failures are absorbed here and reported via logs and the RunReport.
"""

import asyncio

import config
from enums import Platform, RunState
from exceptions import UnsupportedPlatformError
from logging_config import get_logger
from models import ProxyEndpoint, RunReport
from network import InterfaceProvider, InterfaceSelector, PsutilInterfaceProvider
from network import get_egress_info, probe_local_address
from platforms import LinuxStrategy, MacOSStrategy, TunnelStrategy, WindowsStrategy
from platforms.base import Sleeper
from tunnel import CommandExecutor, CommandRunner, ProcessLauncher, TunnelProcessSupervisor
from utils import command_exists, detect_platform, is_elevated, run_command

logger = get_logger(__name__)

STRATEGIES: dict[Platform, type[TunnelStrategy]] = {
    Platform.WINDOWS: WindowsStrategy,
    Platform.MACOS: MacOSStrategy,
    Platform.LINUX: LinuxStrategy,
}


def select_strategy(platform: Platform) -> type[TunnelStrategy]:
    """Get the tunnel strategy class for a platform.

    Raises:
        UnsupportedPlatformError: If the platform has no strategy.
    """
    try:
        return STRATEGIES[platform]
    except KeyError:
        raise UnsupportedPlatformError(
            f"Operating system not supported: {platform.value}"
        ) from None


def check_dependencies(platform: Platform) -> bool:
    """Check the platform's configuration commands exist.

    Advisory only: configuration steps are fire-and-forget, so a missing
    command does not stop the run.

    Returns:
        True if all dependencies present, False otherwise.

    Logs:
        ERROR for each missing command with install hint.
    """
    missing = []

    for cmd in config.REQUIRED_COMMANDS.get(platform.value, []):
        if not command_exists(cmd):
            missing.append(cmd)
            logger.error("Error: Missing required command: %s", cmd)
            hint = config.INSTALL_HINTS.get(cmd)
            if hint:
                logger.error("  Install: %s", hint)

    return len(missing) == 0


async def run_tunnel(
    proxy: ProxyEndpoint,
    executable: str,
    *,
    platform: Platform | None = None,
    provider: InterfaceProvider | None = None,
    executor: CommandExecutor = run_command,
    launcher: ProcessLauncher = asyncio.create_subprocess_exec,
    privilege_check=is_elevated,
    local_address_probe=probe_local_address,
    readiness_timeout: float = config.READINESS_TIMEOUT_SECONDS,
    poll_interval: float = config.READINESS_POLL_SECONDS,
    sleep: Sleeper = asyncio.sleep,
    check_egress: bool = False,
) -> RunReport:
    """Set up the tunnel and block until the tunnel process exits.

    Process:
        1. Select platform strategy (unsupported OS -> FAILED)
        2. Privilege gate (not elevated -> FAILED, nothing attempted)
        3. Strategy lifecycle (detect, start, configure, wait)

    Every OS facility is injectable so the flow can run against fabricated
    interfaces, recorded commands and fake processes.

    Args:
        proxy: SOCKS5 proxy to forward to
        executable: Path to the tun2socks executable
        platform: Host platform (detected if None)
        provider: Interface snapshot source (psutil if None)
        executor: Runs configuration commands
        launcher: Spawns the tunnel process
        privilege_check: Predicate taking the platform
        local_address_probe: Returns the routed local address
        readiness_timeout: Max seconds to wait for the virtual device
        poll_interval: Seconds between device checks
        sleep: Awaitable sleep used while polling
        check_egress: Query the public IP once the tunnel runs

    Returns:
        RunReport in EXITED or FAILED state.
    """
    platform = platform or detect_platform()
    report = RunReport(platform=platform)
    logger.info("Configuring tun2socks for %s...", platform.value)

    try:
        strategy_cls = select_strategy(platform)
    except UnsupportedPlatformError as e:
        logger.error("%s", e)
        report.fail(str(e))
        return report

    report.advance(RunState.PRIVILEGE_CHECK)
    if not privilege_check(platform):
        if platform == Platform.WINDOWS:
            logger.warning(
                "This application requires administrator privileges to configure network interfaces."
            )
            logger.warning("Please run the application as administrator.")
        else:
            logger.warning(
                "This application requires root privileges to configure network interfaces."
            )
            logger.warning("Please run the application with sudo.")
        report.fail("insufficient privileges")
        return report

    selector = InterfaceSelector(
        provider or PsutilInterfaceProvider(platform),
        platform,
        local_address_probe,
    )
    strategy = strategy_cls(
        selector,
        CommandRunner(executor),
        TunnelProcessSupervisor(launcher),
        proxy,
        executable,
        readiness_timeout=readiness_timeout,
        poll_interval=poll_interval,
        sleep=sleep,
        egress_probe=get_egress_info if check_egress else None,
    )
    return await strategy.run(report)
