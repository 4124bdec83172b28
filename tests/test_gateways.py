"""Tests for network/gateways.py.

Tests default route parsing per platform with mocked commands.
"""

from unittest.mock import patch

from enums import Platform
from models import CommandResult
from network.gateways import (
    get_default_gateways,
    metric_sort_key,
    parse_linux_default_routes,
    parse_macos_default_routes,
    parse_windows_default_routes,
)


def ok(stdout: str) -> CommandResult:
    return CommandResult(command=[], returncode=0, stdout=stdout)


class TestParseLinuxDefaultRoutes:
    """Tests for parse_linux_default_routes function."""

    def test_single_route(self) -> None:
        """Test standard DHCP default route."""
        output = "default via 192.168.1.1 dev eth0 proto dhcp metric 100"

        result = parse_linux_default_routes(output)

        assert result == [("eth0", "192.168.1.1", "100")]

    def test_no_metric(self) -> None:
        """Test route without explicit metric."""
        output = "default via 10.0.0.1 dev wlan0"

        result = parse_linux_default_routes(output)

        assert result == [("wlan0", "10.0.0.1", "DEFAULT")]

    def test_point_to_point_skipped(self) -> None:
        """Test route without via has no gateway."""
        output = """default dev tun0 scope link
default via 192.168.1.1 dev eth0 metric 600"""

        result = parse_linux_default_routes(output)

        assert result == [("eth0", "192.168.1.1", "600")]

    def test_empty_output(self) -> None:
        assert parse_linux_default_routes("") == []


class TestParseMacosDefaultRoutes:
    """Tests for parse_macos_default_routes function."""

    def test_default_route(self) -> None:
        """Test netstat routing table parsing."""
        output = """Routing tables

Internet:
Destination        Gateway            Flags               Netif Expire
default            192.168.1.1        UGScg                 en0
default            link#17            UCSIg               utun3
127                127.0.0.1          UCS                   lo0"""

        result = parse_macos_default_routes(output)

        assert result == [("en0", "192.168.1.1", "DEFAULT")]


class TestParseWindowsDefaultRoutes:
    """Tests for parse_windows_default_routes function."""

    def test_default_route(self) -> None:
        """Test route print active routes section."""
        output = """IPv4 Route Table
===========================================================================
Active Routes:
Network Destination        Netmask          Gateway       Interface  Metric
          0.0.0.0          0.0.0.0      192.168.1.1    192.168.1.100     25
          0.0.0.0          0.0.0.0         On-link     192.168.123.1      1
==========================================================================="""

        result = parse_windows_default_routes(output)

        assert result == [("192.168.1.100", "192.168.1.1", "25")]


class TestGetDefaultGateways:
    """Tests for get_default_gateways function."""

    @patch("network.gateways.run_command")
    def test_linux_sorted_by_metric(self, mock_run) -> None:
        """Test lower metric first, duplicates removed."""
        mock_run.return_value = ok(
            "default via 10.0.0.1 dev eth0 metric 600\n"
            "default via 10.0.0.254 dev eth0 metric 100\n"
            "default via 10.0.0.254 dev eth0 metric 700\n"
            "default via 192.168.1.1 dev wlan0 metric 200"
        )

        result = get_default_gateways(Platform.LINUX)

        assert result == {"eth0": ["10.0.0.254", "10.0.0.1"], "wlan0": ["192.168.1.1"]}
        assert mock_run.call_args[0][0] == ["ip", "-4", "route", "show", "default"]

    @patch("network.gateways.run_command")
    def test_macos_command(self, mock_run) -> None:
        """Test macOS uses netstat."""
        mock_run.return_value = ok("default   172.20.10.1   UGScg   en0")

        result = get_default_gateways(Platform.MACOS)

        assert result == {"en0": ["172.20.10.1"]}
        assert mock_run.call_args[0][0] == ["netstat", "-rn", "-f", "inet"]

    @patch("network.gateways.run_command")
    def test_windows_maps_local_address_to_name(self, mock_run) -> None:
        """Test Windows route interface column is mapped to interface name."""
        mock_run.return_value = ok(
            "0.0.0.0   0.0.0.0   192.168.1.1   192.168.1.100   25\n"
            "0.0.0.0   0.0.0.0   10.0.0.1      10.0.0.50       50"
        )

        result = get_default_gateways(
            Platform.WINDOWS,
            {"Wi-Fi": ["192.168.1.100"], "Ethernet": ["169.254.3.3"]},
        )

        assert result == {"Wi-Fi": ["192.168.1.1"]}

    @patch("network.gateways.run_command")
    def test_command_failure(self, mock_run) -> None:
        """Test unreadable route table returns empty dict."""
        mock_run.return_value = CommandResult(command=[], error="command not found")

        assert get_default_gateways(Platform.LINUX) == {}

    @patch("network.gateways.run_command")
    def test_unsupported_platform(self, mock_run) -> None:
        """Test unsupported platform runs nothing."""
        assert get_default_gateways(Platform.UNSUPPORTED) == {}
        mock_run.assert_not_called()


class TestMetricSortKey:
    """Tests for metric_sort_key function."""

    def test_numeric_metrics(self) -> None:
        """Test numeric metrics return category 0 with value."""
        assert metric_sort_key("0") == (0, 0)
        assert metric_sort_key("100") == (0, 100)

    def test_default_metric(self) -> None:
        """Test DEFAULT sorts after explicit metrics."""
        assert metric_sort_key("DEFAULT") == (1, 0)

    def test_sorting_order(self) -> None:
        """Test actual sorting behavior."""
        metrics = ["DEFAULT", "100", "50", "garbage", "200"]
        assert sorted(metrics, key=metric_sort_key) == ["50", "100", "200", "DEFAULT", "garbage"]
