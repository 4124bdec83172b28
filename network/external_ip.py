"""External IP and ISP information.

Queries ipinfo.io to show which public address traffic leaves from once
the tunnel is up.
"""

import time
from typing import Any

import requests

import config
from logging_config import get_logger
from models import EgressInfo

logger = get_logger(__name__)


def get_egress_info() -> EgressInfo:
    """Query external IP and ISP information.

    IPv4: 3 attempts, exponential backoff
    Timeout: 10 seconds

    Returns:
        EgressInfo object (or error object on failure)
    """
    logger.debug("Querying egress...")
    response = get_with_retry(config.IPINFO_URL, config.TIMEOUT_SECONDS)

    if not response:
        logger.error("Egress query failed after %d attempts", config.RETRY_ATTEMPTS)
        return EgressInfo.create_error()

    try:
        data = response.json()
    except ValueError:
        logger.error("Invalid JSON from ipinfo.io")
        return EgressInfo.create_error()

    if not validate_api_response(data):
        return EgressInfo.create_error()

    return EgressInfo(
        external_ip=data["ip"],
        isp=data["org"],  # Raw format (with AS number)
        country=data["country"],
    )


def get_with_retry(url: str, timeout: int) -> requests.Response | None:
    """Request with exponential backoff retry.

    Args:
        url: URL to request
        timeout: Request timeout in seconds

    Returns:
        Response object or None if all attempts fail.
    """
    for attempt in range(config.RETRY_ATTEMPTS):
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            if attempt < config.RETRY_ATTEMPTS - 1:
                sleep_time = config.RETRY_BACKOFF_FACTOR * (2**attempt)
                logger.debug("Request attempt %d failed, retrying in %ds", attempt + 1, sleep_time)
                time.sleep(sleep_time)
            else:
                logger.debug(
                    "Request failed after %d attempts: %s",
                    config.RETRY_ATTEMPTS,
                    str(e),
                )
    return None


def validate_api_response(data: Any) -> bool:
    """Validate ipinfo.io response.

    Args:
        data: JSON response data

    Returns:
        True if response contains all required fields, False otherwise.
    """
    if not isinstance(data, dict):
        logger.error("API response is not a JSON object")
        return False

    required = ["ip", "org", "country"]
    for field in required:
        if field not in data or not data[field]:
            logger.error("API response missing required field: %s", field)
            return False
    return True
