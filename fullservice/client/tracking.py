"""
Best-effort lookups run around sign-in.

Each lookup has its own timeout and yields a value or ``None``; none of them
ever raises into the sign-in flow.
"""
import asyncio
import locale
import logging
import platform
from typing import Any, Awaitable, Callable, Optional

import httpx

from fullservice.schemas.user import Location

logger = logging.getLogger(__name__)

# called as geolocator(high_accuracy=True)
Geolocator = Callable[..., Awaitable[Location]]

CLIENT_NAME = "fullservice-client"


async def lookup_public_ip(
    url: str,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[str]:
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            ip = resp.json().get("ip")
    except (httpx.HTTPError, httpx.InvalidURL, ValueError, AttributeError) as e:
        logger.warning("Public IP lookup failed: %s", e)
        return None
    if not isinstance(ip, str) or not ip:
        logger.warning("Public IP lookup returned no usable address: %r", ip)
        return None
    return ip


async def locate(geolocator: Optional[Geolocator], timeout: float = 10.0) -> Optional[Location]:
    """Ask the platform for a position; denial, absence and timeout all give None."""
    if geolocator is None:
        return None
    try:
        position = await asyncio.wait_for(geolocator(high_accuracy=True), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Location request timed out after %ss", timeout)
        return None
    except PermissionError:
        logger.info("Location permission denied")
        return None
    except Exception as e:
        logger.warning("Location unavailable: %s", e)
        return None
    if not isinstance(position, Location):
        logger.warning("Geolocator returned %r instead of a position", position)
        return None
    return position


def device_info(screen_resolution: Optional[str] = None) -> dict[str, Any]:
    lang, _ = locale.getlocale()
    return {
        "userAgent": f"{CLIENT_NAME} ({platform.system()} {platform.release()}; Python {platform.python_version()})",
        "platform": platform.platform(),
        "language": lang or "",
        "screenResolution": screen_resolution or "",
    }
