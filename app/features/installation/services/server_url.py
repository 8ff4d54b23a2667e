"""
Server address discovery for the QR code shown next to the installation.

Priority:
1. BASE_URL / NEXT_PUBLIC_BASE_URL (hosted deployments)
2. VERCEL_URL (set by the hosting platform)
3. TUNNEL_URL
4. local IPv4 address + PORT (same Wi-Fi network)
5. FALLBACK_URL
"""
import ipaddress
import socket
from typing import Optional

from pydantic import BaseModel

from app.platform.config import Settings
from app.platform.logger import get_logger

logger = get_logger(__name__)

SCAN_PATH = "/scan"


class ServerUrl(BaseModel):
    url: str
    type: str  # hosted | vercel | tunnel | local | fallback
    scan_url: str


def _is_external_ipv4(address: str) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return ip.version == 4 and not ip.is_loopback and not ip.is_unspecified


def get_local_ip() -> Optional[str]:
    """
    First non-loopback IPv4 address of this machine, or None.

    The UDP connect never sends a packet; it only makes the OS pick the
    interface it would route through.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(("10.255.255.255", 1))
        address = sock.getsockname()[0]
        if _is_external_ipv4(address):
            return address
    except OSError as e:
        logger.debug(f"Route lookup for local IP failed: {e}")
    finally:
        sock.close()

    try:
        address = socket.gethostbyname(socket.gethostname())
    except socket.gaierror as e:
        logger.warning(f"Could not resolve local hostname: {e}")
        return None
    return address if _is_external_ipv4(address) else None


def _with_scan_path(url: str) -> str:
    return url.rstrip("/") + SCAN_PATH


def resolve_server_url(settings: Settings, local_ip: Optional[str] = None) -> ServerUrl:
    """
    Resolve the externally reachable base URL.

    Args:
        settings: application settings holding the configured URLs
        local_ip: pre-resolved local address; looked up when omitted
    """
    base_url = settings.NEXT_PUBLIC_BASE_URL or settings.BASE_URL
    if base_url:
        return ServerUrl(url=base_url, type="hosted", scan_url=_with_scan_path(base_url))

    if settings.VERCEL_URL:
        url = f"https://{settings.VERCEL_URL}"
        return ServerUrl(url=url, type="vercel", scan_url=_with_scan_path(url))

    if settings.TUNNEL_URL:
        return ServerUrl(url=settings.TUNNEL_URL, type="tunnel", scan_url=_with_scan_path(settings.TUNNEL_URL))

    if local_ip is None:
        local_ip = get_local_ip()
    if local_ip:
        url = f"http://{local_ip}:{settings.PORT}"
        return ServerUrl(url=url, type="local", scan_url=_with_scan_path(url))

    return ServerUrl(url=settings.FALLBACK_URL, type="fallback", scan_url=_with_scan_path(settings.FALLBACK_URL))
