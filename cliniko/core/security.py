import base64

from cliniko.core.config import get_settings
from cliniko.core.errors import CredentialsError

API_URL_TEMPLATE = "https://api.{shard}.cliniko.com/v1"


def shard_from_api_key(api_key: str, default: str | None = None) -> str:
    """Return the shard encoded after the last ``-`` of an API key."""
    fallback = default or get_settings().default_shard
    _, sep, shard = api_key.rpartition("-")
    if not sep or not shard:
        return fallback
    return shard


def api_base_url(api_key: str, base_url: str | None = None) -> str:
    if base_url:
        return base_url.rstrip("/")
    return API_URL_TEMPLATE.format(shard=shard_from_api_key(api_key))


def basic_auth_header(api_key: str) -> str:
    if not api_key:
        raise CredentialsError("Cliniko API key is empty")
    token = base64.b64encode(f"{api_key}:".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def user_agent(vendor_name: str, vendor_email: str) -> str:
    return f"{vendor_name} ({vendor_email})"


def api_headers(api_key: str, vendor_name: str, vendor_email: str) -> dict[str, str]:
    return {
        "Authorization": basic_auth_header(api_key),
        "Accept": "application/json",
        "User-Agent": user_agent(vendor_name, vendor_email),
    }
