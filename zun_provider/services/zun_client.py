"""Zun capsule API client."""

import logging
from typing import Any, Dict, Iterator, List, Optional

import httpx
from pydantic import ValidationError

from zun_provider.core.errors import MalformedCapsuleError
from zun_provider.models.capsule import Capsule, CapsuleTemplate

logger = logging.getLogger(__name__)


class ZunClientError(Exception):
    """Base exception for Zun API errors."""
    pass


class ZunConnectionError(ZunClientError):
    """Raised when the Zun API cannot be reached."""
    pass


class ZunAuthenticationError(ZunClientError):
    """Raised when the Zun API rejects the token."""
    pass


class ZunNotFoundError(ZunClientError):
    """Raised when a capsule does not exist."""
    pass


class ZunClient:
    """Client for the capsule endpoints of the Zun container API."""

    def __init__(
        self,
        endpoint: str,
        token: str,
        api_version: str = "1.32",
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the Zun client.

        Args:
            endpoint: Zun endpoint from the service catalog, with or without /v1
            token: Keystone token sent as X-Auth-Token
            api_version: Container API microversion
            timeout: Request timeout in seconds
            client: Preconfigured HTTP client, used as-is when given
        """
        self.endpoint = endpoint.rstrip("/")
        if not self.endpoint.endswith("/v1"):
            self.endpoint = f"{self.endpoint}/v1"
        self.api_version = api_version
        self.timeout = timeout
        self.client = client or httpx.Client(
            base_url=self.endpoint,
            headers={
                "X-Auth-Token": token,
                "OpenStack-API-Version": f"container {api_version}",
                "Accept": "application/json",
            },
            timeout=timeout,
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            raise ZunConnectionError(f"Request timed out after {self.timeout} seconds")
        except httpx.RequestError as e:
            raise ZunConnectionError(f"Failed to connect to Zun at {self.endpoint}: {e}")

        if response.status_code == 404:
            raise ZunNotFoundError(f"Not found: {method} {url}")
        if response.status_code in (401, 403):
            raise ZunAuthenticationError(
                f"Zun rejected the request ({response.status_code}). Check the token and project."
            )
        if response.status_code >= 400:
            raise ZunClientError(f"Zun API error {response.status_code}: {_error_detail(response)}")
        return response

    def create_capsule(self, template: CapsuleTemplate) -> Capsule:
        """
        Create a capsule from a template.

        The capsule name and labels travel in the template metadata; Zun
        generates the UUID, addresses and timestamps.
        """
        logger.info(f"Creating capsule {template.name}")
        response = self._request("POST", "/capsules/", json={"template": template.to_request()})
        return parse_capsule(response.json())

    def get_capsule(self, ident: str) -> Capsule:
        response = self._request("GET", f"/capsules/{ident}")
        return parse_capsule(response.json())

    def list_capsule_pages(self) -> Iterator[List[Dict[str, Any]]]:
        """
        Yield the raw capsule records of each page of the capsule list.

        Records are left unparsed so callers can skip a malformed entry
        without losing the rest of the page.
        """
        url: Optional[str] = "/capsules/"
        while url:
            payload = self._request("GET", url).json()
            yield payload.get("capsules", [])
            url = payload.get("next")

    def delete_capsule(self, ident: str) -> None:
        logger.info(f"Deleting capsule {ident}")
        self._request("DELETE", f"/capsules/{ident}")

    def close(self) -> None:
        self.client.close()


def parse_capsule(record: Any) -> Capsule:
    """
    Validate a raw capsule record from the Zun API.

    Raises:
        MalformedCapsuleError: If the record is not a capsule object or a field has the wrong type
    """
    if not isinstance(record, dict):
        raise MalformedCapsuleError(f"Expected a capsule object, got {type(record).__name__}")
    try:
        return Capsule(**record)
    except ValidationError as e:
        name = record.get("meta_name") or record.get("uuid")
        raise MalformedCapsuleError(f"Capsule {name!r} is malformed: {e.error_count()} invalid field(s)") from e


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    # Zun wraps errors as {"errors": [{"detail": ...}]}
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors:
        return "; ".join(str(e.get("detail", e)) for e in errors)
    return str(body)


def create_zun_client(auth_config: dict, session=None) -> ZunClient:
    """
    Authenticate against Keystone and build a Zun client for the region.

    Args:
        auth_config: Settings from config.get_openstack_auth_config()
        session: Optional KeystoneSession, built from auth_config when omitted
    """
    from zun_provider.services.keystone import KeystoneSession

    session = session or KeystoneSession(**auth_config)
    token = session.authenticate()
    endpoint = session.endpoint_for(
        "container",
        region_name=auth_config.get("region_name"),
        interface=auth_config.get("interface", "public"),
    )
    logger.info(f"Using Zun endpoint {endpoint}")
    return ZunClient(
        endpoint=endpoint,
        token=token,
        api_version=auth_config.get("zun_api_version", "1.32"),
    )
