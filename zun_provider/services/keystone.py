"""Keystone v3 password authentication and service catalog lookup."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from zun_provider.services.zun_client import (
    ZunAuthenticationError,
    ZunClientError,
    ZunConnectionError,
)

logger = logging.getLogger(__name__)


class KeystoneSession:
    """Holds a Keystone token and the service catalog issued with it."""

    def __init__(
        self,
        auth_url: str,
        username: str,
        password: str,
        project_name: Optional[str] = None,
        project_id: Optional[str] = None,
        user_domain_name: str = "Default",
        project_domain_name: str = "Default",
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
        **_: Any,
    ):
        self.auth_url = auth_url.rstrip("/")
        if not self.auth_url.endswith("/v3"):
            self.auth_url = f"{self.auth_url}/v3"
        self.username = username
        self.password = password
        self.project_name = project_name
        self.project_id = project_id
        self.user_domain_name = user_domain_name
        self.project_domain_name = project_domain_name
        self.client = client or httpx.Client(timeout=timeout)
        self.token: Optional[str] = None
        self.catalog: List[Dict[str, Any]] = []

    def _auth_body(self) -> Dict[str, Any]:
        if self.project_id:
            project = {"id": self.project_id}
        else:
            project = {
                "name": self.project_name,
                "domain": {"name": self.project_domain_name},
            }
        return {
            "auth": {
                "identity": {
                    "methods": ["password"],
                    "password": {
                        "user": {
                            "name": self.username,
                            "domain": {"name": self.user_domain_name},
                            "password": self.password,
                        }
                    },
                },
                "scope": {"project": project},
            }
        }

    def authenticate(self) -> str:
        """
        Request a project-scoped token.

        Returns:
            The issued token

        Raises:
            ZunAuthenticationError: If Keystone rejects the credentials
            ZunConnectionError: If Keystone cannot be reached
            ZunClientError: For other Keystone errors
        """
        url = f"{self.auth_url}/auth/tokens"
        try:
            response = self.client.post(url, json=self._auth_body())
        except httpx.RequestError as e:
            raise ZunConnectionError(f"Failed to connect to Keystone at {self.auth_url}: {e}")

        if response.status_code in (401, 403):
            raise ZunAuthenticationError("Keystone authentication failed. Check OS_* credentials.")
        if response.status_code >= 400:
            raise ZunClientError(f"Keystone error {response.status_code}: {response.text}")

        self.token = response.headers.get("X-Subject-Token")
        if not self.token:
            raise ZunAuthenticationError("Keystone response carried no X-Subject-Token")
        self.catalog = response.json().get("token", {}).get("catalog", [])
        logger.info(f"Authenticated to Keystone as {self.username}")
        return self.token

    def endpoint_for(
        self,
        service_type: str = "container",
        region_name: Optional[str] = None,
        interface: str = "public",
    ) -> str:
        """
        Find a service endpoint URL in the token's catalog.

        Raises:
            ZunClientError: If no matching endpoint is published
        """
        for service in self.catalog:
            if service.get("type") != service_type:
                continue
            for endpoint in service.get("endpoints", []):
                if endpoint.get("interface") != interface:
                    continue
                if region_name and endpoint.get("region_id", endpoint.get("region")) != region_name:
                    continue
                return endpoint["url"].rstrip("/")

        raise ZunClientError(
            f"No {interface} endpoint for service type {service_type!r}"
            + (f" in region {region_name}" if region_name else "")
        )
