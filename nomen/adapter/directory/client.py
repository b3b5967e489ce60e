"""Gateway admin API client.

Deletes principals from the authentication gateway once their account has
been absorbed by a merge.
"""

import httpx
import logfire

from nomen.adapter.error import DirectoryError
from nomen.domain.service.merge_service import PrincipalDirectory
from nomen.domain.value import AccountId


class PrincipalDirectoryClient(PrincipalDirectory):
    """Base class for principal directory clients.

    Provides type distinction for dependency injection.
    """

    pass


class HttpPrincipalDirectoryClient(PrincipalDirectoryClient):
    """Principal directory backed by the gateway's admin HTTP API."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Gateway admin API root
            service_key: Service-role key authorizing admin calls
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def delete_principal(self, principal_id: AccountId) -> None:
        """Delete a principal from the gateway.

        Args:
            principal_id: Principal to delete

        Raises:
            DirectoryError: If the gateway refuses or cannot be reached
        """
        url = f"{self.base_url}/admin/users/{principal_id}"
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.delete(
                    url, headers=headers, timeout=self.timeout_seconds
                )
        except httpx.HTTPError as e:
            logfire.error(
                "Principal delete HTTP error",
                principal_id=str(principal_id),
                error=str(e),
            )
            raise DirectoryError(f"HTTP error deleting principal: {e}") from e

        if response.status_code == 404:
            logfire.info("Principal already deleted", principal_id=str(principal_id))
            return

        if response.status_code not in (200, 204):
            logfire.error(
                "Principal delete failed",
                principal_id=str(principal_id),
                status_code=response.status_code,
                error=response.text,
            )
            raise DirectoryError(f"Principal delete failed: {response.status_code}")

        logfire.info("Principal deleted", principal_id=str(principal_id))


class MockPrincipalDirectoryClient(PrincipalDirectoryClient):
    """Mock principal directory for testing.

    Records deletions instead of calling the gateway.
    """

    def __init__(self) -> None:
        """Initialize with an empty record."""
        self.deleted: list[AccountId] = []
        self.fail_with: Exception | None = None

    async def delete_principal(self, principal_id: AccountId) -> None:
        """Record the deletion, or raise ``fail_with`` if set.

        Args:
            principal_id: Principal to delete
        """
        if self.fail_with is not None:
            raise self.fail_with
        if principal_id not in self.deleted:
            self.deleted.append(principal_id)
