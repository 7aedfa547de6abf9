"""
GitHub REST API client.

A thin wrapper over an httpx.Client authenticated with a personal access
token. Every call is logged through log_api_call and every failure surfaces
as HostingApiError carrying the status code and raw body.
"""

import time
from typing import Any, Dict, Optional

import httpx

from ghkit.constants import API_TIMEOUT, DEFAULT_API_BASE_URL, DEFAULT_HEADERS
from ghkit.errors import HostingApiError
from ghkit.logging import get_logger, log_api_call


def _error_message(response: httpx.Response) -> str:
    """Extract a clean error message from an API error response"""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        message = str(data["message"])
        details = [
            e.get("message") for e in data.get("errors") or []
            if isinstance(e, dict) and e.get("message")
        ]
        if details:
            message = f"{message} ({'; '.join(details)})"
        return message
    return response.text


class GitHubClient:
    """Authenticated session against the hosting API"""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = API_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger("ghkit.api.client")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={**DEFAULT_HEADERS, "Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def request(
        self, method: str, path: str, json: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform one API call and return the decoded JSON body.

        Raises:
            HostingApiError: non-2xx status (status_code set) or transport
                failure (status_code None)
        """
        method_upper = method.upper()
        url = f"{self.base_url}{path}"
        start_time = time.time()
        self.logger.debug(f"Starting {method_upper} request to {url}")

        try:
            response = self._client.request(method_upper, path, json=json)
        except httpx.RequestError as e:
            log_api_call(
                method=method_upper,
                url=url,
                duration=time.time() - start_time,
                error=str(e),
            )
            raise HostingApiError(f"Network error during {method_upper} {path}: {e}") from e

        log_api_call(
            method=method_upper,
            url=url,
            status_code=response.status_code,
            duration=time.time() - start_time,
            response_size=len(response.content) if response.content else None,
        )

        if response.is_error:
            raise HostingApiError(
                _error_message(response),
                status_code=response.status_code,
                body=response.text,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise HostingApiError(
                "Invalid JSON response",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def current_user(self) -> Dict[str, Any]:
        """Profile of the token's owner ("who am I")"""
        return self.request("GET", "/user")

    def get_repo(self, owner: str, name: str) -> Dict[str, Any]:
        return self.request("GET", f"/repos/{owner}/{name}")

    def repo_exists(self, owner: str, name: str) -> bool:
        """True when the repository is visible to the token, False on 404"""
        try:
            self.get_repo(owner, name)
        except HostingApiError as e:
            if e.status_code == 404:
                return False
            raise
        return True

    def create_repo(self, name: str, description: str, private: bool) -> Dict[str, Any]:
        """Create a repository on the authenticated account, without auto-init"""
        self.logger.info(f"Creating repository '{name}' (private={private})")
        return self.request(
            "POST",
            "/user/repos",
            json={
                "name": name,
                "description": description,
                "private": private,
                "auto_init": False,
            },
        )

    def create_ssh_key(self, title: str, public_key: str) -> Dict[str, Any]:
        """Register a public SSH key on the authenticated account"""
        return self.request(
            "POST", "/user/keys", json={"title": title, "key": public_key}
        )
