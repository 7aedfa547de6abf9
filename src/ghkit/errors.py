"""
Exception taxonomy for ghkit.

Every error raised on purpose by ghkit derives from GhkitError so command
handlers can report it uniformly and exit.
"""

from typing import Optional


class GhkitError(Exception):
    """Base class for ghkit errors"""


class CommandError(GhkitError):
    """A collaborator (git, API, filesystem) failed during an operation."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        target: Optional[str] = None,
    ):
        self.message = message
        self.operation = operation
        self.target = target
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.operation and self.target:
            return f"{self.operation} failed ({self.target}): {self.message}"
        if self.operation:
            return f"{self.operation} failed: {self.message}"
        return self.message


class InvalidInputError(GhkitError):
    """Malformed path or argument"""


class UnrelatedPathsError(InvalidInputError):
    """Parent path contains '..' that cannot be walked lexically"""


class MissingCredentialError(GhkitError):
    """Something required is missing and prompting is disabled"""

    def __init__(self, what: str):
        self.what = what
        super().__init__(f"CLI only mode is enabled, but {what} is not specified")


class KeyProvisioningError(GhkitError):
    """SSH key could not be created, persisted or registered"""


class RemoteRegistryError(GhkitError):
    """Remote recreation failed, possibly after partial cleanup"""

    def __init__(self, step: str, remote_name: str, cause: object = None):
        self.step = step
        self.remote_name = remote_name
        message = f"Failed to {step} for remote '{remote_name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class RetriesExhaustedError(GhkitError):
    """Fetch-until-commit gave up"""

    def __init__(self, commit_id: str, attempts: int):
        self.commit_id = commit_id
        self.attempts = attempts
        super().__init__(
            f"Retries limit reached: commit {commit_id} not found "
            f"after {attempts} attempts"
        )


class HostingApiError(GhkitError):
    """Hosting API returned an error status or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        self.status_code = status_code
        self.body = body
        self.message = message
        super().__init__(
            f"{status_code} - {message}" if status_code is not None else message
        )
