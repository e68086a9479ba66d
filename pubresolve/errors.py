"""User-facing errors raised while resolving a publish destination."""

from __future__ import annotations

from collections.abc import Sequence


class PublishResolutionError(Exception):
    """Base class for every resolution failure.

    Each error carries a ``remediation`` string naming the flag, argument,
    or environment variable the user should supply.
    """

    def __init__(self, message: str, remediation: str = "") -> None:
        self.remediation = remediation
        full = f"{message}. {remediation}" if remediation else message
        super().__init__(full)


class AmbiguousTargetError(PublishResolutionError):
    """More than one recorded destination matches the invocation."""

    def __init__(self, message: str, candidates: Sequence[str], remediation: str) -> None:
        self.candidates = list(candidates)
        super().__init__(f"{message}: {', '.join(self.candidates)}", remediation)


class NoTargetConfiguredError(PublishResolutionError):
    """Nothing on the command line or in the record file names a destination."""


class MissingCredentialsError(PublishResolutionError):
    """One or more recognized environment variables are unset or empty."""

    def __init__(self, service: str, variables: Sequence[str]) -> None:
        self.service = service
        self.variables = list(variables)
        names = ", ".join(self.variables)
        super().__init__(
            f"Missing credentials for {service}",
            f"Set the {names} environment variable{'s' if len(self.variables) > 1 else ''}",
        )


class UnknownServiceError(PublishResolutionError):
    """The requested service is not one we know how to publish to."""

    def __init__(self, service: str, supported: Sequence[str]) -> None:
        self.service = service
        self.supported = list(supported)
        super().__init__(
            f"Unknown publish service {service!r}",
            f"Supported: {', '.join(self.supported)}",
        )


class RecordFileError(PublishResolutionError):
    """The publish record file exists but cannot be used."""

    def __init__(self, path: object, detail: str) -> None:
        self.path = str(path)
        super().__init__(
            f"Invalid publish record file {self.path}: {detail}",
            f"Fix or remove {self.path}",
        )


__all__ = [
    "AmbiguousTargetError",
    "MissingCredentialsError",
    "NoTargetConfiguredError",
    "PublishResolutionError",
    "RecordFileError",
    "UnknownServiceError",
]
