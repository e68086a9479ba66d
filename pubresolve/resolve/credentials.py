"""Credential resolution from recognized environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import SecretStr

from pubresolve.errors import MissingCredentialsError
from pubresolve.resolve.models import CredentialSet, ResolvedTarget
from pubresolve.services import get_service

logger = logging.getLogger(__name__)


def resolve_credentials(
    service: str,
    env: Mapping[str, str] | None = None,
    target: ResolvedTarget | None = None,
) -> CredentialSet:
    """Read the service's credential variables from ``env`` (default os.environ).

    Every recognized variable must be set and non-empty; otherwise
    MissingCredentialsError lists all of the missing ones. Command-line
    values such as --id or --server never stand in for a credential.
    """
    spec = get_service(service)
    env = os.environ if env is None else env

    values: dict[str, SecretStr] = {}
    missing: list[str] = []
    for name in spec.env_vars:
        value = env.get(name, "").strip()
        if value:
            values[name] = SecretStr(value)
        else:
            missing.append(name)

    if missing:
        raise MissingCredentialsError(spec.display_name, missing)

    credentials = CredentialSet(service=spec.name, values=values)

    if target is not None and target.server and credentials.server:
        if target.server.rstrip("/") != credentials.server.rstrip("/"):
            logger.warning(
                "target server %s differs from CONNECT_SERVER %s; credentials are for %s",
                target.server, credentials.server, credentials.server,
            )

    logger.debug("credentials for %s read from %s", spec.name, ", ".join(values))
    return credentials
