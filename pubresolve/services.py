"""The fixed table of publish services and the variables each one reads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from pubresolve.errors import UnknownServiceError


class ServiceSpec(BaseModel):
    """Static description of a publish destination service."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    locator: Literal["url", "server"]
    env_vars: tuple[str, ...]


SERVICES: dict[str, ServiceSpec] = {
    "quarto-pub": ServiceSpec(
        name="quarto-pub",
        display_name="Quarto Pub",
        locator="url",
        env_vars=("QUARTO_PUB_AUTH_TOKEN",),
    ),
    "netlify": ServiceSpec(
        name="netlify",
        display_name="Netlify",
        locator="url",
        env_vars=("NETLIFY_AUTH_TOKEN",),
    ),
    "connect": ServiceSpec(
        name="connect",
        display_name="Posit Connect",
        locator="server",
        env_vars=("CONNECT_SERVER", "CONNECT_API_KEY"),
    ),
}


def normalize_service_name(name: str) -> str:
    """Canonical form of a service name: lower-case, ``_`` folded to ``-``."""
    return name.strip().lower().replace("_", "-")


def is_known_service(name: str) -> bool:
    return normalize_service_name(name) in SERVICES


def get_service(name: str) -> ServiceSpec:
    """Look up a service by (case-insensitive) name.

    Raises UnknownServiceError if the name is not in the table.
    """
    spec = SERVICES.get(normalize_service_name(name))
    if spec is None:
        raise UnknownServiceError(name, list(SERVICES))
    return spec


__all__ = [
    "SERVICES",
    "ServiceSpec",
    "get_service",
    "is_known_service",
    "normalize_service_name",
]
