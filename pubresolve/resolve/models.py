"""Pydantic models produced by target and credential resolution."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr


class ResolvedTarget(BaseModel):
    """The single destination a publish invocation will go to."""

    service: str
    id: str
    url: str | None = None
    server: str | None = None
    source: str = "project"
    from_record: bool = Field(
        default=False, description="True when any field came from the record file"
    )


class CredentialSet(BaseModel):
    """Authentication material for one service, read from the environment.

    Values are SecretStr so they stay masked in repr and model_dump.
    """

    service: str
    values: dict[str, SecretStr] = Field(default_factory=dict)

    def get(self, variable: str) -> str | None:
        secret = self.values.get(variable)
        return secret.get_secret_value() if secret is not None else None

    @property
    def variables(self) -> list[str]:
        return list(self.values)

    @property
    def token(self) -> str | None:
        for name in self.values:
            if name.endswith("_AUTH_TOKEN"):
                return self.get(name)
        return None

    @property
    def server(self) -> str | None:
        return self.get("CONNECT_SERVER")

    @property
    def api_key(self) -> str | None:
        return self.get("CONNECT_API_KEY")


class PublishPlan(BaseModel):
    """Everything the publish driver needs before rendering and uploading."""

    target: ResolvedTarget
    credentials: CredentialSet
    render: bool = True
