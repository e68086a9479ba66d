"""Pydantic models for publish records."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

PROJECT_SOURCE = "project"


class PublishEntry(BaseModel):
    """A single previously-published destination."""

    id: str = Field(description="Service-assigned identifier (usually a UUID)")
    url: str | None = None
    server: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # YAML happily parses bare numeric ids as int
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("id must not be empty")
        return value

    @model_validator(mode="after")
    def _has_locator(self) -> PublishEntry:
        if not self.url and not self.server:
            raise ValueError(f"entry {self.id!r} needs a url or a server")
        return self

    def to_yaml_dict(self) -> dict[str, str]:
        data = {"id": self.id}
        if self.url:
            data["url"] = self.url
        if self.server:
            data["server"] = self.server
        return data


class PublishRecord(BaseModel):
    """All entries for one source published to one service."""

    source: str = PROJECT_SOURCE
    service: str
    entries: list[PublishEntry] = Field(default_factory=list)

    @property
    def source_type(self) -> Literal["project", "document"]:
        return "project" if self.source == PROJECT_SOURCE else "document"

    def find(self, entry_id: str) -> PublishEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None
