from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def split_names(value: Any) -> list[str]:
    """Split comma-separated names, trimming each token and dropping blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    names: list[str] = []
    for item in value:
        names.extend(token.strip() for token in str(item).split(","))
    return [name for name in names if name]


class Query(BaseModel):
    """Selection criteria: suite names OR'd, tag names OR'd."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    suites: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    case_sensitive: bool = False

    @field_validator("suites", "tags", mode="before")
    @classmethod
    def _split(cls, value: Any) -> list[str]:
        return split_names(value)

    def normalize(self, name: str) -> str:
        return name if self.case_sensitive else name.lower()

    def suite_names(self) -> set[str]:
        return {self.normalize(name) for name in self.suites}

    def tag_names(self) -> set[str]:
        return {self.normalize(name) for name in self.tags}


class RunOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    query: Query = Field(default_factory=Query)
    list_only: bool = False
    verbose: bool = False
