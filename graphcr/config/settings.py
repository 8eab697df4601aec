"""Configuration settings for graphcr."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from graphcr.errors import ConfigValidationError, ErrorContext

NAME_PROPERTY_POLICIES = ("declared", "fixed")
LINK_ROLES = ("parent", "up")


class GraphCRConfig(BaseSettings):
    """Configuration for the hierarchical resolver and its transport."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    workspaces: list[str] = Field(default_factory=lambda: ["tests"])
    schema_file: str | None = None
    fixtures_file: str | None = None
    root_types: list[str] = Field(default_factory=list)
    reserved_types: list[str] = Field(
        default_factory=lambda: ["midgard_attachment", "midgard_parameter"]
    )
    metadata_type: str | None = "midgard_metadata"
    identifier_property: str = "guid"
    namespace_prefix: str = "mgd"
    namespace_uri: str = "http://www.midgard-project.org/repligard/1.4"
    name_property_policy: str = Field(
        default="declared",
        description="'declared' uses each type's name_property, 'fixed' only a property called 'name'",
    )
    link_role_order: list[str] = Field(
        default_factory=lambda: ["parent", "up"],
        description="Order in which reverse resolution tries the structural link roles",
    )
    parallel_child_queries: bool = False
    max_workers: int = 4
    verbose: bool = False

    @field_validator("workspaces", mode="after")
    @classmethod
    def validate_workspaces(cls, v: list[str]) -> list[str]:
        if not v or any(not name for name in v):
            raise ConfigValidationError(
                message="At least one non-empty workspace name is required",
                field="workspaces",
                value=v,
            )
        return v

    @field_validator("name_property_policy", mode="before")
    @classmethod
    def validate_name_property_policy(cls, v: str) -> str:
        if v not in NAME_PROPERTY_POLICIES:
            raise ConfigValidationError(
                message=f"Invalid name_property_policy: {v}. Valid: {NAME_PROPERTY_POLICIES}",
                field="name_property_policy",
                value=v,
                context=ErrorContext(extra={"valid_policies": list(NAME_PROPERTY_POLICIES)}),
            )
        return v

    @field_validator("link_role_order", mode="before")
    @classmethod
    def validate_link_role_order(cls, v: list[str]) -> list[str]:
        invalid = set(v) - set(LINK_ROLES)
        if invalid or not v or len(set(v)) != len(v):
            raise ConfigValidationError(
                message=f"link_role_order must list distinct roles from {LINK_ROLES}, got {v}",
                field="link_role_order",
                value=v,
            )
        return v

    @field_validator("namespace_prefix", "identifier_property", mode="after")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ConfigValidationError(message="Value must not be empty", value=v)
        return v

    @field_validator("max_workers", mode="after")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ConfigValidationError(
                message="max_workers must be at least 1",
                field="max_workers",
                value=v,
            )
        return v
