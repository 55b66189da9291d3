"""Configuration loaded from environment variables.

Uses pydantic-settings so every field can be overridden via env vars.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

# Builder recursion stays inside the default recursion limit up to this depth.
MAX_DEPTH_LIMIT = 100


class ParserConfig(BaseSettings):
    """Message tree builder settings."""

    model_config = {"env_prefix": "PARSER_"}

    max_depth: int = Field(
        default=32,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Deepest multipart nesting that is still split into children",
    )


class AddressConfig(BaseSettings):
    """Address validation settings."""

    model_config = {"env_prefix": "ADDRESS_"}

    use_dns: bool = Field(
        default=False,
        description="Require an MX or A record for the address domain",
    )
    dns_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Lifetime of a single DNS lookup",
    )
    nameservers: list[str] = Field(
        default_factory=list,
        description="Nameservers to query instead of the system resolver config",
    )


class MimetreeConfig(BaseSettings):
    """Root configuration.

    Nested configs are populated from their own env-var prefixes.
    """

    model_config = {"env_prefix": "MIMETREE_"}

    log_level: str = Field(default="INFO", description="Root log level name")
    log_json: bool = Field(default=False, description="Emit JSON log lines instead of console output")

    parser: ParserConfig = Field(default_factory=ParserConfig)
    address: AddressConfig = Field(default_factory=AddressConfig)
