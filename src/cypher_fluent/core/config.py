"""Configuration management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Graph server
    graph_uri: str = Field(
        default="http://localhost:7474/db/data/",
        description="Service root of the graph database REST API",
    )
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # Query rendering
    placeholder_style: Literal["braces", "dollar"] = Field(
        default="braces",
        description="Parameter placeholder syntax: {p0} or $p0",
    )

    # App config
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CYPHER_FLUENT_",
        extra="ignore",  # Ignore extra fields in .env file
    )


settings = Settings()
