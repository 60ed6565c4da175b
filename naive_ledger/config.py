"""Runtime settings read from environment variables and a `.env` file."""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NAIVE_LEDGER_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # NAIVE_PARSER_SOURCE is accepted as well
    source: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("NAIVE_LEDGER_SOURCE", "NAIVE_PARSER_SOURCE"),
    )
    log_level: str = Field(default="WARNING")
    output_format: Literal["csv", "json"] = Field(default="csv")
