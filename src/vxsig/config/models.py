"""Pydantic configuration models with env var support."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vxsig.config.defaults import DEFAULT_ADDRESS_WIDTH, DEFAULT_TIMEOUT_SECONDS


class ReaderConfig(BaseModel):
    address_width: int = Field(default=DEFAULT_ADDRESS_WIDTH, ge=8, le=64)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class VxsigConfig(BaseModel):
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
