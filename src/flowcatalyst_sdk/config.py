"""Configuration settings for the FlowCatalyst SDK.

Environment variables are prefixed with 'FLOWCATALYST_'.
"""

from __future__ import annotations

from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from the nearest parent directory of the working directory
load_dotenv(find_dotenv(".env", usecwd=True))


class OutboxSettings(BaseSettings):
    """
    Settings consumed by OutboxManager.from_settings and
    configure_sdk_logging_from_settings.
    """

    model_config = SettingsConfigDict(env_prefix="FLOWCATALYST_", extra="ignore")

    # Tenant identifier written to every outbox row; required before any write
    CLIENT_ID: str = ""

    SERVICE_NAME: str = "flowcatalyst_sdk"
    ENVIRONMENT: Literal["development", "staging", "production", "testing"] = "development"
    LOG_LEVEL: str = "INFO"
