"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

load_dotenv()

CONFIG_ENV_VAR = "BRIDGE_FEE_CONFIG"
LOCAL_CONFIG = Path("bridge-fee.toml")
USER_CONFIG = Path.home() / ".config" / "bridge-fee" / "config.toml"

SECRET_FIELDS = {"rpc_url"}


class TomlConfigSource(PydanticBaseSettingsSource):
    """Lowest precedence source reading a TOML file (top-level or [bridge_fee])."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
        super().__init__(settings_cls)
        self._path = path

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def _resolve_path(self) -> Path | None:
        if self._path:
            return self._path if self._path.exists() else None
        if LOCAL_CONFIG.exists():
            return LOCAL_CONFIG
        if USER_CONFIG.exists():
            return USER_CONFIG
        return None

    def __call__(self) -> dict[str, Any]:
        path = self._resolve_path()
        if path is None:
            return {}

        with path.open("rb") as f:
            data = tomllib.load(f)
        body = data.get("bridge_fee", data)
        if not isinstance(body, dict):
            return {}
        return body


class FeeSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with BRIDGE_FEE_)
    - Config file (TOML), lowest precedence
    """

    # --- endpoints ---
    rpc_url: SecretStr | None = None
    fee_oracle_base_url: str | None = None
    oracle_request_timeout: float | None = Field(default=None, gt=0)

    # --- contracts ---
    fee_handler_address: str | None = None
    fee_handler_router_address: str | None = None

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BRIDGE_FEE_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("rpc_url", mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """RPC URLs often embed an API key."""
        if v is None or isinstance(v, SecretStr):
            return v
        return SecretStr(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with secrets redacted."""
        data = self.model_dump()
        for key in SECRET_FIELDS:
            if data.get(key) is not None:
                data[key] = "***redacted***"
        return data

    @property
    def rpc_url_required(self) -> str:
        """Get rpc_url, raising ValueError if not set."""
        if self.rpc_url is None:
            raise ValueError("rpc_url must be configured")
        return self.rpc_url.get_secret_value()

    @property
    def fee_oracle_base_url_required(self) -> str:
        """Get fee_oracle_base_url, raising ValueError if not set."""
        if self.fee_oracle_base_url is None:
            raise ValueError("fee_oracle_base_url must be configured")
        return self.fee_oracle_base_url

    @property
    def fee_handler_address_required(self) -> str:
        """Get fee_handler_address, raising ValueError if not set."""
        if self.fee_handler_address is None:
            raise ValueError("fee_handler_address must be configured")
        return self.fee_handler_address
