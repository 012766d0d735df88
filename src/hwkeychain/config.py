"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Logging
    # ======================
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level for the CLI")

    # ======================
    # Ledger device
    # ======================
    ledger_backend: str = Field(
        default="simulated", description="Ledger backend: simulated or hid"
    )
    ledger_display_hrp: str = Field(
        default="avax", description="Human-readable part shown when confirming addresses"
    )
    ledger_coin_type: int = Field(default=9000, description="BIP44 coin type")
    ledger_account: int = Field(default=0, description="BIP44 account")
    ledger_transport_debug: bool = Field(
        default=False, description="Log raw APDU exchanges in the transport"
    )
    ledger_simulated_seed: str = Field(
        default="hwkeychain", description="Seed for the simulated ledger"
    )

    # ======================
    # Keychain
    # ======================
    keychain_indices: str = Field(
        default="0", description="Comma-separated derivation indices"
    )

    @field_validator("ledger_backend")
    @classmethod
    def _normalize_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("simulated", "hid"):
            raise ValueError(f"Unsupported ledger backend: {value}")
        return value

    @property
    def indices(self) -> list[int]:
        """Parse keychain indices into a list of integers."""
        if not self.keychain_indices:
            return []
        return [int(idx.strip()) for idx in self.keychain_indices.split(",") if idx.strip()]

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "debug": self.debug,
            "ledger": {
                "backend": self.ledger_backend,
                "display_hrp": self.ledger_display_hrp,
                "coin_type": self.ledger_coin_type,
                "account": self.ledger_account,
                "simulated_seed": "***" if self.ledger_simulated_seed else "(not set)",
            },
            "keychain_indices": self.indices,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
