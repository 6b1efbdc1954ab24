"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path
from typing import Any

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .domain import Asset, Chain, LiquidityPool, is_rune

load_dotenv()

CONFIG_ENV_VAR = "THORCHAIN_AMM_CONFIG"


class PoolSettings(BaseModel):
    """A pool snapshot supplied through configuration.

    Balances are base units (8 decimals) and must be positive so every
    configured pool is safe to quote against.
    """

    asset: str
    asset_balance: Decimal = Field(gt=0)
    rune_balance: Decimal = Field(gt=0)

    model_config = ConfigDict(extra="ignore")

    @field_validator("asset")
    @classmethod
    def validate_asset(cls, v: str) -> str:
        asset = Asset.from_string(v)
        if asset.synth:
            raise ValueError(f"Pools are keyed by layer-1 assets, got synth {v}")
        if is_rune(asset):
            raise ValueError("RUNE cannot be the paired asset of a pool")
        return str(asset)

    def to_pool(self) -> LiquidityPool:
        return LiquidityPool(
            asset=Asset.from_string(self.asset),
            asset_balance=self.asset_balance,
            rune_balance=self.rune_balance,
        )


class AmmSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with THORCHAIN_AMM_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- logging ---
    log_level: str = "INFO"

    # --- pool snapshots used for quoting ---
    pools: list[PoolSettings] = Field(default_factory=list)

    # --- chain -> current gas rate (sat/byte, gwei, or flat units) ---
    gas_rates: dict[str, Decimal] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_prefix="THORCHAIN_AMM_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("gas_rates")
    @classmethod
    def normalize_gas_rates(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        """Key gas rates by canonical chain ticker and reject negative rates."""
        normalized: dict[str, Decimal] = {}
        for chain, rate in v.items():
            if rate < 0:
                raise ValueError(f"Gas rate for {chain} must be non-negative, got {rate}")
            normalized[Chain.parse(chain).value] = rate
        return normalized

    @model_validator(mode="after")
    def validate_unique_pools(self) -> "AmmSettings":
        seen: set[str] = set()
        duplicates: set[str] = set()
        for pool in self.pools:
            if pool.asset in seen:
                duplicates.add(pool.asset)
            seen.add(pool.asset)
        if duplicates:
            raise ValueError(
                f"Duplicate pools configured for: {', '.join(sorted(duplicates))}"
            )
        return self

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

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    # Try default locations
                    local_config = Path("thorchain-amm.toml")
                    user_config = (
                        Path.home() / ".config" / "thorchain-amm" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [thorchain_amm]
                body = data.get("thorchain_amm", data)
                if not isinstance(body, dict):
                    return {}
                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,  # optional secrets dir
        )

    def liquidity_pools(self) -> list[LiquidityPool]:
        return [pool.to_pool() for pool in self.pools]

    def pool_for(self, asset: Asset) -> LiquidityPool | None:
        """Configured pool pairing RUNE with ``asset`` (synths use their layer-1 pool)."""
        key = str(asset.to_native())
        for pool in self.pools:
            if pool.asset == key:
                return pool.to_pool()
        return None

    def gas_rate_for(self, chain: Chain | str) -> Decimal | None:
        return self.gas_rates.get(Chain.parse(chain).value)

    def as_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-friendly dict."""
        return self.model_dump(mode="json")
