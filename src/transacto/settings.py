# src/transacto/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, SecretStr, field_validator
import os
import yaml

from transacto.abi.selectors import VIEW_BATCH
from transacto.validation import is_address

DEFAULT_RPC = "https://eth.llamarpc.com"
DEFAULT_CONFIG = "configs/dev.yaml"


class RpcCfg(BaseModel):
    url: str = DEFAULT_RPC
    timeout_s: float = 10
    max_retries: int = Field(default=3, ge=1)
    retry_delay_s: float = Field(default=0.5, ge=0)


class ContractCfg(BaseModel):
    address: str | None = None
    batch_size: int = Field(default=VIEW_BATCH, ge=1, le=VIEW_BATCH)

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: str | None) -> str | None:
        if v is not None and not is_address(v):
            raise ValueError(f"contract address must be 0x + 40 hex digits: {v!r}")
        return v


class WalletCfg(BaseModel):
    # Stored only; transacto never signs.
    private_key: SecretStr | None = None


class Settings(BaseSettings):
    env: str = "dev"
    rpc: RpcCfg = RpcCfg()
    contract: ContractCfg = ContractCfg()
    wallet: WalletCfg = WalletCfg()

    model_config = SettingsConfigDict(
        env_prefix="TRANSACTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",  # TRANSACTO_RPC__URL
    )

    @property
    def has_private_key(self) -> bool:
        key = self.wallet.private_key
        return key is not None and bool(key.get_secret_value().strip())

    @classmethod
    def load(cls, path: str):
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

        # env overlay on top of the YAML file
        url = os.getenv("TRANSACTO_RPC_URL")
        key = os.getenv("TRANSACTO_PRIVATE_KEY")
        if url:
            cfg["rpc"] = cfg.get("rpc") or {}
            cfg["rpc"]["url"] = url
        if key:
            cfg["wallet"] = cfg.get("wallet") or {}
            cfg["wallet"]["private_key"] = key

        return cls.model_validate(cfg)
