from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MERKLE_COMMIT_")

    # "packed": keccak256(abi.encodePacked(address)), "padded": 12 zero bytes ++ address
    address_encoding: Literal["packed", "padded"] = "packed"
    sort_addresses: bool = False
    output_path: Path = Path("merkle_data.json")
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value


settings = Settings()
