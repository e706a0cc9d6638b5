"""Library configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """kraforge settings."""

    # Paths
    ICC_PROFILE_PATH: Path = Path("layer3.icc")  # sRGB profile embedded in every document
    STAGING_DIR: Optional[Path] = None  # None = system temp directory

    # Document defaults
    KRITA_VERSION: str = "5.2.9"
    PROFILE_NAME: str = "sRGB-elle-V2-srgbtrc.icc"
    RESOLUTION: int = 300  # x-res / y-res in dpi

    # Output
    PREVIEW_SIZE: int = 256
    ARCHIVE_COMPRESSION: Literal["deflated", "stored"] = "deflated"

    model_config = {"env_prefix": "KRAFORGE_"}


settings = Settings()
