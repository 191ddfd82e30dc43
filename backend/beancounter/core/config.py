from decimal import Decimal
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Bean Counter ERP"
    SHOP_NAME: str = "Bean Counter Coffee Shop"
    SHOP_ADDRESS: str | None = None
    SHOP_PHONE: str | None = None
    TAX_RATE: Decimal = Field(Decimal("0.08"), ge=0, le=1)  # 8% default, 10% in some deployments
    FIXTURES_DIR: Path = DEFAULT_FIXTURES_DIR
    SEED_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"
        env_prefix = "BEANCOUNTER_"


settings = Settings()
