import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("PRODUCTOS_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()

DEFAULT_DATABASE_URL = "postgresql://localhost:5432/productos"
DEFAULT_DATABASE_URLS = {"test": "postgresql://localhost:5432/productos_test"}


@dataclass
class Config:
    environment: str
    database_url: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URLS.get(env, DEFAULT_DATABASE_URL)),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


config = Config.from_env()
