from logging import CRITICAL, DEBUG, ERROR, INFO, WARNING
from os import PathLike, environ
from pathlib import Path
from tomllib import load

from pydantic import BaseModel, field_validator

DEFAULT_CONFIG_PATH = Path(environ.get("CRYPTOPRIMER_CONFIG", "config.toml"))

ALLOWED_RSA_KEY_SIZES = (2048, 3072, 4096)


class General(BaseModel):
    name: str = "cryptoprimer"
    title: str


class Database(BaseModel):
    path: str


class Logging(BaseModel):
    level: int

    @field_validator("level", mode="before")
    @classmethod
    def convert_log_level(cls, value):
        log_levels = {
            "DEBUG": DEBUG,
            "INFO": INFO,
            "WARNING": WARNING,
            "ERROR": ERROR,
            "CRITICAL": CRITICAL,
        }
        return log_levels.get(value.upper(), INFO)


class Paths(BaseModel):
    logs: str


class Crypto(BaseModel):
    rsa_key_size: int = 2048
    rsa_public_exponent: int = 65537
    pbkdf2_iterations: int = 480000

    @field_validator("rsa_key_size")
    @classmethod
    def check_key_size(cls, value):
        if value not in ALLOWED_RSA_KEY_SIZES:
            raise ValueError(f"rsa_key_size must be one of {ALLOWED_RSA_KEY_SIZES}")
        return value


class RateLimit(BaseModel):
    timeout_period: int
    requests_per_second: int


class Network(BaseModel):
    host: str
    port: int
    reload: bool

    rate_limit: RateLimit


class Config(BaseModel):
    general: General
    database: Database
    paths: Paths
    logging: Logging
    crypto: Crypto = Crypto()
    network: Network


def load_config(
    shared_config_file: PathLike = DEFAULT_CONFIG_PATH,
    specific_config_file: PathLike | None = None,
) -> Config:
    """Load and merge configurations from TOML files."""
    # Load shared config
    with Path(shared_config_file).open("rb") as f:
        config_data = load(f)

    # Sections from the specific file replace whole sections of the shared one
    if specific_config_file:
        with Path(specific_config_file).open("rb") as f:
            specific_data = load(f)
            config_data.update(specific_data)

    return Config(**config_data)
