import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    data_file: str
    default_balance: float
    default_goal: float
    currency: str
    log_level: str


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def get_settings() -> Settings:
    """Read settings from the environment (and a .env file, if present)."""
    return Settings(
        data_file=os.getenv("DHANCHAKRA_DATA_FILE", os.path.join("data", "dhanchakra.json")),
        default_balance=_float_env("DHANCHAKRA_DEFAULT_BALANCE", 10000.0),
        default_goal=_float_env("DHANCHAKRA_DEFAULT_GOAL", 1000.0),
        currency=os.getenv("DHANCHAKRA_CURRENCY", "₹"),
        log_level=os.getenv("DHANCHAKRA_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))
