from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os

from dotenv import load_dotenv


ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(ENV_PATH)

LOOKUP_MODES = ("xrpscan", "ledger", "mock")


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "XRP Unity Tracker"))
    tracker_mode: str = field(
        default_factory=lambda: os.getenv("TRACKER_MODE", "xrpscan").lower()
    )
    xrpscan_api_url: str = field(
        default_factory=lambda: os.getenv(
            "XRPSCAN_API_URL", "https://api.xrpscan.com/api/v1"
        ).rstrip("/")
    )
    xrpl_json_rpc_url: str = field(
        default_factory=lambda: os.getenv("XRPL_JSON_RPC_URL", "https://s1.ripple.com:51234/")
    )
    request_timeout_seconds: Optional[float] = field(
        default_factory=lambda: _optional_float("REQUEST_TIMEOUT_SECONDS")
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower())

    def __post_init__(self) -> None:
        if self.tracker_mode not in LOOKUP_MODES:
            raise ValueError(
                f"Unknown TRACKER_MODE {self.tracker_mode!r}; expected one of {', '.join(LOOKUP_MODES)}"
            )


settings = Settings()
