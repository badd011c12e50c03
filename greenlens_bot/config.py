# SPDX-License-Identifier: CC0-1.0

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .faq import DEFAULT_FAQ_PATH

BASE_DIR = Path(__file__).resolve().parent.parent
LOGS_DIR = BASE_DIR / "logs"


def _seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise RuntimeError(f"{name} must not be negative")
    return value


@dataclass
class Settings:
    brand_name: str
    faq_path: Path
    logs_dir: Path
    typing_delay_min: float = 1.0
    typing_delay_max: float = 2.0

    @classmethod
    def load(cls) -> "Settings":
        env_path = BASE_DIR / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        delay_min = _seconds("TYPING_DELAY_MIN", 1.0)
        delay_max = _seconds("TYPING_DELAY_MAX", 2.0)
        if delay_min > delay_max:
            raise RuntimeError("TYPING_DELAY_MIN is greater than TYPING_DELAY_MAX")

        return cls(
            brand_name=os.getenv("BRAND_NAME", "GreenLens"),
            faq_path=Path(os.getenv("FAQ_PATH") or DEFAULT_FAQ_PATH),
            logs_dir=Path(os.getenv("LOGS_DIR") or LOGS_DIR),
            typing_delay_min=delay_min,
            typing_delay_max=delay_max,
        )
