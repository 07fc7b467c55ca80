"""
Central configuration for the Climb engine.
All values can be overridden via environment variables or a local config.json.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

_ROOT = Path(__file__).parent.parent
_CONFIG_FILE = _ROOT / "config.json"


@dataclass
class Config:
    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8765

    # Heartbeats
    session_tick_s: float = 1.0              # focus countdown step
    distraction_tick_s: float = 60.0         # periodic distraction penalty

    # Profile
    starting_points: int = 150
    profile_name: str = "Explorer"
    history_size: int = 500                  # ledger events held in memory

    # Generative text service
    gemini_api_key: str = ""
    gemini_model: str = "gemini-3-flash-preview"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_s: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_file: str = ""                       # empty → console only

    @classmethod
    def load(cls) -> "Config":
        cfg = cls()
        if _CONFIG_FILE.exists():
            overrides = json.loads(_CONFIG_FILE.read_text())
            for k, v in overrides.items():
                if hasattr(cfg, k):
                    setattr(cfg, k, v)
        # environment variable overrides (CLIMB_*)
        for k in cfg.__dataclass_fields__:  # type: ignore[attr-defined]
            env_key = f"CLIMB_{k.upper()}"
            if env_key in os.environ:
                setattr(cfg, k, type(getattr(cfg, k))(os.environ[env_key]))
        if not cfg.gemini_api_key:
            cfg.gemini_api_key = os.environ.get("API_KEY", "")
        return cfg


# Module-level singleton
config = Config.load()
