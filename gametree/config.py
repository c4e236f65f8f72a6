# gametree/config.py
import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Defaults (centipawns)
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 320,
    "BISHOP": 330,
    "ROOK": 500,
    "QUEEN": 900,
    "KING": 0,
}

@dataclass
class SearchConfig:
    depth: int = 3
    time_limit_ms: Optional[int] = None  # None means depth-only
    killer_ordering: bool = True

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    mate_score: int = 100000

@dataclass
class UIConfig:
    engine_name: str = "gametree"
    engine_author: str = "gametree developers"
    api_port: int = 8000

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "gametree.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
                else:
                    logger.warning("ignoring unknown config key %s.%s", section, k)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg


def configure_logging(cfg: Config):
    logging.basicConfig(
        level=getattr(logging, str(cfg.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config() -> Config:
    cfg = Config.load_from_toml(os.environ.get("GAMETREE_CONFIG_TOML", "gametree.toml"))
    # allow env override of depth for quick debugging
    override_depth = os.environ.get("GAMETREE_SEARCH_DEPTH")
    if override_depth:
        try:
            cfg.search.depth = int(override_depth)
        except ValueError:
            logger.warning("ignoring GAMETREE_SEARCH_DEPTH=%r, not an integer", override_depth)
    return cfg


# single globally importable config instance
CONFIG = load_config()
