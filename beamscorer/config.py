"""Scorer configuration loaded from YAML."""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class ScorerConfig:
    """Policy constants of the beam scorers.

    Attributes:
        prefix_penalty: Subtracted once per word when it leaves the trie (PrefixScorer)
        missing_prefix_log_prob: log10 score of a partial word with no trie prefix (KenLMBeamScorer)
        trie_suffix: Appended to the model path to find the trie file
    """

    prefix_penalty: float = 1.0
    missing_prefix_log_prob: float = -10.0
    trie_suffix: str = ".trie"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScorerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown scorer config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: Union[str, Path]) -> ScorerConfig:
    """Parse a YAML file into a ScorerConfig.

    Keys that are not given keep their defaults; an empty file gives the
    default config.
    """
    config_path = Path(config_path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.error(f"Config file '{config_path}' not found.")
        raise
    except yaml.YAMLError as e:
        logger.error(f"YAML parse error in '{config_path}': {e}")
        raise

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping; got {type(data).__name__}")

    config = ScorerConfig.from_dict(data)
    logger.info(f"Configuration loaded from {config_path}")
    return config
