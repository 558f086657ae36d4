"""
Configuration loading and validation.

This module handles loading of the engine's YAML configuration file,
validates that the scoring section is coherent, and applies the
configured log level.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

SCORING_COMPONENTS = [
    "goal_match",
    "interest_match",
    "learning_style_match",
    "personality_match",
    "engagement_match",
]


def load_config(filepath: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file. The bundled
            default configuration is used when omitted.

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath) if filepath is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info(f"Loading configuration from {path}")
    with open(path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {path}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in ["global", "quiz", "scoring"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "quiz" in config and not config["quiz"].get("catalogue_path"):
        issues.append("Missing quiz.catalogue_path")

    if "scoring" in config:
        scoring = config["scoring"]
        weights = scoring.get("weights", {})
        for component in SCORING_COMPONENTS:
            if component not in weights:
                issues.append(f"Missing scoring.weights.{component}")
        unknown = sorted(set(weights) - set(SCORING_COMPONENTS))
        if unknown:
            issues.append(f"Unknown scoring weights: {', '.join(unknown)}")
        total = sum(weights.values())
        if weights and abs(total - 1.0) > 0.01:
            issues.append(f"Scoring weights don't sum to 1: {total}")

        thresholds = scoring.get("thresholds", {})
        highly = thresholds.get("highly_recommended", 75)
        recommended = thresholds.get("recommended", 60)
        if not 0 <= recommended <= highly <= 100:
            issues.append(
                f"Tier thresholds must satisfy 0 <= recommended <= highly_recommended <= 100, "
                f"got {recommended} and {highly}"
            )

        limit = scoring.get("default_limit", 5)
        if not isinstance(limit, int) or limit < 0:
            issues.append(f"scoring.default_limit must be a non-negative integer, got {limit}")

    if "global" in config:
        level = str(config["global"].get("log_level", "INFO")).upper()
        if not isinstance(logging.getLevelName(level), int):
            issues.append(f"Unknown global.log_level: {level}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.weights.goal_match")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def resolve_path(config_path: Optional[str], relative: str) -> Path:
    """
    Resolve a path from the config file relative to the config's directory.

    Absolute paths are returned unchanged.
    """
    candidate = Path(relative)
    if candidate.is_absolute():
        return candidate
    base = Path(config_path).parent if config_path is not None else DEFAULT_CONFIG_PATH.parent
    return (base / candidate).resolve()
