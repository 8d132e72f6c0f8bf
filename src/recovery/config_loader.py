"""Configuration loader with Pydantic validation for the recovery module.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values.
"""

from pathlib import Path
from typing import Dict, List

import yaml
from pydantic import BaseModel, Field, field_validator

# Characters handwriting OCR commonly returns in place of the intended one.
# One-directional: an entry for 'L' says nothing about what '1' is misread as.
DEFAULT_CONFUSIONS: Dict[str, List[str]] = {
    "0": ["Q", "D"],
    "O": ["Q", "D"],
    "1": ["L", "T"],
    "I": ["L", "T"],
    "L": ["1", "I"],
    "8": ["B", "R"],
    "B": ["8", "R"],
    "5": ["S", "F"],
    "S": ["5", "F"],
    "Z": ["2", "7"],
    "2": ["Z", "7"],
}


class CorrectionConfig(BaseModel):
    """OCR confusion correction configuration.

    Attributes:
        enabled: Generate confusion substitutions (identity candidate only if False)
        confusions: Character -> ordered list of characters it is mistaken for
    """

    enabled: bool = True
    confusions: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CONFUSIONS.items()}
    )

    @field_validator("confusions")
    @classmethod
    def _validate_confusions(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Uppercase entries and require single characters on both sides.

        Raises:
            ValueError: If a key or a substitution is not exactly one character.
        """
        normalized: Dict[str, List[str]] = {}
        for key, substitutions in v.items():
            if len(key) != 1:
                raise ValueError(f"Confusion key must be a single character, got {key!r}")
            for sub in substitutions:
                if len(sub) != 1:
                    raise ValueError(
                        f"Substitution for {key!r} must be a single character, got {sub!r}"
                    )
            normalized[key.upper()] = [sub.upper() for sub in substitutions]
        return normalized


class MatchingConfig(BaseModel):
    """Best-match configuration.

    Attributes:
        max_distance: Maximum edit distance accepted by the fuzzy pass
        enable_single_substitution: Allow the live-scan Hamming-1 fallback
    """

    max_distance: int = Field(default=2, ge=0)
    enable_single_substitution: bool = True


class GenerationConfig(BaseModel):
    """Code issuing configuration.

    Attributes:
        max_attempts: Codes to try before giving up on a collision-free one
    """

    max_attempts: int = Field(default=10, ge=1)


class RecoveryModuleConfig(BaseModel):
    """Complete recovery module configuration.

    Attributes:
        correction: OCR confusion correction configuration
        matching: Best-match configuration
        generation: Code issuing configuration
    """

    correction: CorrectionConfig = Field(default_factory=CorrectionConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        recovery: Recovery module configuration
    """

    recovery: RecoveryModuleConfig = Field(default_factory=RecoveryModuleConfig)


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file does not exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If configuration validation fails

    Example:
        >>> config = load_config(Path("src/recovery/config.yaml"))
        >>> print(config.recovery.matching.max_distance)
        2
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    # Wrap flat YAML structure in 'recovery' key for Config model
    return Config(recovery=RecoveryModuleConfig(**config_dict))


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file.

    Returns:
        Config object loaded from src/recovery/config.yaml
    """
    default_config_path = Path(__file__).parent / "config.yaml"
    if default_config_path.exists():
        return load_config(default_config_path)
    else:
        # Fallback to hardcoded defaults if config file is missing
        return Config()
