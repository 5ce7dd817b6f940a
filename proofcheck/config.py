"""
Configuration for proofcheck runs.

All options have defaults matching the reference proofreading workflow;
create a config only to point at data files or tune thresholds.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal

import yaml

from proofcheck.exceptions import ConfigurationError


@dataclass
class SpellcheckConfig:
    """
    Configuration for suspect-word resolution and edit-distance matching.

    Example:
        >>> config = CheckConfig(
        ...     spellcheck=SpellcheckConfig(max_workers=4)
        ... )
    """

    # Unresolved words seen at least this often are accepted as intentional
    frequency_amnesty: int = 4

    # Edit-distance options
    run_edit_distance: bool = True
    min_suspect_length: int = 5  # in code points
    max_edit_distance: int = 1  # report pairs at distance <= this
    max_workers: int = 1  # >1 fans the matcher out to a process pool
    backend: Literal["native", "rapidfuzz"] = "native"

    # Context lines shown per suspect word (ignored when verbose)
    context_lines: int = 2

    def __post_init__(self):
        """Validate configuration."""
        if self.frequency_amnesty < 1:
            raise ConfigurationError(
                f"frequency_amnesty must be >= 1, got {self.frequency_amnesty}"
            )
        if self.min_suspect_length < 1:
            raise ConfigurationError(
                f"min_suspect_length must be >= 1, got {self.min_suspect_length}"
            )
        if self.max_edit_distance < 1:
            raise ConfigurationError(
                f"max_edit_distance must be >= 1, got {self.max_edit_distance}"
            )
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")
        valid_backends = ("native", "rapidfuzz")
        if self.backend not in valid_backends:
            raise ConfigurationError(
                f"backend must be one of {valid_backends}, got {self.backend!r}"
            )
        if self.context_lines < 1:
            raise ConfigurationError(f"context_lines must be >= 1, got {self.context_lines}")


@dataclass
class QuoteScanConfig:
    """Configuration for the quotation-mark balance scanner."""

    enabled: bool = True

    # Capitalized words seen at least this often (and not in the
    # dictionary) are treated as proper names
    proper_name_min_frequency: int = 5

    # Column at which flagged paragraphs are rewrapped for display
    wrap_width: int = 70

    def __post_init__(self):
        """Validate configuration."""
        if self.proper_name_min_frequency < 1:
            raise ConfigurationError(
                f"proper_name_min_frequency must be >= 1, got {self.proper_name_min_frequency}"
            )
        if self.wrap_width < 20:
            raise ConfigurationError(f"wrap_width must be >= 20, got {self.wrap_width}")


@dataclass
class JeebiesConfig:
    """Configuration for the he/be substitution heuristic."""

    enabled: bool = True

    # Flag when alternative/phrase frequency ratio exceeds this
    threshold: float = 1.0

    def __post_init__(self):
        """Validate configuration."""
        if self.threshold <= 0.0:
            raise ConfigurationError(f"threshold must be > 0.0, got {self.threshold}")


@dataclass
class CheckConfig:
    """
    Configuration for a full proofcheck run.

    Example:
        >>> config = CheckConfig(
        ...     dictionary_path=Path("words.txt"),
        ...     hebe_path=Path("hebelist.txt"),
        ... )
        >>> report = proofcheck.check_file("book.txt", config)
    """

    # Data files (missing files degrade the run, they never abort it)
    dictionary_path: Path | None = None
    good_words_path: Path | None = None
    hebe_path: Path | None = None

    # Seed the dictionary from pyspellchecker when no curated list is given
    use_builtin_dictionary: bool = False
    language: str = "en"

    # Show every context line instead of the first few
    verbose: bool = False

    # Error handling between components
    on_component_error: Literal["raise", "warn"] = "warn"

    spellcheck: SpellcheckConfig = field(default_factory=SpellcheckConfig)
    quotes: QuoteScanConfig = field(default_factory=QuoteScanConfig)
    jeebies: JeebiesConfig = field(default_factory=JeebiesConfig)

    def __post_init__(self):
        """Validate configuration."""
        valid_error_modes = ("raise", "warn")
        if self.on_component_error not in valid_error_modes:
            raise ConfigurationError(
                f"on_component_error must be one of {valid_error_modes}, "
                f"got {self.on_component_error!r}"
            )
        for name in ("dictionary_path", "good_words_path", "hebe_path"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Path):
                setattr(self, name, Path(value))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckConfig:
        """
        Build a config from a plain mapping (as parsed from YAML).

        Nested sections ``spellcheck``, ``quotes`` and ``jeebies`` map to
        their sub-configs.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        sections = {
            "spellcheck": SpellcheckConfig,
            "quotes": QuoteScanConfig,
            "jeebies": JeebiesConfig,
        }
        kwargs: dict[str, Any] = {}
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                raise ConfigurationError(f"Unknown configuration key: {key!r}")
            if key in sections:
                kwargs[key] = _build_section(sections[key], key, value or {})
            else:
                kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> CheckConfig:
        """
        Load a config from a YAML file.

        Raises:
            ConfigurationError: If the file is unreadable, malformed, or
                contains unknown keys.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load configuration from {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {path} must be a mapping")
        return cls.from_dict(data)


def _build_section(section_cls: type, name: str, data: dict[str, Any]) -> Any:
    known = {f.name for f in fields(section_cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown keys in {name!r}: {sorted(unknown)}")
    return section_cls(**data)
