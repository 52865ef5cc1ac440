"""Configuration loader for CodeNarrator.

Loads settings from a local ``.codenarratorrc`` file (YAML or JSON) and
provides typed access to all configuration sections via dataclasses.
The Gemini API key is never read from the config file, only from the
environment.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (
    ".codenarratorrc.yaml",
    ".codenarratorrc.yml",
    ".codenarratorrc.json",
)

DEFAULT_MODEL_NAME = "gemini-2.5-flash"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
DEFAULT_OUTPUT_DIR = "./docs"
SUPPORTED_MODELS = ("gemini",)

# Source, markup, style, template and config formats.
DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "js", "ts", "tsx", "jsx",
    "py",
    "go",
    "c", "cpp", "cc",
    "java",
    "kt", "kts",
    "rb", "erb",
    "rs",
    "swift",
    "cs",
    "php",
    "scala",
    "dart",
    "vue",
    "html", "htm",
    "css", "scss", "sass",
    "ejs", "hbs", "mustache",
    "json", "yaml", "yml",
    "md", "toml", "ini",
)

# Dependency caches, build outputs, virtualenvs and bytecode.
DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    ".next",
    "out",
    "venv",
    "__pycache__",
)

_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class APIConfig:
    """Configuration for the Gemini API client.

    The generation parameters are fixed for the whole process; the
    client never accepts per-call overrides.
    """

    model: str = DEFAULT_MODEL_NAME
    temperature: float = 0.7
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 2048
    api_key_env: str = DEFAULT_API_KEY_ENV


@dataclass
class DiscoverySettings:
    """Configuration for source file discovery."""

    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_dirs: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS)
    )


@dataclass
class PipelineConfig:
    """Configuration for the batch documentation pipeline."""

    request_delay: float = 0.5


@dataclass
class RunConfig:
    """Per-run settings that the CLI may override."""

    input: Optional[str] = None
    output: str = DEFAULT_OUTPUT_DIR
    model: str = "gemini"
    verbose: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    api: APIConfig = field(default_factory=APIConfig)
    discovery: DiscoverySettings = field(default_factory=DiscoverySettings)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    run: RunConfig = field(default_factory=RunConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Optional[Path] = None


def find_config_file(directory: Optional[str] = None) -> Optional[Path]:
    """Locate a local rc file in the given directory.

    Args:
        directory: Directory to search. Defaults to the working directory.

    Returns:
        Path of the first rc file found, or None.
    """
    base = Path(directory) if directory else Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


def _as_bool(value: Any, default: bool) -> bool:
    """Read a YAML or JSON flag, accepting quoted strings like "false"."""
    if value is None:
        return default
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        logger.warning("Invalid boolean %r in config, using %s", value, default)
        return default
    return bool(value)


def _as_list(value: Any, default: Sequence[str]) -> list[str]:
    """Read a list setting. A null or scalar value falls back to ``default``."""
    if value is None:
        return list(default)
    if not isinstance(value, (list, tuple)):
        logger.warning("Expected a list in config, got %r; using defaults", value)
        return list(default)
    return [str(item) for item in value]


def _build_run_config(raw: dict[str, Any]) -> RunConfig:
    """Build a RunConfig from the ``run`` section or top-level rc keys.

    Args:
        raw: The full parsed config mapping.

    Returns:
        A configured RunConfig instance.
    """
    # Flat keys are the historical rc layout; a ``run`` section wins.
    data = {k: raw[k] for k in ("input", "output", "model", "verbose") if k in raw}
    data.update(raw.get("run") or {})
    return RunConfig(
        input=data.get("input"),
        output=data.get("output", DEFAULT_OUTPUT_DIR),
        model=data.get("model", "gemini"),
        verbose=_as_bool(data.get("verbose"), False),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML or JSON rc file.

    Falls back to defaults for any missing values, and for the whole
    config when the file is missing or cannot be parsed.

    Args:
        config_path: Path to the config file. If None, the working
            directory is searched for one of ``CONFIG_FILENAMES``.

    Returns:
        A fully populated AppConfig instance.
    """
    path = Path(config_path) if config_path else find_config_file()

    if path is None:
        logger.debug("No config file found, using defaults")
        return AppConfig()

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.warning("Failed to parse %s, using defaults: %s", path, e)
        return AppConfig()

    if not isinstance(raw, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return AppConfig()

    logger.info("Loaded configuration from %s", path)

    api_data = raw.get("api") or {}
    api_config = APIConfig(
        model=api_data.get("model", DEFAULT_MODEL_NAME),
        temperature=api_data.get("temperature", 0.7),
        top_p=api_data.get("top_p", 0.95),
        top_k=api_data.get("top_k", 40),
        max_output_tokens=api_data.get("max_output_tokens", 2048),
        api_key_env=api_data.get("api_key_env", DEFAULT_API_KEY_ENV),
    )

    discovery_data = raw.get("discovery") or {}
    discovery_config = DiscoverySettings(
        extensions=_as_list(discovery_data.get("extensions"), DEFAULT_EXTENSIONS),
        exclude_dirs=_as_list(
            discovery_data.get("exclude_dirs"), DEFAULT_EXCLUDED_DIRS
        ),
    )

    pipeline_data = raw.get("pipeline") or {}
    pipeline_config = PipelineConfig(
        request_delay=pipeline_data.get("request_delay", 0.5),
    )

    logging_data = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        api=api_config,
        discovery=discovery_config,
        pipeline=pipeline_config,
        run=_build_run_config(raw),
        logging=logging_config,
        source=path,
    )
