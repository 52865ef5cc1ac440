"""Source file discovery for documentation runs.

Enumerates the files under a root directory whose extension is on the
allow-list, skipping dependency caches, build outputs, virtualenvs and
hidden entries.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from codenarrator.utils.config import (
    DEFAULT_EXCLUDED_DIRS,
    DEFAULT_EXTENSIONS,
    DiscoverySettings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveryConfig:
    """Which files a discovery pass picks up.

    Attributes:
        extensions: Allowed extensions, lower-case and without the dot.
        excluded_dirs: Directory names pruned wherever they occur.
    """

    extensions: frozenset[str] = field(
        default_factory=lambda: frozenset(DEFAULT_EXTENSIONS)
    )
    excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS

    @classmethod
    def from_settings(cls, settings: DiscoverySettings) -> "DiscoveryConfig":
        """Build a DiscoveryConfig from the loaded config section."""
        return cls(
            extensions=frozenset(ext.lower().lstrip(".") for ext in settings.extensions),
            excluded_dirs=tuple(settings.exclude_dirs),
        )

    def matches(self, path: Path) -> bool:
        """Whether a file's extension is on the allow-list."""
        return path.suffix[1:].lower() in self.extensions


@dataclass(frozen=True)
class SourceFile:
    """A discovered source file with its content.

    Attributes:
        absolute_path: Absolute path of the file.
        relative_path: Path relative to the documented root.
        extension: Upper-cased extension without the dot, e.g. ``JS``.
        content: Full UTF-8 text of the file.
    """

    absolute_path: Path
    relative_path: str
    extension: str
    content: str


def discover_files(
    root: Union[str, Path],
    config: Optional[DiscoveryConfig] = None,
    exclude_paths: Iterable[Union[str, Path]] = (),
) -> list[Path]:
    """Collect all candidate source files under a root directory.

    Directory and file names are visited in sorted order, so the result
    is stable for a given snapshot of the tree.

    Args:
        root: Directory to scan.
        config: Extension allow-list and excluded directories. Uses the
            defaults if not provided.
        exclude_paths: Directories pruned by location, such as an output
            directory that lives inside ``root``.

    Returns:
        Absolute paths of the matching files in traversal order. An
        empty list when nothing matches.
    """
    config = config or DiscoveryConfig()
    root_path = Path(root).resolve()
    excluded = set(config.excluded_dirs)
    skipped = {Path(p).resolve() for p in exclude_paths}
    files: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in excluded
            and not d.startswith(".")
            and Path(dirpath) / d not in skipped
        )
        for name in sorted(filenames):
            if name.startswith("."):
                continue
            path = Path(dirpath) / name
            if config.matches(path):
                files.append(path)

    logger.debug("Discovered %d files under %s", len(files), root_path)
    return files


def load_source_file(path: Union[str, Path], root: Union[str, Path]) -> SourceFile:
    """Read a discovered file.

    Args:
        path: Path of the file to read.
        root: Documented root the relative path is computed from.

    Returns:
        The populated SourceFile.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    absolute = Path(path).absolute()
    relative = os.path.relpath(absolute, Path(root).absolute())
    return SourceFile(
        absolute_path=absolute,
        relative_path=relative,
        extension=absolute.suffix[1:].upper(),
        content=absolute.read_text(encoding="utf-8"),
    )
