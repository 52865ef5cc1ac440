"""Markdown output for generated file documentation.

Writes the provider's response for each source file to a Markdown
document under the output directory, mirroring the source tree.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from codenarrator.output.paths import sanitize_path

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class DocumentationArtifact:
    """A Markdown document produced for one source file.

    Attributes:
        source_relative_path: Source path relative to the documented root.
        output_path: Absolute path of the written Markdown file.
        content: The text written to ``output_path``.
    """

    source_relative_path: str
    output_path: Path
    content: str


class MarkdownWriter:
    """Writes generated documentation as Markdown files.

    Output paths are derived with :func:`sanitize_path`, so the same
    source path always maps to the same document.
    """

    def __init__(self, output_dir: PathLike = "docs") -> None:
        """Initialize the Markdown writer.

        Args:
            output_dir: Directory where Markdown files will be written.
        """
        self.output_dir = Path(output_dir)

    def output_path_for(
        self, source_path: PathLike, base_dir: Optional[PathLike] = None
    ) -> Path:
        """Compute the Markdown path for a source file without writing.

        Args:
            source_path: Path to the source file.
            base_dir: Directory the relative path is taken from. Defaults
                to the current working directory.

        Returns:
            Path of the Markdown document inside ``output_dir``.
        """
        base = os.fspath(base_dir) if base_dir is not None else os.getcwd()
        relative = os.path.relpath(os.path.abspath(source_path), os.path.abspath(base))
        return self.output_dir / sanitize_path(relative)

    def write(
        self,
        source_path: PathLike,
        content: str,
        base_dir: Optional[PathLike] = None,
    ) -> Path:
        """Write documentation for a single source file.

        Parent directories are created as needed and an existing
        document is overwritten.

        Args:
            source_path: Path to the documented source file.
            content: Markdown content to write.
            base_dir: Directory the relative path is taken from. Defaults
                to the current working directory.

        Returns:
            Path to the written Markdown file.

        Raises:
            ValueError: If ``source_path`` or ``content`` is empty.
            OSError: If the directory or file cannot be written.
        """
        if not source_path or not content:
            raise ValueError("Missing required parameters")

        md_path = self.output_path_for(source_path, base_dir)
        md_path.parent.mkdir(parents=True, exist_ok=True)
        md_path.write_text(content, encoding="utf-8")

        logger.debug("Wrote documentation to: %s", md_path)
        return md_path
