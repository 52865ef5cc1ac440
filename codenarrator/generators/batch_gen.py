"""Batch documentation pipeline.

Orchestrates discovery, prompt rendering, the Gemini call and the
Markdown write for every file under a root directory. Files are handled
one at a time in discovery order with a fixed delay between requests.
A failure on one file is recorded and the run moves on; only a missing
API key stops the run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from codenarrator.analysis.discovery import (
    DiscoveryConfig,
    discover_files,
    load_source_file,
)
from codenarrator.generators.llm_client import MissingCredentialError
from codenarrator.generators.template_manager import TemplateManager
from codenarrator.generators.throttle import FixedDelayThrottle
from codenarrator.output.markdown import DocumentationArtifact, MarkdownWriter

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """The provider operations the pipeline relies on."""

    def ensure_ready(self) -> None: ...

    def generate(self, prompt: str) -> str: ...


class Throttle(Protocol):
    """Blocks between consecutive provider calls."""

    def wait(self) -> None: ...


@dataclass(frozen=True)
class FileError:
    """A per-file failure.

    Attributes:
        relative_path: Source path relative to the documented root.
        message: Error message, kept verbatim.
    """

    relative_path: str
    message: str


@dataclass(frozen=True)
class FileResult:
    """Outcome for one file: either an artifact or an error."""

    relative_path: str
    artifact: Optional[DocumentationArtifact] = None
    error: Optional[FileError] = None

    @property
    def ok(self) -> bool:
        return self.artifact is not None


@dataclass
class RunSummary:
    """Aggregate outcome of a documentation run.

    Attributes:
        total_files: Number of files discovered.
        success_count: Files whose document was written.
        error_count: Files that failed at any step.
        per_file_errors: Failures in processing order.
        results: Every per-file outcome in processing order.
        output_dir: Directory documents were written to.
    """

    total_files: int = 0
    success_count: int = 0
    error_count: int = 0
    per_file_errors: list[FileError] = field(default_factory=list)
    results: list[FileResult] = field(default_factory=list)
    output_dir: Optional[Path] = None

    def record(self, result: FileResult) -> None:
        """Add a per-file outcome to the counts."""
        self.results.append(result)
        if result.ok:
            self.success_count += 1
        elif result.error is not None:
            self.error_count += 1
            self.per_file_errors.append(result.error)


ProgressCallback = Callable[[int, int, FileResult], None]


class BatchPipeline:
    """Generates one Markdown document per discovered source file.

    Collaborators are injected so tests can substitute a stub provider
    and a no-op throttle.
    """

    def __init__(
        self,
        llm_client: TextGenerator,
        template_manager: Optional[TemplateManager] = None,
        discovery_config: Optional[DiscoveryConfig] = None,
        throttle: Optional[Throttle] = None,
        writer_factory: Callable[[Path], MarkdownWriter] = MarkdownWriter,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            llm_client: Provider client with ``ensure_ready`` and ``generate``.
            template_manager: Prompt renderer. Creates a default instance
                if not provided.
            discovery_config: File filter. Uses the defaults if not provided.
            throttle: Delay between requests. Defaults to 0.5 seconds.
            writer_factory: Builds the writer for a run's output directory.
            progress: Called after each file with its 1-based index, the
                total and the file's result.
        """
        self.llm = llm_client
        self.templates = template_manager or TemplateManager()
        self.discovery_config = discovery_config or DiscoveryConfig()
        self.throttle = throttle or FixedDelayThrottle()
        self.writer_factory = writer_factory
        self.progress = progress

    def discover(
        self,
        root: Union[str, Path],
        output_dir: Optional[Union[str, Path]] = None,
    ) -> list[Path]:
        """List the files a run over ``root`` would process.

        An ``output_dir`` inside ``root`` is skipped so earlier documents
        are never fed back in.
        """
        exclude = (output_dir,) if output_dir else ()
        return discover_files(root, self.discovery_config, exclude_paths=exclude)

    def run(
        self,
        root: Union[str, Path],
        output_dir: Optional[Union[str, Path]],
    ) -> RunSummary:
        """Document every discovered file under ``root``.

        Args:
            root: Directory to document.
            output_dir: Directory for the Markdown documents. Created if absent.

        Returns:
            The finalized RunSummary.

        Raises:
            FileNotFoundError: If ``root`` does not exist.
            NotADirectoryError: If ``root`` is not a directory.
            ValueError: If ``output_dir`` is empty.
            MissingCredentialError: If the provider has no API key.
        """
        root_path = Path(root)
        if not root_path.exists():
            raise FileNotFoundError(f"Folder does not exist: {root_path}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Not a directory: {root_path}")
        if not output_dir:
            raise ValueError("Output directory must be specified")

        root_path = root_path.resolve()
        out_path = Path(output_dir).resolve()
        summary = RunSummary(output_dir=out_path)

        files = self.discover(root_path, out_path)
        summary.total_files = len(files)
        if not files:
            logger.warning("No supported files found in %s", root_path)
            return summary

        logger.info("Found %d source files to process", len(files))
        self.llm.ensure_ready()
        writer = self.writer_factory(out_path)

        for index, file_path in enumerate(files, start=1):
            result = self._process_file(file_path, root_path, writer)
            summary.record(result)
            if self.progress is not None:
                self.progress(index, len(files), result)
            if index < len(files):
                self.throttle.wait()

        logger.info(
            "Documentation complete: %d succeeded, %d failed",
            summary.success_count,
            summary.error_count,
        )
        return summary

    def _process_file(
        self, file_path: Path, root: Path, writer: MarkdownWriter
    ) -> FileResult:
        """Read, prompt, generate and write one file.

        Raises:
            MissingCredentialError: Propagated, since no later call can succeed.
        """
        relative_path = str(file_path.relative_to(root))
        logger.debug("Processing: %s", relative_path)
        try:
            source = load_source_file(file_path, root)
            prompt = self.templates.render_file_doc_prompt(
                source.relative_path, source.extension, source.content
            )
            documentation = self.llm.generate(prompt)
            output_path = writer.write(source.absolute_path, documentation, base_dir=root)
        except MissingCredentialError:
            raise
        except Exception as e:
            logger.debug("Error processing %s: %s", relative_path, e)
            return FileResult(
                relative_path=relative_path,
                error=FileError(relative_path=relative_path, message=str(e)),
            )

        logger.debug("Documentation saved at: %s", output_path)
        return FileResult(
            relative_path=relative_path,
            artifact=DocumentationArtifact(
                source_relative_path=relative_path,
                output_path=output_path,
                content=documentation,
            ),
        )
