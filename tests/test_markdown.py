"""Tests for the Markdown document writer."""

from pathlib import Path

import pytest

from codenarrator.output.markdown import MarkdownWriter


@pytest.fixture
def writer(tmp_path: Path) -> MarkdownWriter:
    """Create a MarkdownWriter with a temp output directory."""
    return MarkdownWriter(output_dir=tmp_path / "docs")


class TestWrite:
    """Tests for writing a single document."""

    def test_creates_nested_file(self, writer: MarkdownWriter, tmp_path: Path) -> None:
        source = tmp_path / "project" / "src" / "App.JSX"
        path = writer.write(source, "# App", base_dir=tmp_path / "project")
        assert path == tmp_path / "docs" / "src" / "app.md"
        assert path.read_text(encoding="utf-8") == "# App"

    def test_overwrites_existing(self, writer: MarkdownWriter, tmp_path: Path) -> None:
        source = tmp_path / "a.js"
        writer.write(source, "first", base_dir=tmp_path)
        path = writer.write(source, "second", base_dir=tmp_path)
        assert path.read_text(encoding="utf-8") == "second"

    def test_existing_directories_ok(
        self, writer: MarkdownWriter, tmp_path: Path
    ) -> None:
        (tmp_path / "docs" / "lib").mkdir(parents=True)
        path = writer.write(tmp_path / "lib" / "x.py", "doc", base_dir=tmp_path)
        assert path.exists()

    def test_defaults_to_working_directory(
        self,
        writer: MarkdownWriter,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        path = writer.write("pkg/mod.py", "doc")
        assert path == tmp_path / "docs" / "pkg" / "mod.md"

    def test_content_written_as_is(
        self, writer: MarkdownWriter, tmp_path: Path
    ) -> None:
        content = "# Title\n\nUnicode: é ✓\n"
        path = writer.write(tmp_path / "a.py", content, base_dir=tmp_path)
        assert path.read_text(encoding="utf-8") == content

    def test_empty_content_rejected(
        self, writer: MarkdownWriter, tmp_path: Path
    ) -> None:
        with pytest.raises(ValueError, match="Missing required parameters"):
            writer.write(tmp_path / "a.py", "", base_dir=tmp_path)

    def test_filesystem_error_propagates(self, tmp_path: Path) -> None:
        blocker = tmp_path / "out"
        blocker.write_text("not a directory")
        writer = MarkdownWriter(output_dir=blocker)
        with pytest.raises(OSError):
            writer.write(tmp_path / "src" / "a.js", "doc", base_dir=tmp_path)


class TestOutputPathFor:
    """Tests for output path derivation."""

    def test_same_input_same_path(
        self, writer: MarkdownWriter, tmp_path: Path
    ) -> None:
        source = tmp_path / "src" / "Foo.Bar.js"
        first = writer.output_path_for(source, tmp_path)
        second = writer.output_path_for(source, tmp_path)
        assert first == second == tmp_path / "docs" / "src" / "foo.bar.md"

    def test_does_not_touch_filesystem(
        self, writer: MarkdownWriter, tmp_path: Path
    ) -> None:
        writer.output_path_for(tmp_path / "a.js", tmp_path)
        assert not (tmp_path / "docs").exists()
