"""Output path derivation for generated documentation.

Maps a source file's relative path to the relative path of its
Markdown document. The mapping is pure and deterministic, so re-running
over an unchanged tree overwrites the same files.
"""

import re

_LEADING_SEPARATOR = re.compile(r"^[\\/]")
_INVALID_CHARS = re.compile(r'[:*?"<>|]')
_EXTENSION = re.compile(r"\.[^/.]+$")


def sanitize_path(relative_path: str) -> str:
    """Derive the relative Markdown path for a source file.

    Path separators are kept, not replaced, so the output tree mirrors
    the source tree and same-named files in different directories get
    separate documents. Characters that are invalid in file names are
    replaced with ``-``, the final extension is dropped and the result
    is lower-cased. Different sources can collapse to the same name (``Foo.js`` and ``foo.JS``).

    Args:
        relative_path: Source path relative to the documented root.

    Returns:
        Relative output path ending in ``.md``, using ``/`` separators.

    Example:
        >>> sanitize_path("src/Foo.Bar.js")
        'src/foo.bar.md'
    """
    safe_name = _LEADING_SEPARATOR.sub("", relative_path)
    safe_name = _INVALID_CHARS.sub("-", safe_name)
    safe_name = safe_name.replace("\\", "/")
    safe_name = _EXTENSION.sub("", safe_name)
    return f"{safe_name.lower()}.md"
