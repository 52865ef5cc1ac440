"""CodeNarrator.

An LLM-powered tool that walks a source tree and writes one Markdown
document per source file using the Google Gemini API.
"""

__version__ = "0.1.0"
