"""Parser configuration for grammarkit.

``ParserConfig`` is passed explicitly to ``Parser`` and
``parse_with_errors``; grammarkit reads no environment variables or
configuration files.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Options controlling error rendering and input acceptance.

    Parameters
    ----------
    snippet_context:
        Characters of input shown on each side of an error position.
    snippet_marker:
        Text inserted into snippets at the error position.
    allow_trailing_input:
        When False, ``Parser.compile`` rejects input that is only
        partially consumed.  ``parse`` and ``parse_with_errors`` always
        accept a partial match.
    """

    snippet_context: int = 20
    snippet_marker: str = "→"
    allow_trailing_input: bool = False

    def __post_init__(self) -> None:
        if self.snippet_context < 0:
            raise ValueError(
                f"snippet_context must be non-negative, got {self.snippet_context}"
            )


DEFAULT_CONFIG = ParserConfig()
