"""Input guards applied to summarize requests before any upstream call."""

import re

from textsummarizer.domain.errors import BadRequestError

REPETITIVE_INPUT_MESSAGE = "Input appears repetitive/abusive."


class RepetitionGuard:
    """Rejects degenerate input built from one short unit repeated many times.

    A text is repetitive when some run of 1..max_unit characters is
    immediately followed by at least min_repeats copies of itself. This is
    a cheap heuristic, not a security boundary.
    """

    def __init__(self, max_unit: int = 20, min_repeats: int = 10) -> None:
        if max_unit < 1 or min_repeats < 1:
            raise ValueError("max_unit and min_repeats must be positive")
        self.max_unit = max_unit
        self.min_repeats = min_repeats
        self._pattern = re.compile(rf"([\s\S]{{1,{max_unit}}})\1{{{min_repeats},}}")

    def is_repetitive(self, text: str) -> bool:
        """Check whether text contains a long run of a repeated unit."""
        return self._pattern.search(text) is not None

    def check(self, text: str) -> None:
        """Raise BadRequestError when text is repetitive."""
        if self.is_repetitive(text):
            raise BadRequestError(REPETITIVE_INPUT_MESSAGE)
