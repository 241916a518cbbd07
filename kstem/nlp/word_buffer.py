"""Word buffer threaded through the stemming rule cascade.

A WordBuffer is the working state for a single stem() call: the current
candidate text plus the boundary of the most recently matched suffix.
Buffers are immutable. A rule that wants to try a rewrite builds a new
buffer, so rolling back is simply discarding it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class WordBuffer:
    """Candidate word plus suffix boundary.

    Attributes:
        chars: The evolving candidate stem.
        j: Index of the character immediately before the most recently
            matched suffix, so ``chars[: j + 1]`` is the stem. ``-1`` until
            a suffix has been matched.
    """

    chars: str
    j: int = -1

    @property
    def k(self) -> int:
        """Index of the last character."""
        return len(self.chars) - 1

    @property
    def stem(self) -> str:
        """Characters before the matched suffix."""
        return self.chars[: self.j + 1]

    def ends_in(self, suffix: str) -> WordBuffer | None:
        """Match ``suffix`` at the end of the buffer.

        At least one character must precede the suffix.

        Returns:
            A buffer with ``j`` set just before the suffix, or None if the
            buffer does not end with it.
        """
        if len(suffix) > self.k:
            return None
        if not self.chars.endswith(suffix):
            return None
        return replace(self, j=len(self.chars) - len(suffix) - 1)

    def with_ending(self, ending: str) -> WordBuffer:
        """Replace the matched suffix with ``ending``."""
        return WordBuffer(self.stem + ending, self.j)

    def with_chars(self, chars: str) -> WordBuffer:
        """Replace the whole text, keeping the suffix boundary."""
        return WordBuffer(chars, self.j)

    def __len__(self) -> int:
        return len(self.chars)

    def __str__(self) -> str:
        return self.chars
