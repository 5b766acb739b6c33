"""Level-colored console output for drained entries."""

import contextlib
import sys
from typing import TextIO

from spectral_logger.constants import ANSI_RESET, ENTRY_STYLES
from spectral_logger.formatters import parse_level


class ConsoleRenderer:
    """Echo entry lines to a terminal stream, styled by level.

    Styles: Debug dim, Info plain, Warning yellow, Error red. Output is
    best-effort; a missing or broken stream never raises, whatever the
    error.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        use_colors: bool | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            stream: Target stream; None means sys.stdout at render time
            use_colors: Force colors on or off; None enables them only
                when the stream is a TTY

        """
        self._stream = stream
        self.use_colors = use_colors

    @property
    def stream(self) -> TextIO | None:
        """Stream lines are written to."""
        return self._stream if self._stream is not None else sys.stdout

    def _colors_enabled(self, stream: TextIO) -> bool:
        if self.use_colors is not None:
            return self.use_colors
        try:
            return stream.isatty()
        except (AttributeError, OSError, ValueError):
            return False

    def style(self, line: str, colored: bool = True) -> str:  # noqa: FBT001, FBT002
        """Return the line wrapped in the style of its level."""
        level = parse_level(line)
        if not colored or level is None:
            return line
        style = ENTRY_STYLES.get(level.name, "")
        if not style:
            return line
        return f"{style}{line}{ANSI_RESET}"

    def render(self, line: str) -> None:
        """Write one line; any rendering failure is swallowed."""
        stream = self.stream
        if stream is None:
            return
        with contextlib.suppress(Exception):
            stream.write(self.style(line, self._colors_enabled(stream)) + "\n")
            stream.flush()
