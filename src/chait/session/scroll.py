"""Scroll controller.

Viewport offset over the visual lines with auto-follow: while following,
every relayout pins the viewport to the newest content. Scrolling away
stops following; reaching the bottom again, jumping to it, or sending a
message resumes it.
"""


class ScrollController:
    """Viewport position within ``[0, max(0, total_lines - viewport_height)]``."""

    def __init__(self, viewport_height: int = 1) -> None:
        self.position = 0
        self.auto_follow = True
        self.total_lines = 0
        self.viewport_height = max(viewport_height, 1)

    @property
    def max_position(self) -> int:
        return max(0, self.total_lines - self.viewport_height)

    @property
    def at_bottom(self) -> bool:
        return self.position >= self.max_position

    def _clamp(self) -> None:
        self.position = min(max(self.position, 0), self.max_position)

    def update(self, total_lines: int, viewport_height: int) -> None:
        """Apply a new layout: re-pin when following, clamp otherwise."""
        self.total_lines = max(total_lines, 0)
        self.viewport_height = max(viewport_height, 1)
        if self.auto_follow:
            self.position = self.max_position
        else:
            self._clamp()

    def scroll_by(self, lines: int) -> None:
        """Move the viewport; following resumes only if it ends on the bottom bound."""
        self.position += lines
        self._clamp()
        self.auto_follow = self.at_bottom

    def page_up(self) -> None:
        self.scroll_by(-max(1, self.viewport_height // 2))

    def page_down(self) -> None:
        self.scroll_by(max(1, self.viewport_height // 2))

    def to_top(self) -> None:
        self.position = 0
        self.auto_follow = False

    def to_bottom(self) -> None:
        self.position = self.max_position
        self.auto_follow = True

    def follow(self) -> None:
        """Resume following, used when the user sends a message."""
        self.to_bottom()

    def hold(self) -> None:
        """Stop following without moving, e.g. while the user selects text."""
        self.auto_follow = False
