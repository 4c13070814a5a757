"""Input buffer: the editable prompt line."""

from dataclasses import dataclass


@dataclass
class InputBuffer:
    """Text being typed plus a cursor index into it.

    The cursor is a string index in ``[0, len(text)]``. ``masked`` hides the
    content behind asterisks when rendered (API-key entry).
    """

    text: str = ""
    cursor: int = 0
    masked: bool = False

    def __bool__(self) -> bool:
        return bool(self.text)

    def insert(self, chars: str) -> None:
        self.text = self.text[:self.cursor] + chars + self.text[self.cursor:]
        self.cursor += len(chars)

    def newline(self) -> None:
        self.insert("\n")

    def backspace(self) -> None:
        if self.cursor == 0:
            return
        self.text = self.text[:self.cursor - 1] + self.text[self.cursor:]
        self.cursor -= 1

    def delete(self) -> None:
        if self.cursor >= len(self.text):
            return
        self.text = self.text[:self.cursor] + self.text[self.cursor + 1:]

    def left(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def right(self) -> None:
        self.cursor = min(self.cursor + 1, len(self.text))

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def take(self) -> str:
        """Return the text and empty the buffer."""
        text = self.text
        self.clear()
        return text

    def display(self, cursor_visible: bool = True) -> str:
        """Buffer as drawn: masked if needed, with a ``|`` cursor when visible.

        A hidden cursor inside the text leaves a space so the line does not
        shift while blinking.
        """
        shown = "*" * len(self.text) if self.masked else self.text
        before, after = shown[:self.cursor], shown[self.cursor:]
        if cursor_visible:
            return before + "|" + after
        return before + (" " if after else "") + after
