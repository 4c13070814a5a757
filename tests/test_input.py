"""Unit tests for the input buffer."""
from chait.session import InputBuffer


class TestInputBuffer:
    """Tests for prompt editing."""

    def test_insert_at_cursor(self):
        buffer = InputBuffer()
        buffer.insert("hllo")
        for _ in range(3):
            buffer.left()

        buffer.insert("e")
        assert buffer.text == "hello"
        assert buffer.cursor == 2

    def test_backspace_and_delete(self):
        buffer = InputBuffer()
        buffer.insert("abcd")
        buffer.left()
        buffer.left()

        buffer.backspace()
        assert buffer.text == "acd"
        buffer.delete()
        assert buffer.text == "ad"
        assert buffer.cursor == 1

    def test_edits_at_bounds_are_ignored(self):
        buffer = InputBuffer()
        buffer.backspace()
        buffer.delete()
        buffer.left()
        assert buffer.text == ""
        assert buffer.cursor == 0

        buffer.insert("x")
        buffer.right()
        assert buffer.cursor == 1

    def test_newline(self):
        buffer = InputBuffer()
        buffer.insert("a")
        buffer.newline()
        buffer.insert("b")

        assert buffer.text == "a\nb"

    def test_take_empties(self):
        buffer = InputBuffer()
        buffer.insert("hi")

        assert buffer.take() == "hi"
        assert not buffer
        assert buffer.cursor == 0

    def test_display_cursor(self):
        buffer = InputBuffer()
        buffer.insert("abc")
        buffer.left()

        assert buffer.display(cursor_visible=True) == "ab|c"
        assert buffer.display(cursor_visible=False) == "ab c"

    def test_hidden_cursor_at_end_adds_nothing(self):
        buffer = InputBuffer()
        buffer.insert("abc")

        assert buffer.display(cursor_visible=False) == "abc"

    def test_masked_display(self):
        buffer = InputBuffer(masked=True)
        buffer.insert("sk-secret")

        assert buffer.display() == "*********|"
