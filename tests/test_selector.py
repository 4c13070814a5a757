"""Unit tests for the selector widgets."""
from hypothesis import given
from hypothesis import strategies as st

from chait.session import SelectorGroup, SelectorKind, SelectorOption, SelectorWidget


def _widget(*values: str) -> SelectorWidget:
    return SelectorWidget("Pick one", [SelectorOption(v, v) for v in values])


class TestSelectorWidget:
    """Tests for the single-choice list."""

    def test_next_wraps_around(self):
        widget = _widget("a", "b", "c")

        widget.next()
        widget.next()
        assert widget.current_index == 2

        widget.next()
        assert widget.current_index == 0

    def test_previous_wraps_around(self):
        widget = _widget("a", "b", "c")

        widget.previous()
        assert widget.current_value == "c"

    def test_empty_list_is_inert(self):
        widget = _widget()

        widget.next()
        widget.previous()
        assert widget.current_index == 0
        assert widget.current_value is None
        assert widget.select_by_index(0) is False

    def test_select_by_index_is_bounds_checked(self):
        widget = _widget("a", "b")

        assert widget.select_by_index(1) is True
        assert widget.current_value == "b"
        assert widget.select_by_index(5) is False
        assert widget.select_by_index(-1) is False
        assert widget.current_value == "b"

    def test_confirm_returns_value_and_closes(self):
        widget = _widget("a", "b")
        widget.activate()
        widget.next()

        assert widget.confirm() == "b"
        assert not widget.active

    def test_cancel_closes(self):
        widget = _widget("a")
        widget.activate()

        widget.cancel()
        assert not widget.active

    def test_set_options_keeps_valid_index(self):
        widget = _widget()

        widget.set_options([SelectorOption("x", 1), SelectorOption("y", 2)], current_index=1)
        assert widget.current_value == 2

        widget.set_options([SelectorOption("x", 1)], current_index=4)
        assert widget.current_index == 0

    def test_render_marks_current_option(self):
        widget = _widget("alpha", "beta")
        widget.next()

        lines = widget.render_lines()

        assert any("Pick one" in line for line in lines)
        assert "   [ ] 1. alpha" in lines
        assert " > [*] 2. beta" in lines

    def test_render_empty(self):
        assert "   (no options available)" in _widget().render_lines()

    @given(size=st.integers(min_value=1, max_value=12), start=st.integers(min_value=0, max_value=11))
    def test_full_cycle_returns_to_start(self, size: int, start: int):
        widget = _widget(*(str(i) for i in range(size)))
        widget.select_by_index(start % size)
        origin = widget.current_index

        for _ in range(size):
            widget.next()
        assert widget.current_index == origin

        for _ in range(size):
            widget.previous()
        assert widget.current_index == origin


class TestSelectorGroup:
    """Tests for mutual exclusion of the session selectors."""

    def test_starts_inactive(self):
        group = SelectorGroup()

        assert group.active is None
        assert group.active_kind is None

    def test_activate_closes_others(self):
        group = SelectorGroup()

        group.activate(SelectorKind.PROVIDER)
        group.activate(SelectorKind.MODEL)

        assert group.active_kind is SelectorKind.MODEL
        assert sum(widget.active for widget in group) == 1
