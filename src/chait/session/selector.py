"""Selector widgets.

A generic single-choice list reused for the provider, model and
temperature pickers. The SelectorGroup owns all three and guarantees at
most one is active at any time.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class SelectorOption:
    label: str
    value: Any


@dataclass
class SelectorWidget:
    """A modal single-choice list."""

    title: str
    options: list[SelectorOption] = field(default_factory=list)
    current_index: int = 0
    active: bool = False

    @property
    def current_value(self) -> Any:
        if not self.options:
            return None
        return self.options[self.current_index].value

    def set_options(self, options: Sequence[SelectorOption], current_index: int = 0) -> None:
        self.options = list(options)
        self.current_index = current_index if 0 <= current_index < len(self.options) else 0

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def next(self) -> None:
        if not self.options:
            return
        self.current_index = (self.current_index + 1) % len(self.options)

    def previous(self) -> None:
        if not self.options:
            return
        self.current_index = (self.current_index - 1) % len(self.options)

    def select_by_index(self, index: int) -> bool:
        """Move to ``index``; returns False (and changes nothing) when out of range."""
        if 0 <= index < len(self.options):
            self.current_index = index
            return True
        return False

    def confirm(self) -> Any:
        """Close the selector and return the chosen value."""
        self.deactivate()
        return self.current_value

    def cancel(self) -> None:
        """Close the selector, discarding the choice."""
        self.deactivate()

    def render_lines(self) -> list[str]:
        """Title and numbered options, the current one marked."""
        lines = [
            "",
            f" {self.title} (↑/↓ to navigate, 1-9 or Enter to select, ESC to cancel):",
            "",
        ]
        for i, option in enumerate(self.options):
            marker = " > [*]" if i == self.current_index else "   [ ]"
            lines.append(f"{marker} {i + 1}. {option.label}")
        if not self.options:
            lines.append("   (no options available)")
        return lines


class SelectorKind(str, Enum):
    PROVIDER = "provider"
    MODEL = "model"
    TEMPERATURE = "temperature"


SELECTOR_TITLES: dict[SelectorKind, str] = {
    SelectorKind.PROVIDER: "Select a provider",
    SelectorKind.MODEL: "Select a model",
    SelectorKind.TEMPERATURE: "Select a temperature preset",
}


class SelectorGroup:
    """The three session selectors, mutually exclusive."""

    def __init__(self) -> None:
        self._widgets = {kind: SelectorWidget(title) for kind, title in SELECTOR_TITLES.items()}

    def __getitem__(self, kind: SelectorKind) -> SelectorWidget:
        return self._widgets[kind]

    def __iter__(self) -> Iterator[SelectorWidget]:
        return iter(self._widgets.values())

    @property
    def active_kind(self) -> SelectorKind | None:
        for kind, widget in self._widgets.items():
            if widget.active:
                return kind
        return None

    @property
    def active(self) -> SelectorWidget | None:
        kind = self.active_kind
        return self._widgets[kind] if kind is not None else None

    def activate(self, kind: SelectorKind) -> SelectorWidget:
        """Open one selector, closing every other."""
        for other_kind, widget in self._widgets.items():
            if other_kind is not kind:
                widget.deactivate()
        widget = self._widgets[kind]
        widget.activate()
        return widget
