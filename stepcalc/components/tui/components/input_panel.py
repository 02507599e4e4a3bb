from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Static

from ...calculator.state import UIState


class InputPanel(Static):
    """Bottom panel with the number input, its label and the run button."""

    def __init__(self, initial_text: str, placeholder: str = "Enter a number") -> None:
        super().__init__(id="input-panel")
        self.initial_text = initial_text
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Vertical():
            with Horizontal():
                yield Input(value=self.initial_text, id="number-input")
                yield Button("Run", id="run-button", variant="primary")
            yield Static(self.placeholder, id="input-label")

    def on_mount(self) -> None:
        self.watch(self.app, "ui_state", self.on_state_change)

    def on_state_change(self, state: UIState) -> None:
        """Show the validation error in place of the label and gate the run button."""
        label = self.query_one("#input-label", Static)
        label.update(state.input_error or self.placeholder)
        label.set_class(bool(state.input_error), "error")
        self.query_one("#run-button", Button).disabled = not state.can_trigger
