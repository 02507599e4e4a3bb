from textual.widgets import Static

from ...calculator.state import UIState


class SeriesPanel(Static):
    """Upper panel showing the latest emitted array, one value per line."""

    def __init__(self, show_target_header: bool = True) -> None:
        super().__init__("", id="series-panel")
        self.show_target_header = show_target_header

    def on_mount(self) -> None:
        """Start watching for UI state changes when the component is mounted."""
        self.watch(self.app, "ui_state", self.on_state_change)

    def on_state_change(self, state: UIState) -> None:
        if self.show_target_header:
            self.update(state.render_series())
        else:
            self.update("\n".join(str(value) for value in state.series))
