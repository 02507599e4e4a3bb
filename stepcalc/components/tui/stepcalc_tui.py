#!/usr/bin/env python3
"""
Step Calculator TUI - enter a number and watch triangular-number arrays appear.
"""
from __future__ import annotations

import io
import os
import tempfile
from datetime import datetime
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.reactive import reactive
from textual.widgets import Button, Footer, Header, Input

from stepcalc.common.config import get_active_config
from stepcalc.components.calculator.controller import CalculatorController
from stepcalc.components.calculator.events import InputChanged, TriggerComputation
from stepcalc.components.calculator.state import UIState
from stepcalc.components.calculator.stepper import Stepper
from stepcalc.components.tui.components.input_panel import InputPanel
from stepcalc.components.tui.components.series_panel import SeriesPanel
from stepcalc.models import StepcalcConfig


class StepcalcTUI(App):
    """Main TUI application."""

    CSS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "styles.tcss")

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False),
    ]

    ui_state: reactive[UIState] = reactive(UIState())

    def __init__(
        self,
        config: StepcalcConfig | None = None,
        log_file: str | None = None,
        debug: bool = False,
        initial_text: str | None = None,
    ):
        super().__init__()
        self.config = config or get_active_config()
        self.log_file = log_file
        self.debug_enabled = debug
        self.initial_text = self.config.initial_text if initial_text is None else initial_text
        self._debug_log_path = os.path.join(tempfile.gettempdir(), "tui_debug.log")
        if debug:
            print(f"Writing debug log to {self._debug_log_path}")

        self.controller = CalculatorController(
            Stepper(time_unit_seconds=self.config.time_unit_seconds),
            initial_text=self.initial_text,
        )
        self.ui_state = self.controller.state
        self.log_handle: io.TextIOWrapper | None = None
        self._unsubscribe = self.controller.subscribe(self._on_controller_state)

    def debug_log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self.debug_enabled:
            try:
                with open(self._debug_log_path, "a") as f:
                    f.write(f"{message}\n")
            except OSError:
                pass  # nosec B110 # - debug logging failure is non-fatal

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            SeriesPanel(show_target_header=self.config.tui.show_target_header),
            InputPanel(self.initial_text, placeholder=self.config.tui.placeholder),
            id="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Start the controller's event loop consumer once the app is running."""
        if self.log_file:
            try:
                self.log_handle = open(self.log_file, "a")
                self.log_handle.write(
                    f"\n=== Step Calculator Session Started at {datetime.now().isoformat()} ===\n"
                )
                self.log_handle.flush()
            except OSError as e:
                self.debug_log(f"Failed opening log file {self.log_file}: {e}")
                self.log_handle = None

        self.controller.start()
        self.debug_log(f"Mounted with initial state: {self.ui_state}")

    def _on_controller_state(self, state: UIState) -> None:
        previous = self.ui_state
        self.ui_state = state
        if state.series and state.series != previous.series:
            self._log_emission(state)

    def _log_emission(self, state: UIState) -> None:
        self.debug_log(f"EMISSION for {state.target}: {list(state.series)}")
        if self.log_handle:
            try:
                timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
                self.log_handle.write(f"[{timestamp}] {state.target}: {list(state.series)}\n")
                self.log_handle.flush()
            except OSError as e:
                self.debug_log(f"Failed writing log line: {e}")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "number-input":
            self.controller.submit(InputChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "number-input":
            self._trigger()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "run-button":
            self._trigger()

    def _trigger(self) -> None:
        # The controller guards against invalid input as well
        if self.ui_state.can_trigger:
            self.controller.submit(TriggerComputation())
            self.set_focus(None)
        else:
            self.debug_log(f"Trigger blocked: {self.ui_state.input_error}")

    async def on_unmount(self) -> None:
        """Make sure no stepper run outlives the interface."""
        await self.controller.close()

    async def action_quit(self) -> Any:
        """Quit the application."""
        self._unsubscribe()
        await self.controller.close()

        if self.log_handle:
            try:
                self.log_handle.write(
                    f"\n=== Step Calculator Session Ended at {datetime.now().isoformat()} ===\n"
                )
                self.log_handle.close()
            except OSError as e:
                self.debug_log(f"Failed closing log handle: {e}")
            self.log_handle = None

        self.exit()
