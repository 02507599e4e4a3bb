from dataclasses import dataclass, replace


@dataclass(frozen=True)
class InputState:
    """Raw input text and its validation message."""

    text: str = "0"
    error_message: str = ""


@dataclass(frozen=True)
class OutputState:
    """The target being computed and the latest array emitted for it."""

    target: int = 0
    series: tuple[int, ...] = ()

    def with_series(self, series: list[int] | tuple[int, ...]) -> "OutputState":
        return replace(self, series=tuple(series))


@dataclass(frozen=True)
class UIState:
    """Read-only projection handed to the presentation layer."""

    input_text: str = "0"
    input_error: str = ""
    target: int = 0
    series: tuple[int, ...] = ()

    @property
    def can_trigger(self) -> bool:
        return not self.input_error

    def render_series(self) -> str:
        """Text shown in the output panel: the target then one value per line."""
        return "\n".join([f"{self.target}:", *(str(value) for value in self.series)])


def merge_state(input_state: InputState, output_state: OutputState) -> UIState:
    return UIState(
        input_text=input_state.text,
        input_error=input_state.error_message,
        target=output_state.target,
        series=output_state.series,
    )
