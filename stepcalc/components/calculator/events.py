from dataclasses import dataclass


@dataclass(frozen=True)
class InputChanged:
    """The user edited the input field."""

    text: str


@dataclass(frozen=True)
class TriggerComputation:
    """The user asked to run the computation for the current input."""


Event = InputChanged | TriggerComputation
