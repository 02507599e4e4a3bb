# Export key classes
from .components.calculator.controller import CalculatorController
from .components.calculator.events import InputChanged, TriggerComputation
from .components.calculator.state import InputState, OutputState, UIState, merge_state
from .components.calculator.stepper import Stepper, triangular, triangular_prefix
from .components.calculator.validator import ValidationResult, validate

__all__ = [
    "CalculatorController",
    "InputChanged",
    "InputState",
    "OutputState",
    "Stepper",
    "TriggerComputation",
    "UIState",
    "ValidationResult",
    "merge_state",
    "triangular",
    "triangular_prefix",
    "validate",
]
