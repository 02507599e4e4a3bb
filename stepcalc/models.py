# models.py
"""
Configuration models for the step calculator.
"""
from pydantic import BaseModel, Field


class TUIConfig(BaseModel):
    """Options for the terminal interface."""

    placeholder: str = Field(
        default="Enter a number", description="Label shown under the input when it is valid."
    )
    show_target_header: bool = Field(
        default=True, description="Prefix the output panel with the target being computed."
    )


class StepcalcConfig(BaseModel):
    """Top-level configuration for the step calculator."""

    time_unit_seconds: float = Field(
        default=0.001,
        gt=0.0,
        description="Length of one time unit in seconds. Step k waits k * 100 units.",
    )
    initial_text: str = Field(
        default="0", max_length=2, description="Text the input field starts with."
    )
    tui: TUIConfig = Field(default_factory=TUIConfig)
