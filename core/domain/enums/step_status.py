"""
Step Status Enum.

Outcome of a single provisioning stage.
"""
from enum import Enum


class StepStatus(str, Enum):
    """Provisioning step status values."""
    
    OK = "ok"
    ERROR = "error"
    SKIPPED = "skipped"
