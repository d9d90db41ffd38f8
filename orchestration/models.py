"""Orchestration models - StepOutcome, StepLedger, CreatedResources, ProvisioningResult."""

from dataclasses import dataclass, field
from typing import Any, Optional

from core.domain.enums.step_status import StepStatus


@dataclass(frozen=True)
class StepOutcome:
    """One ledger entry: a stage that was attempted or intentionally bypassed."""

    step: str
    status: StepStatus
    data: Any = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"step": self.step, "status": self.status.value}
        if self.data is not None:
            out["data"] = self.data
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass
class CreatedResources:
    """Best-effort summary of side effects; the step ledger is authoritative.

    None means the flag was never set during the run.
    """

    domain_registered: Optional[bool] = None
    nameservers_configured: Optional[bool] = None
    hosting_provisioned: Optional[bool] = None
    hosting_result: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in (
                ("domain_registered", self.domain_registered),
                ("nameservers_configured", self.nameservers_configured),
                ("hosting_provisioned", self.hosting_provisioned),
                ("hosting_result", self.hosting_result),
            )
            if value is not None
        }


@dataclass
class ProvisioningResult:
    """Result of one provisioning run."""

    ok: bool
    domain: str
    steps: list[StepOutcome]
    created: CreatedResources = field(default_factory=CreatedResources)
    execution_id: Optional[str] = None

    @property
    def failed_step(self) -> Optional[StepOutcome]:
        """The aborting step, if the run failed."""
        for outcome in self.steps:
            if outcome.status == StepStatus.ERROR:
                return outcome
        return None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "ok": self.ok,
            "domain": self.domain,
            "steps": [s.to_dict() for s in self.steps],
            "created": self.created.to_dict(),
        }
        if self.execution_id is not None:
            out["execution_id"] = self.execution_id
        return out


class StepLedger:
    """Ordered, append-only record of step outcomes for one run."""

    def __init__(self) -> None:
        self._entries: list[StepOutcome] = []

    def append(self, outcome: StepOutcome) -> None:
        self._entries.append(outcome)

    def snapshot(self) -> list[StepOutcome]:
        """Copy of the entries; later appends do not affect it."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))
