"""Provisioning orchestrator - domain registration plus hosting in one run.

Composes registrar operations (availability check, registration, nameserver
configuration) with a hosting operation (site provisioning). Both registries
are injected at call time, so neither side depends on the other.

Stages run strictly in order:
  1. domain_check     - inwx_domain_check
  2. domain_register  - inwx_domain_register (unless skipped or unavailable)
  3. nameserver_set   - inwx_nameserver_set (unless no nameservers given)
  4. isp_provision    - isp_provision_site

The first stage error ends the run. Skips never do.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from core.domain.enums.step_status import StepStatus
from core.domain.value_objects import ExecutionID
from regbridge_sdk.logging import get_logger
from regbridge_sdk.utils.datetime import utc_now

from .bus import EventBusProtocol, InMemoryEventBus
from .events import Event, EventMetadata
from .models import CreatedResources, ProvisioningResult, StepLedger, StepOutcome
from .workflow import (
    DOMAIN_CHECK_OPERATION,
    DOMAIN_REGISTER_OPERATION,
    NAMESERVER_SET_OPERATION,
    PROVISION_SITE_OPERATION,
    BoundOperation,
    ProvisionDomainHostingParams,
    find_operation,
)

WORKFLOW_NAME = "provision_domain_with_hosting"

STEP_VALIDATE = "validate"
STEP_DOMAIN_CHECK = "domain_check"
STEP_DOMAIN_REGISTER = "domain_register"
STEP_NAMESERVER_SET = "nameserver_set"
STEP_ISP_PROVISION = "isp_provision"

SKIP_REASON_EXPLICIT = "skip_registration=true"
SKIP_REASON_UNAVAILABLE = "domain not available"
SKIP_REASON_NO_NAMESERVERS = "no nameservers provided"


def _error_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def _read_availability(raw: Any) -> bool:
    """Availability from a check reply shaped as one record or a list of them."""
    record = raw
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        record = raw[0] if raw else None
    if isinstance(record, Mapping):
        return bool(record.get("avail", False))
    return False


@dataclass
class _RunState:
    """State owned by exactly one in-flight run."""

    execution_id: str
    domain: str
    ledger: StepLedger = field(default_factory=StepLedger)
    created: CreatedResources = field(default_factory=CreatedResources)


class ProvisioningOrchestrator:
    """Runs the fixed four-stage provisioning pipeline with a full step ledger."""

    def __init__(self, event_bus: EventBusProtocol | None = None) -> None:
        """Initialize orchestrator.

        Args:
            event_bus: Optional bus for observational events; an in-memory
                bus is used when omitted
        """
        self._event_bus = event_bus if event_bus is not None else InMemoryEventBus()
        self._logger = get_logger("orchestration.provisioning")

    async def run(
        self,
        registrar_ops: Sequence[BoundOperation],
        hosting_ops: Sequence[BoundOperation],
        params: ProvisionDomainHostingParams,
    ) -> ProvisioningResult:
        """Run the provisioning workflow.

        Never raises: every failure is recorded in the returned ledger.

        Args:
            registrar_ops: Registrar operation registry (already guarded)
            hosting_ops: Hosting operation registry (already guarded)
            params: Provisioning intent

        Returns:
            ProvisioningResult with the ordered step ledger
        """
        state = _RunState(
            execution_id=str(ExecutionID.generate()),
            domain=(params.domain or "").strip(),
        )

        if not state.domain:
            await self._record(
                state,
                StepOutcome(STEP_VALIDATE, StepStatus.ERROR, error="domain is required"),
            )
            return await self._finish(state, ok=False)

        self._logger.info(
            f"provisioning_starting | execution_id={state.execution_id} | "
            f"domain={state.domain} | skip_registration={params.skip_registration} | "
            f"nameservers={len(params.nameservers)}"
        )
        await self._publish(
            state, "provisioning.started", {"workflow_name": WORKFLOW_NAME}
        )

        # Step 1 - availability check
        try:
            check = find_operation(registrar_ops, DOMAIN_CHECK_OPERATION)
            raw = await check.run({"domain": state.domain})
            available = _read_availability(raw)
        except Exception as exc:
            return await self._fail(state, STEP_DOMAIN_CHECK, exc)
        await self._record(
            state,
            StepOutcome(
                STEP_DOMAIN_CHECK,
                StepStatus.OK,
                data={"domain": state.domain, "available": available},
            ),
        )

        # Step 2 - registration
        if params.skip_registration:
            await self._skip(state, STEP_DOMAIN_REGISTER, SKIP_REASON_EXPLICIT)
            state.created.domain_registered = False
        elif available:
            try:
                register_params: dict[str, Any] = {
                    "domain": state.domain,
                    "period": (
                        1 if params.registration_period is None
                        else params.registration_period
                    ),
                    "ns": list(params.nameservers),
                }
                if params.contacts is not None:
                    register_params["contacts"] = dict(params.contacts)
                register = find_operation(registrar_ops, DOMAIN_REGISTER_OPERATION)
                registration = await register.run(register_params)
            except Exception as exc:
                return await self._fail(state, STEP_DOMAIN_REGISTER, exc)
            await self._record(
                state, StepOutcome(STEP_DOMAIN_REGISTER, StepStatus.OK, data=registration)
            )
            state.created.domain_registered = True
        else:
            await self._skip(state, STEP_DOMAIN_REGISTER, SKIP_REASON_UNAVAILABLE)
            state.created.domain_registered = False

        # Step 3 - nameservers
        if params.nameservers:
            try:
                set_ns = find_operation(registrar_ops, NAMESERVER_SET_OPERATION)
                ns_result = await set_ns.run(
                    {"domain": state.domain, "ns": list(params.nameservers)}
                )
            except Exception as exc:
                return await self._fail(state, STEP_NAMESERVER_SET, exc)
            await self._record(
                state, StepOutcome(STEP_NAMESERVER_SET, StepStatus.OK, data=ns_result)
            )
            state.created.nameservers_configured = True
        else:
            await self._skip(state, STEP_NAMESERVER_SET, SKIP_REASON_NO_NAMESERVERS)

        # Step 4 - hosting
        provision_params: dict[str, Any] = {
            "domain": state.domain,
            "client_name": params.client_name,
            "client_email": params.client_email,
            "server_ip": params.server_ip,
            "create_mail": params.create_mail,
            "create_db": params.create_db,
        }
        if params.server_id is not None:
            provision_params["server_id"] = params.server_id
        try:
            provision = find_operation(hosting_ops, PROVISION_SITE_OPERATION)
            hosting_result = await provision.run(provision_params)
        except Exception as exc:
            return await self._fail(state, STEP_ISP_PROVISION, exc)
        await self._record(
            state, StepOutcome(STEP_ISP_PROVISION, StepStatus.OK, data=hosting_result)
        )
        state.created.hosting_provisioned = True
        state.created.hosting_result = hosting_result

        return await self._finish(state, ok=True)

    async def _skip(self, state: _RunState, step: str, reason: str) -> None:
        await self._record(
            state, StepOutcome(step, StepStatus.SKIPPED, data={"reason": reason})
        )

    async def _fail(
        self, state: _RunState, step: str, exc: Exception
    ) -> ProvisioningResult:
        message = _error_message(exc)
        self._logger.warning(
            f"provisioning_step_failed | execution_id={state.execution_id} | "
            f"domain={state.domain} | step={step} | error={message}"
        )
        await self._record(state, StepOutcome(step, StepStatus.ERROR, error=message))
        return await self._finish(state, ok=False)

    async def _record(self, state: _RunState, outcome: StepOutcome) -> None:
        state.ledger.append(outcome)
        await self._publish(
            state,
            "provisioning.step.recorded",
            {"step": outcome.step, "status": outcome.status.value},
        )

    async def _finish(self, state: _RunState, ok: bool) -> ProvisioningResult:
        result = ProvisioningResult(
            ok=ok,
            domain=state.domain,
            steps=state.ledger.snapshot(),
            created=state.created,
            execution_id=state.execution_id,
        )
        await self._publish(
            state,
            "provisioning.finished",
            {"ok": ok, "step_count": len(result.steps)},
        )
        self._logger.info(
            f"provisioning_finished | execution_id={state.execution_id} | "
            f"domain={state.domain} | ok={ok} | "
            f"steps={','.join(f'{s.step}:{s.status.value}' for s in result.steps)}"
        )
        return result

    async def _publish(
        self, state: _RunState, name: str, payload: dict[str, object]
    ) -> None:
        metadata = EventMetadata(
            execution_id=state.execution_id,
            workflow=WORKFLOW_NAME,
            domain=state.domain,
            timestamp=utc_now(),
        )
        try:
            await self._event_bus.publish(
                Event(name=name, payload=payload, metadata=metadata)
            )
        except Exception as exc:
            # Events are observational; a broken bus must not change the result
            self._logger.error(f"event_publish_failed {name}: {exc}", exc_info=True)


async def provision_domain_with_hosting(
    registrar_ops: Sequence[BoundOperation],
    hosting_ops: Sequence[BoundOperation],
    params: ProvisionDomainHostingParams,
    event_bus: EventBusProtocol | None = None,
) -> ProvisioningResult:
    """End-to-end domain-to-hosting provisioning. See ProvisioningOrchestrator.run."""
    return await ProvisioningOrchestrator(event_bus=event_bus).run(
        registrar_ops, hosting_ops, params
    )
