"""Orchestration layer - domain-to-hosting provisioning with eventing."""

from .bus import EventBusProtocol, InMemoryEventBus
from .events import Event, EventMetadata
from .models import CreatedResources, ProvisioningResult, StepLedger, StepOutcome
from .provisioning import ProvisioningOrchestrator, provision_domain_with_hosting
from .workflow import BoundOperation, ProvisionDomainHostingParams, find_operation

__all__ = [
    "BoundOperation",
    "CreatedResources",
    "Event",
    "EventBusProtocol",
    "EventMetadata",
    "InMemoryEventBus",
    "ProvisionDomainHostingParams",
    "ProvisioningOrchestrator",
    "ProvisioningResult",
    "StepLedger",
    "StepOutcome",
    "find_operation",
    "provision_domain_with_hosting",
]
