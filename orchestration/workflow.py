"""Workflow definitions - BoundOperation, ProvisionDomainHostingParams."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from core.domain.errors import OperationNotFoundError

# Registrar-side operations
DOMAIN_CHECK_OPERATION = "inwx_domain_check"
DOMAIN_REGISTER_OPERATION = "inwx_domain_register"
NAMESERVER_SET_OPERATION = "inwx_nameserver_set"
# Hosting-side operation
PROVISION_SITE_OPERATION = "isp_provision_site"


class BoundOperation(Protocol):
    """Minimal structural contract for an invocable operation.

    Registrar tools and hosting tools both satisfy it without either side
    importing the other.
    """

    name: str

    async def run(self, params: Mapping[str, Any]) -> Any:
        ...


@dataclass(frozen=True)
class ProvisionDomainHostingParams:
    """Immutable description of one domain-to-hosting provisioning intent."""

    # Domain to register and provision (e.g. "example.com")
    domain: str
    # Nameservers to set on the registered domain
    nameservers: Sequence[str]
    # IP address of the hosting server
    server_ip: str
    # Client display name and email for the hosting client account
    client_name: str
    client_email: str
    create_mail: bool = True
    create_db: bool = True
    # Hosting server id override; omitted from the call when None
    server_id: Optional[int] = None
    # Registration period in years; None falls back to 1
    registration_period: Optional[int] = 1
    # Contact handle ids by role (registrant, admin, tech, billing)
    contacts: Optional[Mapping[str, Any]] = None
    # Skip registration when the domain is already owned
    skip_registration: bool = False

    def __post_init__(self):
        nameservers = self.nameservers or ()
        # A lone hostname is one nameserver, not a sequence of characters
        if isinstance(nameservers, str):
            nameservers = (nameservers,)
        object.__setattr__(self, "nameservers", tuple(nameservers))


def find_operation(operations: Sequence[BoundOperation], name: str) -> BoundOperation:
    """Resolve an operation by exact name.

    Raises:
        OperationNotFoundError: If the registry has no operation with that name
    """
    for operation in operations:
        if operation.name == name:
            return operation
    raise OperationNotFoundError(name)
