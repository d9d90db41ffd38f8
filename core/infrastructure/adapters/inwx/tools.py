"""
INWX tool catalog.

Each tool maps agent-facing parameters (snake_case) onto one DomRobot method
and reshapes the reply into a compact JSON-compatible value. Input is
validated before a client is created, so a rejected call never opens a
registrar session.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from core.application.interfaces import IRegistrarClient
from core.domain.enums.operation_kind import OperationKind
from core.domain.errors import ToolInputError
from core.settings.modules.inwx_settings import InwxSettings

Params = Dict[str, Any]
ClientFactory = Callable[[], IRegistrarClient]

CONTACT_ROLES = ("registrant", "admin", "tech", "billing")


@dataclass(frozen=True)
class ToolContext:
    """What a tool needs at call time besides its parameters."""

    settings: InwxSettings
    client_factory: ClientFactory


@dataclass(frozen=True)
class ToolDefinition:
    """A single registrar operation exposed to agents."""

    name: str
    description: str
    kind: OperationKind
    method: str
    build_params: Callable[[Params], Params]
    shape_result: Callable[[Dict[str, Any], Params], Any]

    async def run(self, params: Optional[Mapping[str, Any]], context: ToolContext) -> Any:
        """
        Validate, call the registrar, always log out, reshape.

        Raises:
            ToolInputError: If parameters are invalid (no session is opened)
            InwxApiError: If the registrar call fails
        """
        raw_params = dict(params or {})
        call_params = self.build_params(raw_params)

        client = context.client_factory()
        try:
            res = await client.call(self.method, call_params)
        finally:
            await client.logout()

        return self.shape_result(res or {}, raw_params)


# ---------------------------------------------------------------------------
# Parameter helpers
# ---------------------------------------------------------------------------

def _domain(params: Params) -> str:
    domain = str(params.get("domain") or "").strip()
    if not domain:
        raise ToolInputError("domain is required")
    return domain


def _record_id(params: Params) -> int:
    value = params.get("id")
    if value is None or value == "":
        raise ToolInputError("id is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ToolInputError(f"id must be an integer, got {value!r}")


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _period(value: Any) -> str:
    # DomRobot expects periods like "1Y"; bare numbers mean years
    if value is None or value == "":
        return "1Y"
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 1:
            raise ToolInputError("period must be at least 1")
        return f"{value}Y"
    return str(value).upper()


def _rename(params: Params, mapping: Mapping[str, str]) -> Params:
    """Copy present, non-None keys from params under their DomRobot names."""
    return {
        wire: params[key]
        for key, wire in mapping.items()
        if params.get(key) is not None
    }


def _contacts(params: Params) -> Params:
    """
    Collect contact handles from `contacts` or top-level role keys.

    Top-level keys win over the nested mapping.
    """
    nested = params.get("contacts") or {}
    if not isinstance(nested, Mapping):
        raise ToolInputError("contacts must be an object of role -> handle id")
    handles = {}
    for role in CONTACT_ROLES:
        value = params.get(role, nested.get(role))
        if value is not None:
            handles[role] = value
    return handles


def _paging(params: Params) -> Params:
    return _rename(params, {"page": "page", "page_limit": "pagelimit"})


def _no_params(params: Params) -> Params:
    return {}


# ---------------------------------------------------------------------------
# Result helpers
# ---------------------------------------------------------------------------

def _passthrough(res: Dict[str, Any], params: Params) -> Any:
    return res


def _compact(entry: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in entry.items() if v is not None}


def _check_entries(res: Dict[str, Any]) -> List[Dict[str, Any]]:
    entries = res.get("domain") or []
    if isinstance(entries, Mapping):
        entries = [entries]
    return [
        _compact({
            "domain": item.get("domain"),
            "avail": bool(item.get("avail")),
            "status": item.get("status"),
            "price": item.get("price"),
            "currency": item.get("currency"),
            "period": item.get("period"),
        })
        for item in entries
    ]


def _listing(key: str, source: str) -> Callable[[Dict[str, Any], Params], Dict[str, Any]]:
    def shape(res: Dict[str, Any], params: Params) -> Dict[str, Any]:
        items = res.get(source) or []
        return {"total": int(res.get("count", len(items))), key: items}
    return shape


def _with_domain(res: Dict[str, Any], params: Params) -> Dict[str, Any]:
    return {"domain": _domain(params), **res}


# ---------------------------------------------------------------------------
# Read tools
# ---------------------------------------------------------------------------

def _domain_check_params(params: Params) -> Params:
    return {"domain": _domain(params)}


def _domain_pricing_params(params: Params) -> Params:
    domains = _string_list(params.get("domains"))
    single = str(params.get("domain") or "").strip()
    if single:
        domains.insert(0, single)
    if not domains:
        raise ToolInputError("domain or domains[] is required")
    return {"domain": domains, "wide": 2}


def _domain_pricing_result(res: Dict[str, Any], params: Params) -> Dict[str, Any]:
    pricing = [
        _compact({
            "domain": entry.get("domain"),
            "avail": entry.get("avail"),
            "price": entry.get("price"),
            "currency": entry.get("currency"),
            "period": entry.get("period"),
        })
        for entry in _check_entries(res)
    ]
    return {"total": len(pricing), "pricing": pricing}


def _domain_list_params(params: Params) -> Params:
    call = _paging(params)
    call.update(_rename(params, {"search": "domain"}))
    return call


def _nameserver_list_params(params: Params) -> Params:
    call = _paging(params)
    call.update(_rename(params, {"domain": "domain"}))
    return call


def _dns_record_list_params(params: Params) -> Params:
    call = {"domain": _domain(params)}
    call.update(_rename(params, {"type": "type", "name": "name"}))
    return call


def _dns_record_list_result(res: Dict[str, Any], params: Params) -> Dict[str, Any]:
    return {"domain": _domain(params), "records": res.get("record") or []}


def _contact_list_params(params: Params) -> Params:
    call = _paging(params)
    call.update(_rename(params, {"search": "search"}))
    return call


def _contact_info_params(params: Params) -> Params:
    return {"id": _record_id(params)}


def _whois_result(res: Dict[str, Any], params: Params) -> Dict[str, Any]:
    return {"domain": _domain(params), "whois": res.get("whois")}


# ---------------------------------------------------------------------------
# Write tools
# ---------------------------------------------------------------------------

def _domain_register_params(params: Params) -> Params:
    call: Params = {"domain": _domain(params), "period": _period(params.get("period"))}
    ns = _string_list(params.get("ns"))
    if ns:
        call["ns"] = ns
    call.update(_contacts(params))
    call.update(_rename(params, {"auth_code": "authCode", "renewal_mode": "renewalMode"}))
    return call


def _domain_update_params(params: Params) -> Params:
    domain = _domain(params)
    changes = _contacts(params)
    ns = _string_list(params.get("ns"))
    if ns:
        changes["ns"] = ns
    changes.update(_rename(params, {
        "auth_code": "authCode",
        "transfer_lock": "transferLock",
        "renewal_mode": "renewalMode",
    }))
    if not changes:
        raise ToolInputError("at least one field to update is required")
    return {"domain": domain, **changes}


def _domain_delete_params(params: Params) -> Params:
    call = {"domain": _domain(params)}
    call.update(_rename(params, {"scheduled_date": "scDate"}))
    return call


def _domain_renew_params(params: Params) -> Params:
    domain = str(params.get("domain") or "").strip()
    expiration = str(params.get("expiration") or "").strip()
    if not domain or not expiration:
        raise ToolInputError("domain and expiration are required")
    return {"domain": domain, "expiration": expiration, "period": _period(params.get("period"))}


def _domain_transfer_params(params: Params) -> Params:
    domain = str(params.get("domain") or "").strip()
    auth_code = str(params.get("auth_code") or "").strip()
    if not domain or not auth_code:
        raise ToolInputError("domain and auth_code are required")
    call = {"domain": domain, "authCode": auth_code}
    call.update(_contacts(params))
    ns = _string_list(params.get("ns"))
    if ns:
        call["ns"] = ns
    return call


def _nameserver_set_params(params: Params) -> Params:
    domain = str(params.get("domain") or "").strip()
    ns = _string_list(params.get("ns"))
    if not domain or not ns:
        raise ToolInputError("domain and ns[] are required")
    return {"domain": domain, "ns": ns}


def _nameserver_set_result(res: Dict[str, Any], params: Params) -> Dict[str, Any]:
    return {"domain": str(params["domain"]).strip(), "ns": _string_list(params.get("ns")), **res}


def _dns_zone_create_params(params: Params) -> Params:
    zone_type = str(params.get("type") or "MASTER").upper()
    if zone_type not in ("MASTER", "SLAVE"):
        raise ToolInputError("type must be MASTER or SLAVE")
    call: Params = {"domain": _domain(params), "type": zone_type}
    ns = _string_list(params.get("ns"))
    if ns:
        call["ns"] = ns
    if zone_type == "SLAVE":
        if not params.get("master_ip"):
            raise ToolInputError("master_ip is required for SLAVE zones")
        call["masterIp"] = params["master_ip"]
    return call


_RECORD_FIELDS = {"name": "name", "type": "type", "content": "content", "ttl": "ttl", "prio": "prio"}


def _dns_record_add_params(params: Params) -> Params:
    domain = str(params.get("domain") or "").strip()
    if not domain or not params.get("type") or params.get("content") in (None, ""):
        raise ToolInputError("domain, type and content are required")
    call = {"domain": domain}
    call.update(_rename(params, _RECORD_FIELDS))
    call["type"] = str(call["type"]).upper()
    return call


def _dns_record_update_params(params: Params) -> Params:
    record_id = _record_id(params)
    changes = _rename(params, _RECORD_FIELDS)
    if not changes:
        raise ToolInputError("at least one field to update is required")
    return {"id": record_id, **changes}


def _dns_record_delete_params(params: Params) -> Params:
    return {"id": _record_id(params)}


_CONTACT_FIELDS = {
    "type": "type",
    "name": "name",
    "org": "org",
    "street": "street",
    "city": "city",
    "postal_code": "pc",
    "country_code": "cc",
    "phone": "voice",
    "fax": "fax",
    "email": "email",
}
_CONTACT_REQUIRED = ("name", "street", "city", "postal_code", "country_code", "phone", "email")


def _contact_create_params(params: Params) -> Params:
    missing = [key for key in _CONTACT_REQUIRED if not params.get(key)]
    if missing:
        raise ToolInputError(f"contact fields required: {', '.join(missing)}")
    call = {"type": "PERSON"}
    call.update(_rename(params, _CONTACT_FIELDS))
    return call


def _contact_update_params(params: Params) -> Params:
    contact_id = _record_id(params)
    changes = _rename(params, _CONTACT_FIELDS)
    if not changes:
        raise ToolInputError("at least one field to update is required")
    return {"id": contact_id, **changes}


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

READ = OperationKind.READ
WRITE = OperationKind.WRITE

TOOL_DEFINITIONS: Tuple[ToolDefinition, ...] = (
    ToolDefinition("inwx_account_info", "Show INWX account details",
                   READ, "account.info", _no_params, _passthrough),
    ToolDefinition("inwx_account_balance", "Show the INWX account balance",
                   READ, "accounting.accountBalance", _no_params, _passthrough),
    ToolDefinition("inwx_domain_check", "Check whether a domain is available for registration",
                   READ, "domain.check", _domain_check_params,
                   lambda res, params: _check_entries(res)),
    ToolDefinition("inwx_domain_list", "List domains in the account",
                   READ, "domain.list", _domain_list_params, _listing("domains", "domain")),
    ToolDefinition("inwx_domain_info", "Show details of a registered domain",
                   READ, "domain.info", _domain_check_params, _passthrough),
    ToolDefinition("inwx_domain_pricing", "Show registration prices for one or more domains",
                   READ, "domain.check", _domain_pricing_params, _domain_pricing_result),
    ToolDefinition("inwx_domain_whois", "Run a WHOIS lookup for a domain",
                   READ, "domain.whois", _domain_check_params, _whois_result),
    ToolDefinition("inwx_nameserver_list", "List DNS zones hosted at INWX",
                   READ, "nameserver.list", _nameserver_list_params, _listing("domains", "domains")),
    ToolDefinition("inwx_dns_record_list", "List DNS records of a zone",
                   READ, "nameserver.info", _dns_record_list_params, _dns_record_list_result),
    ToolDefinition("inwx_contact_list", "List contact handles",
                   READ, "contact.list", _contact_list_params, _listing("contacts", "contact")),
    ToolDefinition("inwx_contact_info", "Show a contact handle",
                   READ, "contact.info", _contact_info_params, _passthrough),
    ToolDefinition("inwx_domain_register", "Register a new domain",
                   WRITE, "domain.create", _domain_register_params, _with_domain),
    ToolDefinition("inwx_domain_update", "Update contacts, nameservers or flags of a domain",
                   WRITE, "domain.update", _domain_update_params, _with_domain),
    ToolDefinition("inwx_domain_delete", "Delete a domain",
                   WRITE, "domain.delete", _domain_delete_params, _with_domain),
    ToolDefinition("inwx_domain_renew", "Renew a domain",
                   WRITE, "domain.renew", _domain_renew_params, _with_domain),
    ToolDefinition("inwx_domain_transfer", "Transfer a domain into the account",
                   WRITE, "domain.transfer", _domain_transfer_params, _with_domain),
    ToolDefinition("inwx_nameserver_set", "Set the nameservers of a domain",
                   WRITE, "domain.update", _nameserver_set_params, _nameserver_set_result),
    ToolDefinition("inwx_dns_zone_create", "Create a DNS zone",
                   WRITE, "nameserver.create", _dns_zone_create_params, _with_domain),
    ToolDefinition("inwx_dns_record_add", "Add a DNS record to a zone",
                   WRITE, "nameserver.createRecord", _dns_record_add_params, _passthrough),
    ToolDefinition("inwx_dns_record_update", "Update a DNS record",
                   WRITE, "nameserver.updateRecord", _dns_record_update_params, _passthrough),
    ToolDefinition("inwx_dns_record_delete", "Delete a DNS record",
                   WRITE, "nameserver.deleteRecord", _dns_record_delete_params, _passthrough),
    ToolDefinition("inwx_contact_create", "Create a contact handle",
                   WRITE, "contact.create", _contact_create_params, _passthrough),
    ToolDefinition("inwx_contact_update", "Update a contact handle",
                   WRITE, "contact.update", _contact_update_params, _passthrough),
)


def create_tools() -> List[ToolDefinition]:
    """Return the tool catalog in registration order."""
    return list(TOOL_DEFINITIONS)
