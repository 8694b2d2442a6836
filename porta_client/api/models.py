"""
Resource models for the 3scale Account Management API.

Every remote resource is a dataclass deriving from :class:`Resource` and
declares the envelope it travels in on the wire, e.g. ``{"service": {...}}``
or ``<service>...</service>``. List results derive from :class:`ResourceList`
and name their collection key and item type.

Unknown keys are ignored and missing keys stay ``None``.
"""

from dataclasses import dataclass, field, fields
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)
from xml.etree import ElementTree as ET

R = TypeVar("R", bound="Resource")

# Server-assigned, never sent back
READ_ONLY_FIELDS = frozenset(("id", "created_at", "updated_at", "links"))

_SCALARS = (str, int, float, bool)


def _unwrap_optional(hint: Any) -> Any:
    if get_origin(hint) is Union:
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _is_resource(hint: Any) -> bool:
    return isinstance(hint, type) and issubclass(hint, Resource)


def _wire_key(f) -> str:
    return f.metadata.get("key", f.name)


def _coerce(value: Any, hint: Any) -> Any:
    """Convert a decoded value to the declared field type."""
    if value is None:
        return None
    if _is_resource(hint):
        return hint.from_dict(value)
    if hint in _SCALARS and not isinstance(value, _SCALARS):
        raise TypeError(f"expected {hint.__name__}, got {type(value).__name__}")
    if hint is bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1")
        return bool(value)
    if hint in (int, float):
        if isinstance(value, bool):
            raise TypeError(f"expected {hint.__name__}, got bool")
        return hint(value)
    if hint is str and isinstance(value, (int, float)):
        return str(value)
    return value


@dataclass
class Resource:
    """Base class for a single remote resource."""

    envelope: ClassVar[Optional[str]] = None

    @classmethod
    def _field_types(cls):
        hints = get_type_hints(cls)
        for f in fields(cls):
            yield f, _unwrap_optional(hints[f.name])

    @classmethod
    def from_dict(cls: Type[R], data: Dict[str, Any]) -> R:
        """Build the resource from an already unwrapped mapping."""
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects an object, got {type(data).__name__}")

        values = {}
        for f, hint in cls._field_types():
            key = _wire_key(f)
            if key in data:
                values[f.name] = _coerce(data[key], hint)
        return cls(**values)

    @classmethod
    def from_json(cls: Type[R], data: Any) -> R:
        """Build the resource from a decoded JSON document, unwrapping its envelope."""
        if cls.envelope:
            if not isinstance(data, dict) or cls.envelope not in data:
                raise ValueError(f"missing {cls.envelope!r} envelope in {cls.__name__} body")
            data = data[cls.envelope]
        return cls.from_dict(data)

    @classmethod
    def from_xml(cls: Type[R], element: ET.Element) -> R:
        """Build the resource from its envelope element."""
        if cls.envelope and element.tag != cls.envelope:
            raise ValueError(f"expected <{cls.envelope}> element, got <{element.tag}>")
        return cls._from_element(element)

    @classmethod
    def _from_element(cls: Type[R], element: ET.Element) -> R:
        values = {}
        for f, hint in cls._field_types():
            key = _wire_key(f)
            child = element.find(key)
            if _is_resource(hint):
                if child is not None:
                    values[f.name] = hint._from_element(child)
                continue
            if hint not in _SCALARS:
                continue

            text = child.text if child is not None else element.get(key)
            if text is None or not text.strip():
                continue
            values[f.name] = _coerce(text if hint is str else text.strip(), hint)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Writable, non-empty fields keyed by their wire names."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in READ_ONLY_FIELDS or value is None:
                continue
            result[_wire_key(f)] = value.to_dict() if isinstance(value, Resource) else value
        return result


@dataclass
class ResourceList(Generic[R]):
    """
    Base class for list results.

    ``collection`` is the key (JSON) or root tag (XML) that holds the items.
    A ``None`` collection means the body is a bare JSON array.
    """

    items: List[R] = field(default_factory=list)

    collection: ClassVar[Optional[str]] = None
    item_type: ClassVar[Type[Resource]] = Resource

    @classmethod
    def from_json(cls, data: Any):
        if cls.collection is None:
            entries = data
        else:
            if not isinstance(data, dict) or cls.collection not in data:
                raise ValueError(f"missing {cls.collection!r} collection in {cls.__name__} body")
            entries = data[cls.collection]

        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise TypeError(f"{cls.__name__} expects an array, got {type(entries).__name__}")
        return cls(items=[cls.item_type.from_json(entry) for entry in entries])

    @classmethod
    def from_xml(cls, element: ET.Element):
        if element.tag != cls.collection:
            raise ValueError(f"expected <{cls.collection}> element, got <{element.tag}>")
        envelope = cls.item_type.envelope
        return cls(items=[cls.item_type.from_xml(child) for child in element if child.tag == envelope])

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[R]:
        return iter(self.items)

    def __getitem__(self, index: int) -> R:
        return self.items[index]


# Accounts and users

@dataclass
class Account(Resource):
    envelope = "account"

    id: Optional[int] = None
    state: Optional[str] = None
    org_name: Optional[str] = None
    monthly_billing_enabled: Optional[bool] = None
    monthly_charging_enabled: Optional[bool] = None
    credit_card_stored: Optional[bool] = None
    admin_domain: Optional[str] = None
    domain: Optional[str] = None
    support_email: Optional[str] = None
    finance_support_email: Optional[str] = None
    from_email: Optional[str] = None
    site_access_code: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class AccountList(ResourceList[Account]):
    collection = "accounts"
    item_type = Account


@dataclass
class User(Resource):
    envelope = "user"

    id: Optional[int] = None
    account_id: Optional[int] = None
    state: Optional[str] = None
    role: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UserList(ResourceList[User]):
    collection = "users"
    item_type = User


@dataclass
class AccessToken(Resource):
    envelope = "access_token"

    id: Optional[int] = None
    name: Optional[str] = None
    value: Optional[str] = None
    permission: Optional[str] = None
    scopes: Optional[List[str]] = None
    expires_at: Optional[str] = None


@dataclass
class Tenant(Resource):
    """A provider account created through the master API, with its admin token."""

    envelope = "signup"

    account: Optional[Account] = None
    access_token: Optional[AccessToken] = None


# Products and their children

@dataclass
class Product(Resource):
    """A product. Legacy XML services decode into the same shape."""

    envelope = "service"

    id: Optional[int] = None
    name: Optional[str] = None
    system_name: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    backend_version: Optional[str] = None
    deployment_option: Optional[str] = None
    support_email: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProductList(ResourceList[Product]):
    collection = "services"
    item_type = Product


@dataclass
class Metric(Resource):
    envelope = "metric"

    id: Optional[int] = None
    name: Optional[str] = None
    system_name: Optional[str] = None
    friendly_name: Optional[str] = None
    unit: Optional[str] = None
    description: Optional[str] = None
    service_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MetricList(ResourceList[Metric]):
    collection = "metrics"
    item_type = Metric


@dataclass
class Method(Resource):
    envelope = "method"

    id: Optional[int] = None
    name: Optional[str] = None
    system_name: Optional[str] = None
    friendly_name: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MethodList(ResourceList[Method]):
    collection = "methods"
    item_type = Method


@dataclass
class MappingRule(Resource):
    envelope = "mapping_rule"

    id: Optional[int] = None
    metric_id: Optional[int] = None
    pattern: Optional[str] = None
    http_method: Optional[str] = None
    delta: Optional[int] = None
    position: Optional[int] = None
    last: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MappingRuleList(ResourceList[MappingRule]):
    collection = "mapping_rules"
    item_type = MappingRule


@dataclass
class Proxy(Resource):
    """APIcast gateway settings of a product."""

    envelope = "proxy"

    service_id: Optional[int] = None
    endpoint: Optional[str] = None
    sandbox_endpoint: Optional[str] = None
    api_backend: Optional[str] = None
    credentials_location: Optional[str] = None
    auth_app_id: Optional[str] = None
    auth_app_key: Optional[str] = None
    auth_user_key: Optional[str] = None
    error_auth_failed: Optional[str] = None
    error_auth_missing: Optional[str] = None
    error_no_match: Optional[str] = None
    error_status_auth_failed: Optional[int] = None
    error_status_auth_missing: Optional[int] = None
    error_status_no_match: Optional[int] = None
    error_headers_auth_failed: Optional[str] = None
    error_headers_auth_missing: Optional[str] = None
    error_headers_no_match: Optional[str] = None
    oidc_issuer_endpoint: Optional[str] = None
    oidc_issuer_type: Optional[str] = None
    jwt_claim_with_client_id: Optional[str] = None
    jwt_claim_with_client_id_type: Optional[str] = None
    secret_token: Optional[str] = None
    hostname_rewrite: Optional[str] = None
    lock_version: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class PolicyConfig(Resource):
    """One entry of a product's policy chain. Travels without an envelope."""

    name: Optional[str] = None
    version: Optional[str] = None
    configuration: Optional[Dict[str, Any]] = None
    enabled: Optional[bool] = None


class PolicyConfigList(ResourceList[PolicyConfig]):
    collection = "policies_config"
    item_type = PolicyConfig


@dataclass
class OIDCConfiguration(Resource):
    envelope = "oidc_configuration"

    id: Optional[int] = None
    standard_flow_enabled: Optional[bool] = None
    implicit_flow_enabled: Optional[bool] = None
    service_accounts_enabled: Optional[bool] = None
    direct_access_grants_enabled: Optional[bool] = None


@dataclass
class ProxyConfig(Resource):
    """A versioned, deployed snapshot of a product's gateway configuration."""

    envelope = "proxy_config"

    id: Optional[int] = None
    version: Optional[int] = None
    environment: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProxyConfigList(ResourceList[ProxyConfig]):
    collection = "proxy_configs"
    item_type = ProxyConfig


# Backends

@dataclass
class BackendApi(Resource):
    envelope = "backend_api"

    id: Optional[int] = None
    name: Optional[str] = None
    system_name: Optional[str] = None
    description: Optional[str] = None
    private_endpoint: Optional[str] = None
    account_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class BackendApiList(ResourceList[BackendApi]):
    collection = "backend_apis"
    item_type = BackendApi


@dataclass
class BackendApiUsage(Resource):
    """Binding of a backend API to a product under a path."""

    envelope = "backend_usage"

    id: Optional[int] = None
    path: Optional[str] = None
    service_id: Optional[int] = None
    backend_api_id: Optional[int] = field(default=None, metadata={"key": "backend_id"})


class BackendApiUsageList(ResourceList[BackendApiUsage]):
    item_type = BackendApiUsage


# Plans

@dataclass
class ApplicationPlan(Resource):
    envelope = "application_plan"

    id: Optional[int] = None
    name: Optional[str] = None
    system_name: Optional[str] = None
    state: Optional[str] = None
    setup_fee: Optional[float] = None
    cost_per_month: Optional[float] = None
    trial_period_days: Optional[int] = None
    cancellation_period: Optional[int] = None
    approval_required: Optional[bool] = None
    default: Optional[bool] = None
    custom: Optional[bool] = None
    service_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ApplicationPlanList(ResourceList[ApplicationPlan]):
    collection = "plans"
    item_type = ApplicationPlan


@dataclass
class Limit(Resource):
    envelope = "limit"

    id: Optional[int] = None
    metric_id: Optional[int] = None
    plan_id: Optional[int] = None
    period: Optional[str] = None
    value: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LimitList(ResourceList[Limit]):
    collection = "limits"
    item_type = Limit


@dataclass
class PricingRule(Resource):
    envelope = "pricing_rule"

    id: Optional[int] = None
    metric_id: Optional[int] = None
    cost_per_unit: Optional[float] = None
    min: Optional[int] = None
    max: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PricingRuleList(ResourceList[PricingRule]):
    collection = "pricing_rules"
    item_type = PricingRule


# Documentation and policies

@dataclass
class ActiveDoc(Resource):
    """An OpenAPI document published in the developer portal."""

    envelope = "api_doc"

    id: Optional[int] = None
    name: Optional[str] = None
    system_name: Optional[str] = None
    description: Optional[str] = None
    body: Optional[str] = None
    published: Optional[bool] = None
    skip_swagger_validations: Optional[bool] = None
    service_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ActiveDocList(ResourceList[ActiveDoc]):
    collection = "api_docs"
    item_type = ActiveDoc


@dataclass
class APIcastPolicy(Resource):
    """A custom policy registered in the tenant's policy registry."""

    envelope = "policy"

    id: Optional[int] = None
    name: Optional[str] = None
    version: Optional[str] = None
    schema: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class APIcastPolicyList(ResourceList[APIcastPolicy]):
    collection = "policies"
    item_type = APIcastPolicy


# Applications (XML only)

@dataclass
class Application(Resource):
    envelope = "application"

    id: Optional[int] = None
    state: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    user_account_id: Optional[int] = None
    service_id: Optional[int] = None
    application_id: Optional[str] = None
    user_key: Optional[str] = None
    provider_verification_key: Optional[str] = None
    end_user_required: Optional[bool] = None
    first_traffic_at: Optional[str] = None
    first_daily_traffic_at: Optional[str] = None
    plan: Optional[ApplicationPlan] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
