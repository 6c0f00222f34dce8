"""Analytics service: aggregated query statistics of a profile."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union

from .common import build_uri, profile_path
from .models import Model, json_field
from .services import Service

ANALYTICS_API_PATH = "analytics"

# Device ID reported for queries not tied to an identified device
UNIDENTIFIED_DEVICE = "__UNIDENTIFIED__"

T = TypeVar("T", bound=Model)


class DestinationType(str, Enum):
    COUNTRIES = "countries"
    GAFAM = "gafam"


# =============================================================================
# QUERY
# =============================================================================

@dataclass
class AnalyticsQuery(Model):
    """
    Common filters of the analytics endpoints.

    ``from_`` and ``to`` accept datetimes or any value the API understands,
    such as relative offsets (``"-7d"``), ISO dates or unix timestamps.
    """

    from_: Optional[Union[str, datetime]] = json_field("from")
    to: Optional[Union[str, datetime]] = None
    limit: Optional[int] = None
    cursor: Optional[str] = None
    device: Optional[str] = None


class AnalyticsPage(List[T]):
    """Rows of an analytics response plus the cursor of the next page."""

    def __init__(self, rows: Iterable[T] = (), cursor: Optional[str] = None) -> None:
        super().__init__(rows)
        self.cursor = cursor


# =============================================================================
# ROWS
# =============================================================================

@dataclass
class StatusAnalytics(Model):
    status: Optional[str] = None
    queries: Optional[int] = None


@dataclass
class DomainAnalytics(Model):
    domain: Optional[str] = None
    root: Optional[str] = None
    queries: Optional[int] = None


@dataclass
class ReasonAnalytics(Model):
    id: Optional[str] = None
    name: Optional[str] = None
    queries: Optional[int] = None


@dataclass
class IPNetwork(Model):
    cellular: Optional[bool] = None
    vpn: Optional[bool] = None
    isp: Optional[str] = None
    asn: Optional[int] = None


@dataclass
class IPGeo(Model):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    country_code: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None


@dataclass
class IPAnalytics(Model):
    ip: Optional[str] = None
    network: Optional[IPNetwork] = None
    geo: Optional[IPGeo] = None
    queries: Optional[int] = None


@dataclass
class DeviceAnalytics(Model):
    id: Optional[str] = None
    name: Optional[str] = None
    model: Optional[str] = None
    local_ip: Optional[str] = None
    queries: Optional[int] = None


@dataclass
class ProtocolAnalytics(Model):
    protocol: Optional[str] = None
    queries: Optional[int] = None


@dataclass
class QueryTypeAnalytics(Model):
    type: Optional[int] = None
    name: Optional[str] = None
    queries: Optional[int] = None


@dataclass
class IPVersionAnalytics(Model):
    version: Optional[int] = None
    queries: Optional[int] = None


@dataclass
class DNSSECAnalytics(Model):
    dnssec: Optional[bool] = None
    queries: Optional[int] = None


@dataclass
class EncryptionAnalytics(Model):
    encrypted: Optional[bool] = None
    queries: Optional[int] = None


@dataclass
class DestinationAnalytics(Model):
    code: Optional[str] = None
    domains: Optional[List[str]] = None
    company: Optional[str] = None
    queries: Optional[int] = None


# =============================================================================
# SERVICE
# =============================================================================

def analytics_path(profile_id: Optional[str], name: str, query: Any = None) -> str:
    """Build ``profiles/<id>/analytics/<name>?<query>``."""
    return build_uri(profile_path(profile_id, ANALYTICS_API_PATH, name), query)


class AnalyticsService(Service):
    """Read aggregated analytics of a profile."""

    def _query(
        self,
        profile_id: str,
        name: str,
        row: Type[T],
        query: Optional[AnalyticsQuery],
        **extra: Any,
    ) -> AnalyticsPage[T]:
        params: Dict[str, Any] = {}
        params.update(extra)
        if query is not None:
            params.update(query.to_dict())
        path = analytics_path(profile_id, name, params)

        result = self.client.request("GET", path)
        if not isinstance(result, dict):
            return AnalyticsPage()

        data = result.get("data")
        meta = result.get("meta") or {}
        pagination = meta.get("pagination") or {}
        rows = row.from_list(data if isinstance(data, list) else None)
        return AnalyticsPage(rows, pagination.get("cursor"))

    def status(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[StatusAnalytics]:
        """Queries per resolution status (default, blocked, allowed)."""
        return self._query(profile_id, "status", StatusAnalytics, query)

    def domains(
        self,
        profile_id: str,
        query: Optional[AnalyticsQuery] = None,
        status: Optional[str] = None,
        root: Optional[bool] = None,
    ) -> AnalyticsPage[DomainAnalytics]:
        """
        Most queried domains.

        Args:
            profile_id: NextDNS profile ID
            query: Common filters
            status: Only count queries with this status (e.g. ``"blocked"``)
            root: Aggregate by root domain
        """
        return self._query(profile_id, "domains", DomainAnalytics, query, status=status, root=root)

    def reasons(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[ReasonAnalytics]:
        """Blocked queries per blocking reason."""
        return self._query(profile_id, "reasons", ReasonAnalytics, query)

    def ips(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[IPAnalytics]:
        return self._query(profile_id, "ips", IPAnalytics, query)

    def devices(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[DeviceAnalytics]:
        return self._query(profile_id, "devices", DeviceAnalytics, query)

    def protocols(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[ProtocolAnalytics]:
        return self._query(profile_id, "protocols", ProtocolAnalytics, query)

    def query_types(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[QueryTypeAnalytics]:
        return self._query(profile_id, "queryTypes", QueryTypeAnalytics, query)

    def ip_versions(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[IPVersionAnalytics]:
        return self._query(profile_id, "ipVersions", IPVersionAnalytics, query)

    def dnssec(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[DNSSECAnalytics]:
        return self._query(profile_id, "dnssec", DNSSECAnalytics, query)

    def encryption(self, profile_id: str, query: Optional[AnalyticsQuery] = None) -> AnalyticsPage[EncryptionAnalytics]:
        return self._query(profile_id, "encryption", EncryptionAnalytics, query)

    def destinations(
        self,
        profile_id: str,
        type: Union[DestinationType, str] = DestinationType.COUNTRIES,
        query: Optional[AnalyticsQuery] = None,
    ) -> AnalyticsPage[DestinationAnalytics]:
        """Queries per destination country or per GAFAM company."""
        type_value = type.value if isinstance(type, DestinationType) else type
        return self._query(profile_id, "destinations", DestinationAnalytics, query, type=type_value)
