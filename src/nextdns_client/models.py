"""Typed representations of NextDNS API resources."""

import dataclasses
import typing
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Type, TypeVar

from .common import to_camel

M = TypeVar("M", bound="Model")


# =============================================================================
# (DE)SERIALIZATION
# =============================================================================

def json_field(key: str, default: Any = None) -> Any:
    """Declare a field whose API key is not the camelCase of its name."""
    return field(default=default, metadata={"json": key})


def _json_key(f: dataclasses.Field) -> str:
    return f.metadata.get("json") or to_camel(f.name)


@lru_cache(maxsize=None)
def _type_hints(cls: type) -> Dict[str, Any]:
    return typing.get_type_hints(cls)


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp as returned by the API."""
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _decode(tp: Any, value: Any) -> Any:
    if value is None:
        return None

    origin = typing.get_origin(tp)
    if origin is typing.Union:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        return _decode(args[0], value) if len(args) == 1 else value

    if origin is list:
        args = typing.get_args(tp)
        if not isinstance(value, list) or not args:
            return value
        return [_decode(args[0], item) for item in value]

    if isinstance(tp, type):
        if issubclass(tp, Model):
            return tp.from_dict(value) if isinstance(value, dict) else value
        if issubclass(tp, datetime):
            return parse_datetime(value)
        if issubclass(tp, Enum):
            return tp(value)

    return value


def _encode(value: Any) -> Any:
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items() if item is not None}
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_payload(value: Any) -> Any:
    """Turn a model, a list of models or a plain dict into a JSON body."""
    return _encode(value)


class Model:
    """
    Base class for API resources.

    Subclasses are dataclasses whose fields all default to None; a None
    field is left out of to_dict() so PATCH bodies only carry what the
    caller set.
    """

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        hints = _type_hints(cls)
        kwargs = {}
        for f in dataclasses.fields(cls):
            key = _json_key(f)
            if key in data:
                kwargs[f.name] = _decode(hints[f.name], data[key])
        return cls(**kwargs)

    @classmethod
    def from_list(cls: Type[M], data: Optional[List[Dict[str, Any]]]) -> List[M]:
        return [cls.from_dict(item) for item in data or []]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            out[_json_key(f)] = _encode(value)
        return out


# =============================================================================
# LISTS
# =============================================================================

@dataclass
class ListEntry(Model):
    """An entry of the allowlist, denylist or parental control lists."""

    id: Optional[str] = None
    active: Optional[bool] = None


AllowlistEntry = ListEntry
DenylistEntry = ListEntry
ParentalControlEntry = ListEntry


# =============================================================================
# PARENTAL CONTROL
# =============================================================================

@dataclass
class ParentalControl(Model):
    services: Optional[List[ListEntry]] = None
    categories: Optional[List[ListEntry]] = None
    safe_search: Optional[bool] = None
    youtube_restricted_mode: Optional[bool] = None
    block_bypass: Optional[bool] = None


# =============================================================================
# PRIVACY
# =============================================================================

@dataclass
class PrivacyBlocklist(Model):
    id: Optional[str] = None
    name: Optional[str] = None
    website: Optional[str] = None
    entries: Optional[int] = None
    updated_on: Optional[datetime] = None


@dataclass
class PrivacyNative(Model):
    id: Optional[str] = None


@dataclass
class Privacy(Model):
    blocklists: Optional[List[PrivacyBlocklist]] = None
    natives: Optional[List[PrivacyNative]] = None
    disguised_trackers: Optional[bool] = None
    allow_affiliate: Optional[bool] = None


# =============================================================================
# SECURITY
# =============================================================================

@dataclass
class SecurityTld(Model):
    id: Optional[str] = None


@dataclass
class Security(Model):
    threat_intelligence_feeds: Optional[bool] = None
    ai_threat_detection: Optional[bool] = None
    google_safe_browsing: Optional[bool] = None
    cryptojacking: Optional[bool] = None
    dns_rebinding: Optional[bool] = None
    idn_homographs: Optional[bool] = None
    typosquatting: Optional[bool] = None
    dga: Optional[bool] = None
    nrd: Optional[bool] = None
    ddns: Optional[bool] = None
    parking: Optional[bool] = None
    csam: Optional[bool] = None
    tlds: Optional[List[SecurityTld]] = None


# =============================================================================
# SETTINGS
# =============================================================================

@dataclass
class SettingsLogsDrop(Model):
    ip: Optional[bool] = None
    domain: Optional[bool] = None


@dataclass
class SettingsLogs(Model):
    enabled: Optional[bool] = None
    drop: Optional[SettingsLogsDrop] = None
    # Retention in seconds
    retention: Optional[int] = None
    location: Optional[str] = None


@dataclass
class SettingsBlockPage(Model):
    enabled: Optional[bool] = None


@dataclass
class SettingsPerformance(Model):
    ecs: Optional[bool] = None
    cache_boost: Optional[bool] = None
    cname_flattening: Optional[bool] = None


@dataclass
class Settings(Model):
    logs: Optional[SettingsLogs] = None
    block_page: Optional[SettingsBlockPage] = None
    performance: Optional[SettingsPerformance] = None
    web3: Optional[bool] = None


# =============================================================================
# REWRITES
# =============================================================================

@dataclass
class Rewrite(Model):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    content: Optional[str] = None


# =============================================================================
# SETUP
# =============================================================================

@dataclass
class SetupLinkedIP(Model):
    servers: Optional[List[str]] = None
    ip: Optional[str] = None
    ddns: Optional[str] = None
    update_token: Optional[str] = None


@dataclass
class Setup(Model):
    ipv4: Optional[List[str]] = None
    ipv6: Optional[List[str]] = None
    linked_ip: Optional[SetupLinkedIP] = None
    dnscrypt: Optional[str] = None


# =============================================================================
# PROFILES
# =============================================================================

@dataclass
class ProfileSummary(Model):
    """Item of the profile listing."""

    id: Optional[str] = None
    fingerprint: Optional[str] = None
    name: Optional[str] = None


@dataclass
class Profile(Model):
    """A complete NextDNS profile."""

    id: Optional[str] = None
    name: Optional[str] = None
    security: Optional[Security] = None
    privacy: Optional[Privacy] = None
    parental_control: Optional[ParentalControl] = None
    denylist: Optional[List[ListEntry]] = None
    allowlist: Optional[List[ListEntry]] = None
    settings: Optional[Settings] = None
    rewrites: Optional[List[Rewrite]] = None
