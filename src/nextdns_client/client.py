"""NextDNS API client: shared request dispatch and response classification."""

import json
import logging
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Type

import requests

from . import __version__
from .analytics import AnalyticsService
from .common import build_uri
from .config import API_URL, DEFAULT_TIMEOUT
from .exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ErrorDetail,
    MalformedResponseError,
    NotFoundError,
    RequestError,
    ServiceError,
    TransportError,
)
from .lists import AllowlistService, DenylistService
from .parental_control import (
    ParentalControlCategoriesService,
    ParentalControlService,
    ParentalControlServicesService,
)
from .privacy import PrivacyBlocklistsService, PrivacyNativesService, PrivacyService
from .profile_setup import SetupLinkedIPService, SetupService
from .profiles import ProfilesService
from .rewrites import RewritesService
from .security import SecurityService, SecurityTldsService
from .settings import (
    SettingsBlockPageService,
    SettingsLogsService,
    SettingsPerformanceService,
    SettingsService,
)


# =============================================================================
# CONSTANTS
# =============================================================================

CONTENT_TYPE = "application/json"
USER_AGENT = f"nextdns-client/{__version__}"

# Error messages attached to classified API errors
ERR_INTERNAL_SERVICE = "internal service error received"
ERR_RESPONSE = "response error received"
ERR_MALFORMED = "malformed response body received"
ERR_MALFORMED_ERROR_BODY = "malformed error response body received"

# Error kind by HTTP status; any other 4xx is a plain RequestError
STATUS_ERRORS: Dict[int, Type[APIError]] = {
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
}

logger = logging.getLogger(__name__)


def _status_text(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def _decode_error_details(document: Dict[str, Any]) -> List[ErrorDetail]:
    items = document.get("errors")
    if not isinstance(items, list):
        return []
    return [ErrorDetail.from_dict(item) for item in items if isinstance(item, dict)]


# =============================================================================
# NEXTDNS CLIENT
# =============================================================================

class NextDNSClient:
    """Client for the NextDNS API, exposing one service per resource."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        debug: bool = False,
    ) -> None:
        """
        Initialize the NextDNS client.

        Args:
            api_key: NextDNS API key, sent as X-Api-Key (None sends no key)
            base_url: API root, overridable for proxies and test servers
            timeout: Request timeout in seconds
            session: Optional requests session (left open on close())
            debug: Log request and response bodies at DEBUG level

        Raises:
            ConfigurationError: If api_key is an empty string
        """
        if api_key is not None and not api_key.strip():
            raise ConfigurationError("api key must not be empty")

        self.base_url = base_url
        self.timeout = timeout
        self.debug = debug
        self.headers: Dict[str, str] = {
            "Accept": CONTENT_TYPE,
            "User-Agent": USER_AGENT,
        }
        if api_key is not None:
            self.headers["X-Api-Key"] = api_key.strip()

        self._owns_session = session is None
        self.session = session or requests.Session()

        self.profiles = ProfilesService(self)

        self.allowlist = AllowlistService(self)
        self.denylist = DenylistService(self)

        self.parental_control = ParentalControlService(self)
        self.parental_control_services = ParentalControlServicesService(self)
        self.parental_control_categories = ParentalControlCategoriesService(self)

        self.privacy = PrivacyService(self)
        self.privacy_blocklists = PrivacyBlocklistsService(self)
        self.privacy_natives = PrivacyNativesService(self)

        self.settings = SettingsService(self)
        self.settings_logs = SettingsLogsService(self)
        self.settings_block_page = SettingsBlockPageService(self)
        self.settings_performance = SettingsPerformanceService(self)

        self.security = SecurityService(self)
        self.security_tlds = SecurityTldsService(self)

        self.rewrites = RewritesService(self)

        self.setup = SetupService(self)
        self.setup_linked_ip = SetupLinkedIPService(self)

        self.analytics = AnalyticsService(self)

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs: Any) -> "NextDNSClient":
        """Build a client from the dictionary returned by load_config()."""
        options: Dict[str, Any] = {
            "base_url": config.get("base_url") or API_URL,
            "timeout": config.get("timeout") or DEFAULT_TIMEOUT,
            "debug": bool(config.get("debug")),
        }
        options.update(kwargs)
        return cls(config.get("api_key"), **options)

    def __repr__(self) -> str:
        return f"NextDNSClient(base_url={self.base_url!r})"

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "NextDNSClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # DISPATCH
    # -------------------------------------------------------------------------

    def url_for(self, path: str) -> str:
        """Join a relative API path onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        params: Any = None,
    ) -> Any:
        """
        Make an HTTP request to the NextDNS API.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: API path relative to the base URL
            payload: Optional JSON body, ignored for GET requests
            params: Optional query parameters (None values are dropped)

        Returns:
            Decoded JSON document, or None for empty/204 responses

        Raises:
            TransportError: If no response was received
            APIError: If the response is classified as an error
        """
        method = method.upper()
        url = self.url_for(build_uri(path, params))
        headers = dict(self.headers)
        body: Optional[str] = None

        if method != "GET" and payload is not None:
            body = json.dumps(payload)
            headers["Content-Type"] = CONTENT_TYPE

        if self.debug:
            logger.debug(f"REQUEST: {method} {url}" + (f" body={body}" if body else ""))
        else:
            logger.debug(f"REQUEST: {method} {url}")

        try:
            response = self.session.request(
                method, url, data=body, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"API request error for {method} {url}: {e}")
            raise TransportError(f"error making a request to {method} {url}: {e}") from e

        return self.handle_response(response)

    def handle_response(self, response: requests.Response) -> Any:
        """
        Classify a response and decode its body.

        Error bodies are detected by status (>= 400) or, since the API
        reports some failures with a 200 status, by the presence of an
        ``"errors"`` member in the raw body.

        Returns:
            Decoded JSON document, or None when there is nothing to decode

        Raises:
            ServiceError: 5xx status
            AuthenticationError: 401/403 with an error envelope
            NotFoundError: 404 with an error envelope
            RequestError: other error envelopes
            MalformedResponseError: body is not valid JSON
        """
        status = response.status_code
        body = response.text or ""

        if self.debug:
            if body:
                logger.debug(f"RESPONSE: status={status} body={body}")
            else:
                logger.debug(f"RESPONSE: status={status}")

        if status == HTTPStatus.NO_CONTENT:
            return None

        meta: Dict[str, str] = {"body": body, "http_status": _status_text(status)}

        if status >= HTTPStatus.BAD_REQUEST or '"errors"' in body:
            if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
                raise ServiceError(ERR_INTERNAL_SERVICE, meta=meta, status_code=status)

            try:
                document = json.loads(body)
            except ValueError as e:
                meta["err"] = str(e)
                raise MalformedResponseError(
                    ERR_MALFORMED_ERROR_BODY, meta=meta, status_code=status
                ) from e

            if not isinstance(document, dict):
                meta["err"] = f"expected a JSON object, got {type(document).__name__}"
                raise MalformedResponseError(
                    ERR_MALFORMED_ERROR_BODY, meta=meta, status_code=status
                )

            error_class = STATUS_ERRORS.get(status, RequestError)
            raise error_class(
                ERR_RESPONSE,
                errors=_decode_error_details(document),
                meta=meta,
                status_code=status,
            )

        if not body.strip():
            return None

        try:
            return json.loads(body)
        except ValueError as e:
            meta["err"] = str(e)
            raise MalformedResponseError(ERR_MALFORMED, meta=meta, status_code=status) from e
