# sfrest/api/connection.py
# Created: 2026-10-17

from typing import Dict, Any, Optional, Tuple, Type
from dataclasses import dataclass, field
from enum import Enum
import asyncio
import codecs
import json
import logging
import time
import aiohttp
import yarl
from concurrent.futures import ThreadPoolExecutor

from ..core.config import Config
from ..core.exceptions import (
    SFRestError,
    ConfigError,
    ResourceNotFoundError,
    AccessDeniedError,
    ActionForbiddenError,
    BadRequestError
)
from ..core.logger import Logger
from .resources import (
    RESOURCES,
    ResourceAccessor,
    Audit,
    Backup,
    Domains,
    Group,
    Role,
    Site,
    Stage,
    Task,
    Theme,
    Update,
    User,
    Variable
)

logger = logging.getLogger(__name__)

PING_URI = "/api/v1/ping"

# Checked in order, first match wins.
ERROR_PATTERNS: Tuple[Tuple[str, Type[SFRestError]], ...] = (
    ("Access denied", AccessDeniedError),
    ("Forbidden: ", ActionForbiddenError),
    ("Bad Request:", BadRequestError),
)

class RequestMethod(Enum):
    """HTTP request methods"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

@dataclass
class APIResponse:
    """Container for API response data

    ``parsed`` tells whether ``data`` was decoded from JSON or is the raw
    response body.
    """
    status: int
    data: Any
    parsed: bool
    headers: Dict[str, str] = field(default_factory=dict)
    duration: float = 0.0

def decode_text(raw: bytes, charset: Optional[str] = None) -> str:
    """Decode a response body, replacing bytes the charset cannot represent"""
    encoding = charset or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        encoding = "utf-8"
    return raw.decode(encoding, errors="replace")

def decode_body(body: str) -> Tuple[Any, bool]:
    """Parse a response body as JSON, falling back to the raw text"""
    try:
        return json.loads(body), True
    except ValueError:
        return body, False

def access_check(
    data: Any,
    status: Optional[int] = None,
    uri: Optional[str] = None
) -> Any:
    """
    Raise the matching error for an API error payload

    Args:
        data: JSON decoded response body
        status: HTTP status of the response, recorded on a raised error
        uri: request path, recorded on a raised error

    Returns:
        data unchanged when it does not carry a recognised error message

    Raises:
        AccessDeniedError: authentication failed
        ActionForbiddenError: the user's role cannot perform the request
        BadRequestError: the request was malformed
    """
    if not isinstance(data, dict):
        return data
    message = data.get("message")
    if not message or not isinstance(message, str):
        return data

    for pattern, error_class in ERROR_PATTERNS:
        if pattern in message:
            details: Dict[str, Any] = {}
            if status is not None:
                details["status"] = status
            if uri is not None:
                details["uri"] = uri
            raise error_class(message, details=details)
    return data

class Connection:
    """
    Authenticated connection to the API.

    Every call is an independent request made with HTTP Basic authentication
    and a JSON content type. Certificate verification is off unless
    ``verify_ssl`` is set. JSON bodies are decoded and checked for known
    error messages; anything that is not JSON is returned as the raw body.

    The verb methods block until the response is decoded, also when called
    from inside a running event loop. Async code can await ``arequest``.

    Example:
        conn = Connection("https://www.example.com", "apiuser", "secret")
        conn.ping()
        conn.site()
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        verify_ssl: bool = False
    ):
        self.base_url = base_url
        self.username = username
        self.password = password
        self.verify_ssl = verify_ssl

        if not verify_ssl:
            logger.warning(
                "Certificate verification disabled for %s",
                base_url,
                extra={"user": username, "action": "connect"}
            )

    @classmethod
    def from_config(cls, config: Config) -> "Connection":
        """
        Build a connection from the ``connection.*`` settings of a Config

        The ``logging.*`` settings are applied to the sfrest logger once the
        connection settings are known to be complete.
        """
        values = {}
        for key in ("base_url", "username", "password"):
            value = config.get(f"connection.{key}")
            if value is None or value == "":
                raise ConfigError(f"connection.{key} is required")
            # Environment values such as numeric passwords arrive converted.
            values[key] = str(value)

        Logger(config)

        return cls(
            values["base_url"],
            values["username"],
            values["password"],
            verify_ssl=config.get("connection.verify_ssl", False)
        )

    def __repr__(self) -> str:
        return f"Connection(base_url={self.base_url!r}, username={self.username!r})"

    def _url(self, uri: str) -> yarl.URL:
        return yarl.URL(self.base_url + str(uri), encoded=True)

    async def arequest(
        self,
        method: RequestMethod,
        uri: str,
        payload: Optional[Any] = None
    ) -> APIResponse:
        """
        Make an API request

        Args:
            method: HTTP method to use
            uri: path appended to the base url as given
            payload: request body, sent as is

        Returns:
            APIResponse with the decoded body
        """
        action = f"{method.value} {uri}"
        extra = {"user": self.username, "action": action}
        logger.debug("Sending request to %s", self.base_url, extra=extra)

        start_time = time.monotonic()
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None)) as session:
            async with session.request(
                method.value,
                self._url(uri),
                headers={"Content-Type": "application/json"},
                auth=aiohttp.BasicAuth(self.username, self.password),
                data=payload,
                ssl=self.verify_ssl,
                allow_redirects=False
            ) as response:
                status = response.status
                headers = dict(response.headers)
                body = decode_text(await response.read(), response.charset)
        duration = time.monotonic() - start_time

        data, parsed = decode_body(body)
        if parsed:
            try:
                data = access_check(data, status=status, uri=uri)
            except SFRestError as e:
                logger.warning(
                    "%s (status %s): %s", type(e).__name__, status, e.message, extra=extra
                )
                raise
        else:
            logger.debug("Response body is not JSON, returning raw body", extra=extra)

        return APIResponse(
            status=status,
            data=data,
            parsed=parsed,
            headers=headers,
            duration=duration
        )

    def request(
        self,
        method: RequestMethod,
        uri: str,
        payload: Optional[Any] = None
    ) -> APIResponse:
        """Make an API request and block until it completes"""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.arequest(method, uri, payload))

        # asyncio.run cannot nest inside a running loop.
        with ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(
                asyncio.run, self.arequest(method, uri, payload)
            ).result()

    def get(self, uri: str) -> Any:
        """Perform GET request"""
        return self.request(RequestMethod.GET, uri).data

    def get_with_status(self, uri: str) -> Tuple[int, Any]:
        """
        Perform GET request and return the HTTP status with the data

        A recognised error message still raises; the status is then
        available as ``error.details["status"]``.
        """
        response = self.request(RequestMethod.GET, uri)
        return response.status, response.data

    def post(self, uri: str, payload: Any) -> Any:
        """Perform POST request"""
        return self.request(RequestMethod.POST, uri, payload).data

    def put(self, uri: str, payload: Any) -> Any:
        """Perform PUT request"""
        return self.request(RequestMethod.PUT, uri, payload).data

    def delete(self, uri: str) -> Any:
        """Perform DELETE request"""
        return self.request(RequestMethod.DELETE, uri).data

    def access_check(self, data: Any) -> Any:
        """Raise the matching error for an API error payload"""
        return access_check(data)

    def ping(self) -> Any:
        """Ping the API as an authenticated user"""
        return self.get(PING_URI)

    def service_response(self) -> Any:
        """Alias for ping"""
        return self.ping()

    def resource(self, name: str) -> ResourceAccessor:
        """Instantiate the named resource accessor bound to this connection"""
        try:
            resource_class = RESOURCES[name]
        except KeyError:
            raise ResourceNotFoundError(
                f"Unknown resource: {name}", details={"resource": name}
            )
        return resource_class(self)

    def audit(self) -> Audit:
        return self.resource("audit")

    def backup(self) -> Backup:
        return self.resource("backup")

    def domains(self) -> Domains:
        return self.resource("domains")

    def group(self) -> Group:
        return self.resource("group")

    def role(self) -> Role:
        return self.resource("role")

    def site(self) -> Site:
        return self.resource("site")

    def stage(self) -> Stage:
        return self.resource("stage")

    def task(self) -> Task:
        return self.resource("task")

    def theme(self) -> Theme:
        return self.resource("theme")

    def update(self) -> Update:
        return self.resource("update")

    def user(self) -> User:
        return self.resource("user")

    def variable(self) -> Variable:
        return self.resource("variable")
