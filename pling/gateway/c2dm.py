"""Gateway for Google's Android C2DM service.

Built on `requests`. Authentication uses ClientLogin once per instance (at
construction); the returned token is sent with every push.

Example:

    C2DMGateway({
        "email": "your-email@gmail.com",   # Google account (required)
        "password": "your-password",       # account password (required)
        "source": "your-app-name",         # application identifier (required)

        "authentication_url": "https://...",  # optional, ClientLogin by default
        "push_url": "https://...",            # optional, C2DM send URL by default
        "adapter": HTTPAdapter(max_retries=0),  # optional requests transport adapter
        "connection": {"timeout": 15},        # optional kwargs for Session.post
        "payload": False,                     # forward message.payload as data.<key>
        "debug": False,                       # log requests/responses (redacted)
    })
"""

from __future__ import annotations

import hashlib
import logging
import re
from typing import Any, Dict, Mapping, Optional

import requests

from ..exceptions import AuthenticationFailed, DeliveryFailed
from ..monitoring import log_event
from .base import Gateway

logger = logging.getLogger(__name__)

DEFAULT_AUTHENTICATION_URL = "https://www.google.com/accounts/ClientLogin"
DEFAULT_PUSH_URL = "https://android.apis.google.com/c2dm/send"
DEFAULT_TIMEOUT = 15

_TOKEN_RE = re.compile(r"^Auth=(.+)$", re.M)
_ERROR_RE = re.compile(r"^Error=(.+)$", re.M)


def collapse_key(body: Any) -> str:
    # stable across processes, unlike hash()
    text = "" if body is None else str(body)
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]


def extract_token(body: str) -> str:
    match = _TOKEN_RE.search(body or "")
    if not match:
        raise AuthenticationFailed("C2DM Token extraction failed")
    return match.group(1).strip()


class C2DMGateway(Gateway):
    handles = ("android", "c2dm")
    required_configuration = ("email", "password", "source")

    def __init__(self, configuration: Optional[Mapping[str, Any]] = None):
        self.token: Optional[str] = None
        super().__init__(configuration)
        self.setup()

    def default_configuration(self) -> Dict[str, Any]:
        config = super().default_configuration()
        config.update({
            "authentication_url": DEFAULT_AUTHENTICATION_URL,
            "push_url": DEFAULT_PUSH_URL,
            "adapter": None,
            "connection": {"timeout": DEFAULT_TIMEOUT},
            "payload": False,
            "debug": False,
        })
        return config

    # -------- transport --------
    def connection(self) -> requests.Session:
        session = requests.Session()
        adapter = self.configuration.get("adapter")
        if adapter is not None:
            if isinstance(adapter, type):
                adapter = adapter()
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        if self.configuration.get("debug"):
            session.hooks["response"].append(self._log_response)
        return session

    def _post(self, url: str, data: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> requests.Response:
        # a caller connection dict without a timeout still gets the default one
        options = {"timeout": DEFAULT_TIMEOUT, **(self.configuration.get("connection") or {})}
        if headers:
            options["headers"] = {**(options.get("headers") or {}), **headers}
        if self.configuration.get("debug"):
            log_event("pling.c2dm.request", {"url": url, "data": data, "headers": options.get("headers")}, log=logger)
        with self.connection() as session:
            return session.post(url, data=data, **options)

    def _log_response(self, response: requests.Response, *args, **kwargs):
        log_event("pling.c2dm.response", {"url": response.url, "status": response.status_code, "body": response.text}, log=logger)

    # -------- lifecycle --------
    def authenticate(self) -> None:
        if self.token:
            return
        data = {
            "accountType": "HOSTED_OR_GOOGLE",
            "service": "ac2dm",
            "Email": self.configuration["email"],
            "Passwd": self.configuration["password"],
            "source": self.configuration["source"],
        }
        try:
            response = self._post(self.configuration["authentication_url"], data)
        except requests.RequestException as e:
            raise AuthenticationFailed(f"C2DM Authentication failed: {e}") from e

        if not response.ok:
            raise AuthenticationFailed(f"C2DM Authentication failed: [{response.status_code}] {response.text}")

        self.token = extract_token(response.text)

    # -------- delivery --------
    def build_data(self, message: Any, device: Any) -> Dict[str, Any]:
        data = {
            "registration_id": device.identifier,
            "data.body": message.body,
            "data.badge": message.badge,
            "data.sound": message.sound,
            "data.subject": message.subject,
            "collapse_key": collapse_key(message.body),
        }
        data = {k: v for k, v in data.items() if v is not None}
        if self.configuration.get("payload") and message.payload:
            for key, value in message.payload.items():
                data[f"data.{key}"] = value
        return data

    def deliver_now(self, message: Any, device: Any) -> None:
        data = self.build_data(message, device)
        headers = {"Authorization": f"GoogleLogin auth={self.token}"}
        try:
            response = self._post(self.configuration["push_url"], data, headers=headers)
        except requests.RequestException as e:
            raise DeliveryFailed(f"C2DM Delivery failed: {e}", message, device) from e

        match = _ERROR_RE.search(response.text or "")
        if not response.ok or match:
            raise DeliveryFailed(
                f"C2DM Delivery failed: [{response.status_code}] {response.text}",
                message,
                device,
                status=response.status_code,
                body=response.text,
                error_code=match.group(1).strip() if match else None,
            )


__all__ = ["C2DMGateway", "extract_token", "collapse_key"]
