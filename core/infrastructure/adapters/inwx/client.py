"""
INWX DomRobot JSON-RPC client.

Pure transport: sends a method name plus parameters, returns the `resData`
payload, and raises InwxApiError for anything that is not a success code.
Session handling (login, optional 2FA unlock, logout) lives here so tools
never see it.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from core.application.interfaces import IRegistrarClient
from core.domain.errors import InwxApiError
from core.infrastructure.adapters.inwx.otp import generate_totp
from core.settings.modules.inwx_settings import InwxSettings


logger = logging.getLogger(__name__)

# DomRobot reports success with codes in the 1xxx range
SUCCESS_CODE_MIN = 1000
SUCCESS_CODE_MAX = 1999
TRANSPORT_ERROR_CODE = -1


class InwxClient(IRegistrarClient):
    """
    INWX DomRobot adapter.

    One instance holds one API session. The session cookie is kept by the
    aiohttp cookie jar, so every call after the first reuses the login.
    """

    def __init__(
        self,
        settings: InwxSettings,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        Initialize client.

        Args:
            settings: INWX settings (credentials, environment, timeout)
            session: Optional externally managed aiohttp session; when
                omitted the client creates and closes its own
        """
        self.settings = settings
        self.url = settings.endpoint
        self._session = session
        self._owns_session = session is None
        self._logged_in = False
        self._login_lock = asyncio.Lock()

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    async def __aenter__(self) -> "InwxClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.logout()

    async def call(
        self,
        method: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Call a DomRobot method, logging in first if needed.

        Args:
            method: RPC method name (e.g. "domain.check")
            params: Method parameters

        Returns:
            The `resData` payload ({} when the API sends none)

        Raises:
            InwxApiError: On API, HTTP or transport failure
        """
        await self._ensure_login()
        return await self._request(method, params or {})

    async def logout(self) -> None:
        """
        Log out and release the HTTP session.

        Idempotent. A failing logout is logged, never raised, because the
        session expires server-side anyway.
        """
        try:
            if self._logged_in:
                self._logged_in = False
                try:
                    await self._request("account.logout", {})
                    logger.info(f"INWX session closed for {self.settings.username}")
                except InwxApiError as e:
                    logger.warning(f"INWX logout failed: {e}")
        finally:
            if self._owns_session and self._session is not None:
                await self._session.close()
                self._session = None

    async def _ensure_login(self) -> None:
        async with self._login_lock:
            if self._logged_in:
                return
            await self._login()

    async def _login(self) -> None:
        """
        Authenticate with account.login and unlock 2FA when required.

        Raises:
            InwxApiError: If credentials are rejected or a TAN is required
                but no OTP secret is configured
        """
        res = await self._request(
            "account.login",
            {
                "user": self.settings.username,
                "pass": self.settings.password.get_secret_value(),
                "lang": self.settings.language,
            },
        )

        tfa = str(res.get("tfa", "0") or "0")
        if tfa != "0":
            if self.settings.otp_secret is None:
                raise InwxApiError(
                    code=TRANSPORT_ERROR_CODE,
                    message=f"account requires two-factor authentication ({tfa}) "
                            "but no otp_secret is configured",
                    method="account.unlock",
                )
            tan = generate_totp(self.settings.otp_secret.get_secret_value())
            await self._request("account.unlock", {"tan": tan})

        self._logged_in = True
        logger.info(
            f"Connected to INWX | env: {self.settings.environment} | "
            f"user: {self.settings.username}"
        )

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def _request(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Send one JSON-RPC request and unwrap the DomRobot envelope.

        Args:
            method: RPC method name
            params: Method parameters

        Returns:
            `resData` of the reply

        Raises:
            InwxApiError: On non-success result code, non-200 status,
                unreadable body or transport failure
        """
        session = self._get_session()
        payload = {"method": method, "params": params}

        try:
            async with session.post(self.url, json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise InwxApiError(
                        code=response.status,
                        message=f"HTTP {response.status}: {error_text[:200]}",
                        method=method,
                    )
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"INWX transport error on {method}: {e!r}")
            raise InwxApiError(
                code=TRANSPORT_ERROR_CODE,
                message=str(e) or e.__class__.__name__,
                method=method,
            ) from e
        except ValueError as e:
            raise InwxApiError(
                code=TRANSPORT_ERROR_CODE,
                message=f"invalid JSON reply: {e}",
                method=method,
            ) from e

        if not isinstance(body, dict):
            raise InwxApiError(
                code=TRANSPORT_ERROR_CODE,
                message="unexpected reply shape",
                method=method,
            )

        try:
            code = int(body.get("code", 0))
        except (TypeError, ValueError) as e:
            raise InwxApiError(
                code=TRANSPORT_ERROR_CODE,
                message=f"invalid result code: {body.get('code')!r}",
                method=method,
            ) from e
        if not SUCCESS_CODE_MIN <= code <= SUCCESS_CODE_MAX:
            raise InwxApiError(
                code=code,
                message=body.get("msg") or "Unknown error",
                method=method,
                reason=body.get("reason"),
            )

        return body.get("resData") or {}
