from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
import logging

import httpx
from pydantic import ValidationError
from xrpl.asyncio.clients import AsyncJsonRpcClient
from xrpl.asyncio.clients.exceptions import XRPLRequestFailureException
from xrpl.models.exceptions import XRPLModelException
from xrpl.models.requests import AccountInfo as AccountInfoRequest
from xrpl.utils import XRPRangeException, drops_to_xrp

from .config import Settings
from .models import AccountInfo


logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter an XRP address"
INVALID_RESPONSE_MESSAGE = "Invalid address or network error"
FETCH_FAILED_MESSAGE = "Failed to fetch data"

MOCK_BALANCE_XRP = "25000.5"


class LookupFailed(RuntimeError):
    """Base for every lookup failure; ``str(exc)`` is the message shown to the user."""


class EmptyInputError(LookupFailed):
    def __init__(self) -> None:
        super().__init__(EMPTY_INPUT_MESSAGE)


class InvalidResponseError(LookupFailed):
    def __init__(self, status_code: Optional[int] = None) -> None:
        super().__init__(INVALID_RESPONSE_MESSAGE)
        self.status_code = status_code


class NetworkError(LookupFailed):
    def __init__(self, message: str = "") -> None:
        super().__init__(message or FETCH_FAILED_MESSAGE)


class XrpscanService:
    """Fetches account info for one ledger address per call.

    ``TRACKER_MODE`` picks the backend: the XRPSCAN explorer API, an XRPL
    JSON-RPC node, or an offline mock.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        ledger_client: Optional[AsyncJsonRpcClient] = None,
    ) -> None:
        self.settings = settings
        self.mode = settings.tracker_mode
        self._client = client
        self._owns_client = client is None
        self._ledger_client = ledger_client
        if self.mode == "ledger" and self._ledger_client is None:
            self._ledger_client = AsyncJsonRpcClient(settings.xrpl_json_rpc_url)

    def account_url(self, address: str) -> str:
        return f"{self.settings.xrpscan_api_url}/account/{address}"

    async def fetch_account(self, address: str) -> AccountInfo:
        logger.debug("Looking up account %s (mode=%s)", address, self.mode)
        if self.mode == "mock":
            return self._mock_fetch_account(address)
        if self.mode == "ledger":
            return await self._ledger_fetch_account(address)
        return await self._xrpscan_fetch_account(address)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: Dict[str, Any] = {"headers": {"Accept": "application/json"}}
            if self.settings.request_timeout_seconds is not None:
                kwargs["timeout"] = self.settings.request_timeout_seconds
            self._client = httpx.AsyncClient(**kwargs)
            self._owns_client = True
        return self._client

    async def _xrpscan_fetch_account(self, address: str) -> AccountInfo:
        url = self.account_url(address)
        try:
            response = await self._http_client().get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Transport failure for %s: %r", url, exc)
            raise NetworkError(str(exc)) from exc

        if not response.is_success:
            logger.warning("Explorer returned HTTP %s for %s", response.status_code, url)
            raise InvalidResponseError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Explorer returned a non-JSON body for %s", url)
            raise InvalidResponseError(response.status_code) from exc
        return self._parse_payload(payload, response.status_code)

    async def _ledger_fetch_account(self, address: str) -> AccountInfo:
        try:
            request = AccountInfoRequest(account=address, ledger_index="validated")
        except XRPLModelException as exc:
            raise InvalidResponseError() from exc
        try:
            response = await self._ledger_client.request(request)
        except httpx.HTTPError as exc:
            logger.warning("Ledger node unreachable for %s: %r", address, exc)
            raise NetworkError(str(exc)) from exc
        except XRPLRequestFailureException as exc:
            logger.warning("Ledger node sent an unusable reply for %s: %s", address, exc)
            raise InvalidResponseError() from exc

        if not response.is_successful():
            logger.warning(
                "Ledger node rejected account_info for %s: %s",
                address,
                response.result.get("error"),
            )
            raise InvalidResponseError()

        account_data = response.result.get("account_data")
        if not isinstance(account_data, dict):
            raise InvalidResponseError()
        payload: Dict[str, Any] = {"account": account_data.get("Account", address)}
        if account_data.get("Balance") is not None:
            try:
                payload["xrpBalance"] = _format_xrp(drops_to_xrp(str(account_data["Balance"])))
            except (XRPRangeException, InvalidOperation) as exc:
                raise InvalidResponseError() from exc
        if account_data.get("Sequence") is not None:
            payload["sequence"] = account_data["Sequence"]
        return self._parse_payload(payload)

    def _mock_fetch_account(self, address: str) -> AccountInfo:
        return AccountInfo(account=address, xrpBalance=MOCK_BALANCE_XRP, sequence=1)

    def _parse_payload(self, payload: Any, status_code: Optional[int] = None) -> AccountInfo:
        if not isinstance(payload, dict):
            raise InvalidResponseError(status_code)
        try:
            return AccountInfo.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Unexpected account payload: %s", exc)
            raise InvalidResponseError(status_code) from exc


def _format_xrp(amount: Decimal) -> str:
    return format(amount.normalize(), "f")
