from typing import Any
from urllib.parse import quote

import httpx

from app.core.dto.crm import CrmContact
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.errors.integration_errors import IntegrationError
from app.infrastructure.logging import get_logger


logger = get_logger(__name__)

PLACEHOLDER_API_KEY = "your-brevo-api-key-here"
DUPLICATE_ERROR_CODE = "duplicate_parameter"


class BrevoContactsClient:
    """Create-or-update contacts in Brevo by email.

    Never raises to the caller: on unrecoverable errors the contact's email is
    returned as a best-effort identifier.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.brevo.com/v3",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if self._is_valid_api_key(api_key) else None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

        if self.api_key is None:
            logger.warning("brevo_contacts_disabled", reason="api_key_not_configured")

    @classmethod
    def from_config(cls) -> "BrevoContactsClient":
        return cls(
            api_key=APP_CONFIG.BREVO_API_KEY,
            base_url=APP_CONFIG.BREVO_API_URL,
            timeout=APP_CONFIG.BREVO_TIMEOUT_SECONDS,
        )

    @staticmethod
    def _is_valid_api_key(api_key: str | None) -> bool:
        return bool(api_key) and api_key != PLACEHOLDER_API_KEY

    def is_available(self) -> bool:
        return self.api_key is not None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "api-key": self.api_key or "",
                "accept": "application/json",
            },
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _list_ids(contact: CrmContact) -> list[int] | None:
        if contact.newsletter_subscribed and contact.list_id is not None:
            return [contact.list_id]
        return None

    def _build_create_payload(self, contact: CrmContact) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "email": contact.email,
            "attributes": contact.attributes,
            "updateEnabled": True,
        }
        list_ids = self._list_ids(contact)
        if list_ids:
            payload["listIds"] = list_ids
        return payload

    def _build_update_payload(self, contact: CrmContact) -> dict[str, Any]:
        payload: dict[str, Any] = {"attributes": contact.attributes}
        list_ids = self._list_ids(contact)
        if list_ids:
            payload["listIds"] = list_ids
        return payload

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def _request(self, method: str, url: str, payload: dict[str, Any]) -> Any:
        async with self._client() as client:
            response = await client.request(method, url, json=payload)
        body = self._parse_body(response)
        if response.status_code >= 400:
            raise IntegrationError("brevo", response.status_code, body)
        return body

    @staticmethod
    def _extract_contact_id(body: Any, email: str) -> str:
        if isinstance(body, dict) and body.get("id") is not None:
            return str(body["id"])
        logger.warning("brevo_contact_id_missing", email=email)
        return email

    @staticmethod
    def _is_duplicate_error(error: Exception) -> bool:
        return (
            isinstance(error, IntegrationError)
            and error.status_code == 400
            and error.code == DUPLICATE_ERROR_CODE
        )

    def _log_list_subscription(self, contact: CrmContact) -> None:
        list_ids = self._list_ids(contact)
        if list_ids:
            logger.info(
                "brevo_contact_added_to_list",
                email=contact.email,
                list_id=list_ids[0],
                list_name=contact.list_name,
            )

    @staticmethod
    def _log_error(event: str, error: Exception, email: str) -> None:
        if isinstance(error, IntegrationError):
            logger.error(event, email=email, status_code=error.status_code, body=error.body)
        else:
            logger.error(event, email=email, error=str(error), error_type=type(error).__name__)

    async def upsert(self, contact: CrmContact) -> str | None:
        if not self.is_available():
            logger.warning("brevo_sync_skipped", reason="client_unavailable", email=contact.email)
            return contact.email

        try:
            body = await self._request("POST", "/contacts", self._build_create_payload(contact))
        except (IntegrationError, httpx.HTTPError) as exc:
            self._log_error("brevo_contact_create_failed", exc, contact.email)
            if self._is_duplicate_error(exc):
                logger.info("brevo_contact_exists", email=contact.email)
                return await self.update(contact)

            logger.warning("brevo_contact_id_fallback", email=contact.email)
            return contact.email

        logger.info("brevo_contact_created", email=contact.email)
        self._log_list_subscription(contact)
        return self._extract_contact_id(body, contact.email)

    async def update(self, contact: CrmContact) -> str:
        try:
            body = await self._request(
                "PUT",
                f"/contacts/{quote(contact.email, safe='')}",
                self._build_update_payload(contact),
            )
        except (IntegrationError, httpx.HTTPError) as exc:
            self._log_error("brevo_contact_update_failed", exc, contact.email)
            return contact.email

        logger.info("brevo_contact_updated", email=contact.email)
        self._log_list_subscription(contact)
        return self._extract_contact_id(body, contact.email)
