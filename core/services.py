"""HTTP client for the Central de Compras REST API.

One ``ResourceService`` per resource, mirroring the API routes:
``get_all``, ``get_by_id``, ``get_by_name``, ``create``, ``update``, ``delete``.
Failures are raised as ``ServiceError`` carrying the message the API sent back
(or a generic one when the API could not be reached).
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests
from django.conf import settings

logger = logging.getLogger("core.services")

GENERIC_ERROR_MESSAGE = "Não foi possível comunicar com a API."


class ServiceError(Exception):
	def __init__(self, message: str, status_code: Optional[int] = None) -> None:
		super().__init__(message)
		self.message = message
		self.status_code = status_code


def _extract_message(response: requests.Response) -> Optional[str]:
	try:
		payload = response.json()
	except ValueError:
		return None
	if isinstance(payload, dict):
		message = payload.get("message") or payload.get("detail")
		if isinstance(message, str) and message.strip():
			return message.strip()
	return None


class ResourceService:
	def __init__(self, resource: str, base_url: Optional[str] = None, timeout: Optional[int] = None) -> None:
		self.resource = resource.strip("/")
		self._base_url = base_url
		self._timeout = timeout

	@property
	def base_url(self) -> str:
		return (self._base_url or getattr(settings, "API_BASE_URL", "")).rstrip("/")

	@property
	def timeout(self) -> int:
		return self._timeout or getattr(settings, "API_TIMEOUT", 10)

	def _url(self, *parts: str) -> str:
		path = "/".join([self.resource, *(quote(str(part), safe="") for part in parts)])
		return f"{self.base_url}/{path}"

	def _request(self, method: str, *parts: str, json: Any = None) -> Any:
		url = self._url(*parts)
		try:
			response = requests.request(method, url, json=json, timeout=self.timeout)
		except requests.RequestException as exc:
			logger.warning("Falha de conexão com a API (%s %s): %s", method, url, exc)
			raise ServiceError(GENERIC_ERROR_MESSAGE) from exc

		if response.status_code >= 400:
			message = _extract_message(response) or GENERIC_ERROR_MESSAGE
			logger.info("API respondeu %s para %s %s: %s", response.status_code, method, url, message)
			raise ServiceError(message, response.status_code)
		if response.status_code == 204 or not response.content:
			return None
		try:
			return response.json()
		except ValueError as exc:
			raise ServiceError(GENERIC_ERROR_MESSAGE, response.status_code) from exc

	def get_all(self) -> list[dict]:
		return self._request("GET") or []

	def get_by_id(self, doc_id: str) -> dict:
		return self._request("GET", doc_id)

	def get_by_name(self, name: str) -> dict:
		return self._request("GET", "name", name)

	def create(self, data: dict) -> dict:
		return self._request("POST", json=data)

	def update(self, doc_id: str, data: dict) -> dict:
		return self._request("PUT", doc_id, json=data)

	def delete(self, doc_id: str) -> None:
		self._request("DELETE", doc_id)


supplier_service = ResourceService("supplier")
product_service = ResourceService("product")
user_service = ResourceService("user")
store_service = ResourceService("store")
order_service = ResourceService("order")
campaign_service = ResourceService("campaign")
