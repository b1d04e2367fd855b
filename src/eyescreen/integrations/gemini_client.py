# -*- coding: utf-8 -*-
"""Gemini generateContent wrapper over plain HTTPS."""

from __future__ import annotations

import http.client
import json
import logging
from typing import Any
from urllib import error, parse, request

from eyescreen.errors import ConfigurationError, MalformedResponseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiClient:
    """Thin wrapper for Gemini key checks and multimodal generation."""

    def __init__(
        self,
        api_key: str = "",
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = float(timeout)

    def validate_key(
        self,
        api_key: str | None = None,
        *,
        check_remote: bool = False,
        timeout: float = 3.0,
    ) -> bool:
        """Check that a key is present and optionally that the API accepts it."""
        key = (api_key if api_key is not None else self.api_key).strip()
        if not key:
            return False
        if not check_remote:
            return True
        try:
            status, _ = self._request_json("GET", f"{self.base_url}/models", api_key=key, timeout=timeout)
        except TransportError:
            return False
        return status == 200

    def check_model_availability(
        self,
        *,
        api_key: str | None = None,
        model_ids: list[str] | None = None,
        timeout: float = 3.0,
    ) -> dict[str, dict[str, Any]]:
        """Look up each model ID and report whether the key can see it."""
        key = (api_key if api_key is not None else self.api_key).strip()
        ids = model_ids or [self.model]
        results: dict[str, dict[str, Any]] = {}
        for model_id in ids:
            quoted = parse.quote(model_id, safe="")
            try:
                status, payload = self._request_json(
                    "GET", f"{self.base_url}/models/{quoted}", api_key=key, timeout=timeout
                )
            except TransportError as exc:
                results[model_id] = {"ok": False, "status": exc.status, "name": None}
                continue
            results[model_id] = {
                "ok": status == 200,
                "status": status,
                "name": payload.get("name") if isinstance(payload, dict) else None,
            }
        return results

    def generate_content(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST one generateContent request and return the decoded reply.

        Raises TransportError for network problems and non-200 replies.
        """
        if not self.validate_key():
            raise ConfigurationError("Gemini API key is missing. Set GEMINI_API_KEY.")

        url = f"{self.base_url}/models/{parse.quote(self.model, safe='')}:generateContent"
        logger.info("Sending generateContent request (model=%s)", self.model)
        status, response_payload = self._request_json(
            "POST", url, api_key=self.api_key, timeout=self.timeout, data=payload
        )
        if status != 200:
            raise TransportError(
                f"Gemini request failed (status={status}): {self._error_message(response_payload)}",
                status=status,
            )
        if response_payload is None:
            raise MalformedResponseError("Gemini reply body is not JSON")
        logger.info("Received generateContent reply (status=%s)", status)
        return response_payload

    @staticmethod
    def extract_text(response_payload: dict[str, Any]) -> str:
        """Join the text parts of the first candidate."""
        candidates = response_payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            feedback = response_payload.get("promptFeedback", {})
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            detail = f" (blockReason={reason})" if reason else ""
            raise MalformedResponseError(f"Gemini reply has no candidates{detail}")

        first = candidates[0] if isinstance(candidates[0], dict) else {}
        content = first.get("content", {})
        parts = content.get("parts", []) if isinstance(content, dict) else []
        text_parts = [
            str(part["text"]) for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        text = "".join(text_parts).strip()
        if not text:
            reason = first.get("finishReason")
            raise MalformedResponseError(f"Gemini candidate has no text (finishReason={reason})")
        return text

    @staticmethod
    def _error_message(payload: dict[str, Any] | None) -> str:
        if isinstance(payload, dict):
            details = payload.get("error")
            if isinstance(details, dict) and details.get("message"):
                return str(details["message"])
        return "no error details"

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        api_key: str,
        timeout: float,
        data: dict[str, Any] | None = None,
    ) -> tuple[int, dict[str, Any] | None]:
        """Return ``(status, payload)``; payload is None when the body is not a JSON object."""
        body = None
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["x-goog-api-key"] = api_key
        if data is not None:
            body = json.dumps(data).encode("utf-8")
        req = request.Request(url, headers=headers, data=body, method=method)
        try:
            with request.urlopen(req, timeout=timeout) as response:
                status = int(getattr(response, "status", 200))
                raw_body = response.read().decode("utf-8", errors="replace")
        except error.HTTPError as exc:
            raw_body = exc.read().decode("utf-8", errors="replace")
            return int(exc.code), self._decode(raw_body)
        except (error.URLError, http.client.HTTPException, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise TransportError(f"Gemini request could not be sent: {reason}") from exc
        return status, self._decode(raw_body)

    @staticmethod
    def _decode(raw_body: str) -> dict[str, Any] | None:
        try:
            payload = json.loads(raw_body) if raw_body else {}
        except json.JSONDecodeError:
            return None
        return payload if isinstance(payload, dict) else None
