# -*- coding: utf-8 -*-
"""Environment and configuration diagnostics."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from eyescreen.config import ConfigError, load_config, resolve_api_key
from eyescreen.integrations.gemini_client import GeminiClient


def run_diagnostics(settings_path: str | Path | None = None, *, check_remote: bool = False) -> dict[str, Any]:
    """Collect a report about the runtime, the settings and the Gemini key."""
    report: dict[str, Any] = {
        "status": "ok",
        "system": {
            "os": os.name,
            "platform": sys.platform,
            "python_version": sys.version.split()[0],
            "cwd": os.getcwd(),
        },
        "config": {},
        "api_keys": {},
        "errors": [],
    }

    try:
        settings = load_config(settings_path)
    except (ConfigError, ValueError, OSError) as exc:
        report["status"] = "error"
        report["errors"].append(f"Settings could not be loaded: {exc}")
        return report

    analysis = settings.get("analysis", {})
    report["config"] = {
        "model": analysis.get("model"),
        "base_url": analysis.get("base_url"),
        "timeout_seconds": analysis.get("timeout_seconds"),
        "max_upload_mb": settings.get("upload", {}).get("max_size_mb"),
    }

    key = resolve_api_key(settings)
    report["api_keys"]["gemini"] = {"present": bool(key)}
    if not key:
        report["status"] = "error"
        report["errors"].append("Gemini API key missing (set GEMINI_API_KEY)")
        return report

    if check_remote:
        client = GeminiClient(
            api_key=key,
            model=str(analysis.get("model")),
            base_url=str(analysis.get("base_url")),
        )
        availability = client.check_model_availability()
        report["api_keys"]["gemini"]["models"] = availability
        if not all(entry["ok"] for entry in availability.values()):
            report["status"] = "warning"
            report["errors"].append("Configured model is not reachable with this key")
    return report
