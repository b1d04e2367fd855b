# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "eyescreen"
APP_VERSION = "0.1.0"

DEFAULT_SETTINGS_FILE = "settings.json"
API_KEY_PLACEHOLDER = "USE_ENV_FILE"

SUPPORTED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")
PIL_FORMAT_TO_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
}

LOADING_MESSAGES = (
    "Initializing AI model...",
    "Calibrating AI sensors...",
    "Analyzing image pixels...",
    "Examining retinal patterns...",
    "Cross-referencing medical data...",
    "Finalizing analysis report...",
)

GENERIC_FAILURE_MESSAGE = (
    "Failed to analyze the image. The AI model may be overloaded or the image "
    "could not be processed. Please try again."
)

DISCLAIMER = (
    "This AI-powered tool is for informational purposes only and is not a substitute "
    "for professional medical advice, diagnosis, or treatment. Always seek the advice "
    "of your physician or other qualified health provider with any questions you may "
    "have regarding a medical condition."
)
