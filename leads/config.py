"""
Runtime configuration, read from the environment (and .env) once at import.

    LEADS_PROVIDER           gemini | openai
    LEADS_MODEL              model identifier passed to the provider
    LEADS_BATCH_SIZE         profiles requested per prompt variation
    LEADS_API_URL            backend base URL used by the Streamlit UI
    LEADS_FALLBACK_WHATSAPP  number used when a lead has no WhatsApp link

API keys are not read here: google-genai picks up GEMINI_API_KEY /
GOOGLE_API_KEY and openai picks up OPENAI_API_KEY on their own.
"""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}

PROVIDER          = os.getenv("LEADS_PROVIDER", "gemini").strip().lower()
MODEL             = os.getenv("LEADS_MODEL") or DEFAULT_MODELS.get(PROVIDER, "")
BATCH_SIZE        = int(os.getenv("LEADS_BATCH_SIZE", "12"))
API_URL           = os.getenv("LEADS_API_URL", "http://localhost:8000").rstrip("/")
FALLBACK_WHATSAPP = os.getenv("LEADS_FALLBACK_WHATSAPP", "5511999999999")

SUGGESTED_KEYWORDS = [
    "Tatuador em São Paulo",
    "Nutricionista esportivo",
    "Advogado trabalhista",
    "Personal trainer",
    "Confeitaria artesanal",
    "Arquiteto de interiores",
]
