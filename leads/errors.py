"""
User-facing errors raised by the search orchestration, plus the text
matching used to turn arbitrary failures into something a user can read.
"""

NO_PROFILES_MESSAGE  = "Nenhum perfil encontrado. Tente termos mais abrangentes."
RATE_LIMITED_MESSAGE = "Muitas requisições simultâneas. Aguarde um momento e tente novamente."
HIGH_TRAFFIC_MESSAGE = "Alto tráfego na IA. Aguarde alguns segundos e tente novamente."
GENERIC_MESSAGE      = "Não conseguimos encontrar perfis no momento."

_RATE_LIMIT_MARKERS = ("429", "Quota", "Muitas requisições")


class LeadSearchError(Exception):
    message = GENERIC_MESSAGE

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class NoProfilesFoundError(LeadSearchError):
    message = NO_PROFILES_MESSAGE


class RateLimitedError(LeadSearchError):
    message = RATE_LIMITED_MESSAGE


def is_rate_limit_message(text: str) -> bool:
    return any(marker in text for marker in _RATE_LIMIT_MARKERS)


def friendly_error_message(text: str) -> str:
    """Map raw error text to the message shown in the UI."""
    if is_rate_limit_message(text):
        return HIGH_TRAFFIC_MESSAGE
    if "Nenhum perfil" in text:
        return text
    return GENERIC_MESSAGE
