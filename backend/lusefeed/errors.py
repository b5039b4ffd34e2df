from __future__ import annotations


class ProviderError(Exception):
    """Raised when an upstream source cannot produce usable rows."""

    status = "error"

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")


class TransportError(ProviderError):
    status = "transport_error"


class ParseError(ProviderError):
    status = "parse_error"


class ValidationError(ProviderError):
    status = "invalid"


class TableNotFoundError(ValidationError):
    status = "no_table"


class ChainExhausted(Exception):
    def __init__(self, attempted: list[str]) -> None:
        self.attempted = attempted
        names = ", ".join(attempted) or "none configured"
        super().__init__(f"All providers failed ({names})")
