"""Fehlerarten des Kunden-Proxys."""


class MissingCustomerIdError(ValueError):
    """Weder Query-Parameter noch Body enthalten eine Kunden-ID."""

    def __init__(self) -> None:
        super().__init__("missing id")


class UpstreamError(RuntimeError):
    """Token-Abruf oder Aufruf von Dynamics 365 ist fehlgeschlagen."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UpstreamError":
        # Manche Netzwerkfehler haben keine Nachricht; dann den Typ melden.
        return cls(str(exc) or exc.__class__.__name__)
