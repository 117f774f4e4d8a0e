"""Logging-Setup mit Request-ID in jeder Zeile."""

from __future__ import annotations

import logging
from contextvars import ContextVar

from customer_lookup.settings import settings

# Request-ID des gerade bearbeiteten Aufrufs ("-" außerhalb von Requests).
request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Hängt die aktuelle Request-ID an jeden Log-Record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.request_id = request_id_ctx_var.get()
        return True


def configure_logging() -> None:
    """Setzt ein einfaches Logging-Format für die gesamte Anwendung."""
    # Unter Azure Functions hat der Host bereits Handler am Root-Logger
    # registriert; ``basicConfig`` ändert dann nichts.
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s",
    )
    # Filter an den Handlern, damit auch Records aus Modul-Loggern die
    # Request-ID tragen.
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
