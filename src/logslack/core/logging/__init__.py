from .redact import redact_string, redact_url
from .setup import DIAGNOSTICS_LOGGER_NAME, configure_diagnostics, is_diagnostics_record

__all__ = [
    "DIAGNOSTICS_LOGGER_NAME",
    "configure_diagnostics",
    "is_diagnostics_record",
    "redact_string",
    "redact_url",
]
