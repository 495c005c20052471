from mediaprobe.services.schemas.probe import (
    FFprobeDocument,
    FFprobeFormat,
    FFprobeStream,
)

__all__ = [
    "FFprobeDocument",
    "FFprobeFormat",
    "FFprobeStream",
]
