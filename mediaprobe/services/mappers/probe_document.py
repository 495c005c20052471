# mediaprobe/services/mappers/probe_document.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from mediaprobe.domain.entities.probe import ProbeFormat, ProbeResult, ProbeStream
from mediaprobe.domain.errors import ProbeExecutionError
from mediaprobe.services.schemas.probe import FFprobeDocument, FFprobeFormat, FFprobeStream


def _format_to_domain(f: Optional[FFprobeFormat]) -> ProbeFormat:
    if f is None:
        return ProbeFormat()
    return ProbeFormat(
        bit_rate=f.bit_rate,
        duration=f.duration,
        format_name=f.format_name,
        tags=f.tags,
    )


def _stream_to_domain(s: FFprobeStream) -> ProbeStream:
    return ProbeStream(
        index=s.index,
        codec_type=s.codec_type,
        codec_name=s.codec_name,
        channels=s.channels,
        sample_rate=s.sample_rate,
        bit_rate=s.bit_rate,
        duration=s.duration,
        tags=s.tags,
    )


def to_domain_probe_result(data: Dict[str, Any]) -> Optional[ProbeResult]:
    """
    Validate a raw ffprobe document and convert it to a ProbeResult.
    Returns None when the document carries neither format nor streams.
    Tags are left as plain dicts; normalization is the pipeline's job.
    """
    try:
        doc = FFprobeDocument.model_validate(data or {})
    except ValidationError as e:
        raise ProbeExecutionError("ffprobe JSON does not match the expected document shape", stderr=str(e)) from e

    if doc.is_empty:
        return None

    return ProbeResult(
        format=_format_to_domain(doc.format),
        streams=tuple(_stream_to_domain(s) for s in doc.streams),
    )
