"""Protocol normalizer: classify and decode OTLP export requests."""

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from google.protobuf.json_format import MessageToDict
from google.protobuf.message import DecodeError, Message
from google.protobuf.unknown_fields import UnknownFieldSet
from opentelemetry.proto.collector.logs.v1.logs_service_pb2 import (
    ExportLogsServiceRequest,
)
from opentelemetry.proto.collector.metrics.v1.metrics_service_pb2 import (
    ExportMetricsServiceRequest,
)
from opentelemetry.proto.collector.trace.v1.trace_service_pb2 import (
    ExportTraceServiceRequest,
)

from ..logging_config import get_logger
from ..models import TelemetryKind

logger = get_logger(__name__)


# Top-level keys that only appear in one kind of OTLP/JSON export request.
MARKER_KEYS: tuple[tuple[str, TelemetryKind], ...] = (
    ("resourceSpans", TelemetryKind.TRACES),
    ("resourceMetrics", TelemetryKind.METRICS),
    ("resourceLogs", TelemetryKind.LOGS),
)

# OTLP/JSON renders these bytes fields as hex instead of base64.
_HEX_ID_KEYS = frozenset({"traceId", "spanId", "parentSpanId"})


@dataclass(frozen=True)
class NormalizedPayload:
    """Classification plus canonical structured form."""

    kind: TelemetryKind
    payload: Any


class INormalizer(Protocol):
    """Classify raw bytes into a TelemetryKind and a structured document."""

    def normalize(self, data: bytes) -> NormalizedPayload:
        """Never raises for content; unclassifiable input yields UNKNOWN."""
        ...


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_json(data: bytes) -> tuple[bool, Any]:
    """Return (True, value) when data is strict JSON text."""
    if not data:
        return False, None
    try:
        return True, json.loads(data, parse_constant=_reject_constant)
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        return False, None


def classify_document(document: Any) -> TelemetryKind:
    """Classify an already-parsed JSON document by its marker key."""
    if not isinstance(document, dict):
        return TelemetryKind.UNKNOWN
    for key, kind in MARKER_KEYS:
        if key in document:
            return kind
    return TelemetryKind.UNKNOWN


def _hex_ids(node: Any) -> Any:
    """Rewrite base64 identifier fields as lowercase hex, in place."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key in _HEX_ID_KEYS and isinstance(value, str):
                try:
                    node[key] = base64.b64decode(value, validate=True).hex()
                except (binascii.Error, ValueError):
                    pass
            else:
                _hex_ids(value)
    elif isinstance(node, list):
        for item in node:
            _hex_ids(item)
    return node


def _has_wire_type_clash(message: Message) -> bool:
    """True when any unknown field reuses a number the schema declares."""
    declared = message.DESCRIPTOR.fields_by_number
    for field in UnknownFieldSet(message):
        if field.field_number in declared:
            return True

    for descriptor, value in message.ListFields():
        if descriptor.message_type is None:
            continue
        children = [value] if isinstance(value, Message) else value
        for child in children:
            if _has_wire_type_clash(child):
                return True
    return False


class BinaryDecoder:
    """Decode one OTLP protobuf export request schema."""

    def __init__(
        self,
        kind: TelemetryKind,
        message_type: type[Message],
        resource_field: str,
        check: Callable[[Any], bool] | None = None,
    ):
        self.kind = kind
        self._message_type = message_type
        self._resource_field = resource_field
        self._check = check

    def decode(self, data: bytes) -> NormalizedPayload | None:
        """Return the decoded payload, or None when the bytes do not fit."""
        message = self._message_type()
        try:
            message.ParseFromString(data)
        except (DecodeError, ValueError):
            return None

        if not getattr(message, self._resource_field):
            return None

        # Unknown field numbers are skipped, newer producers add fields. A
        # declared number that landed in the unknown set had the wrong wire
        # type, so the bytes belong to another schema.
        if _has_wire_type_clash(message):
            return None
        if self._check is not None and not self._check(message):
            return None

        document = MessageToDict(message, use_integers_for_enums=True)
        return NormalizedPayload(kind=self.kind, payload=_hex_ids(document))


def _has_valid_span_ids(request: ExportTraceServiceRequest) -> bool:
    """Trace ids are 16 bytes and span ids 8 bytes when present."""
    for resource_spans in request.resource_spans:
        for scope_spans in resource_spans.scope_spans:
            for span in scope_spans.spans:
                if len(span.trace_id) not in (0, 16) or len(span.span_id) not in (0, 8):
                    return False
    return True


DEFAULT_DECODERS: tuple[BinaryDecoder, ...] = (
    BinaryDecoder(
        TelemetryKind.TRACES,
        ExportTraceServiceRequest,
        "resource_spans",
        check=_has_valid_span_ids,
    ),
    BinaryDecoder(TelemetryKind.METRICS, ExportMetricsServiceRequest, "resource_metrics"),
    BinaryDecoder(TelemetryKind.LOGS, ExportLogsServiceRequest, "resource_logs"),
)


class ProtocolNormalizer:
    """Detect JSON or protobuf encoding and classify the export request."""

    def __init__(self, decoders: tuple[BinaryDecoder, ...] = DEFAULT_DECODERS):
        self._decoders = decoders

    def normalize(self, data: bytes) -> NormalizedPayload:
        """Classify bytes as traces, metrics, logs or unknown."""
        is_json, document = _parse_json(data)
        if is_json:
            return NormalizedPayload(kind=classify_document(document), payload=document)

        for decoder in self._decoders:
            result = decoder.decode(data)
            if result is not None:
                return result
            logger.debug("Payload is not a %s export request", decoder.kind.value)

        return NormalizedPayload(
            kind=TelemetryKind.UNKNOWN,
            payload=data.decode("utf-8", errors="replace"),
        )
