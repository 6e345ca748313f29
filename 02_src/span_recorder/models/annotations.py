"""Annotation payloads carried by records.

Each class exposes ``annotation_type``, the kind string the recorder
dispatches on.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from .endpoint import InetAddress


@dataclass(frozen=True)
class ClientSend:
    annotation_type: ClassVar[str] = "ClientSend"


@dataclass(frozen=True)
class ClientRecv:
    annotation_type: ClassVar[str] = "ClientRecv"


@dataclass(frozen=True)
class ServerSend:
    annotation_type: ClassVar[str] = "ServerSend"


@dataclass(frozen=True)
class ServerRecv:
    annotation_type: ClassVar[str] = "ServerRecv"


@dataclass(frozen=True)
class ProducerStart:
    annotation_type: ClassVar[str] = "ProducerStart"


@dataclass(frozen=True)
class ProducerStop:
    annotation_type: ClassVar[str] = "ProducerStop"


@dataclass(frozen=True)
class ConsumerStart:
    annotation_type: ClassVar[str] = "ConsumerStart"


@dataclass(frozen=True)
class ConsumerStop:
    annotation_type: ClassVar[str] = "ConsumerStop"


@dataclass(frozen=True)
class MessageAddr:
    annotation_type: ClassVar[str] = "MessageAddr"

    service_name: str | None = None
    host: InetAddress | None = None
    port: int | None = None


@dataclass(frozen=True)
class LocalOperationStart:
    annotation_type: ClassVar[str] = "LocalOperationStart"

    name: str


@dataclass(frozen=True)
class LocalOperationStop:
    annotation_type: ClassVar[str] = "LocalOperationStop"


@dataclass(frozen=True)
class Message:
    annotation_type: ClassVar[str] = "Message"

    message: str


@dataclass(frozen=True)
class Rpc:
    annotation_type: ClassVar[str] = "Rpc"

    name: str


@dataclass(frozen=True)
class ServiceName:
    annotation_type: ClassVar[str] = "ServiceName"

    service_name: str


@dataclass(frozen=True)
class BinaryAnnotation:
    annotation_type: ClassVar[str] = "BinaryAnnotation"

    key: str
    value: Any


@dataclass(frozen=True)
class LocalAddr:
    annotation_type: ClassVar[str] = "LocalAddr"

    host: InetAddress | None = None
    port: int | None = None


@dataclass(frozen=True)
class ServerAddr:
    annotation_type: ClassVar[str] = "ServerAddr"

    service_name: str | None = None
    host: InetAddress | None = None
    port: int | None = None


@dataclass(frozen=True)
class UnrecognizedAnnotation:
    """Annotation of a kind this library does not know. Recorded as a no-op."""

    annotation_type: str


Annotation = (
    ClientSend
    | ClientRecv
    | ServerSend
    | ServerRecv
    | ProducerStart
    | ProducerStop
    | ConsumerStart
    | ConsumerStop
    | MessageAddr
    | LocalOperationStart
    | LocalOperationStop
    | Message
    | Rpc
    | ServiceName
    | BinaryAnnotation
    | LocalAddr
    | ServerAddr
    | UnrecognizedAnnotation
)

ANNOTATION_TYPES: dict[str, type] = {
    cls.annotation_type: cls
    for cls in (
        ClientSend,
        ClientRecv,
        ServerSend,
        ServerRecv,
        ProducerStart,
        ProducerStop,
        ConsumerStart,
        ConsumerStop,
        MessageAddr,
        LocalOperationStart,
        LocalOperationStop,
        Message,
        Rpc,
        ServiceName,
        BinaryAnnotation,
        LocalAddr,
        ServerAddr,
    )
}

# camelCase wire names -> dataclass field names
_FIELD_ALIASES = {"serviceName": "service_name"}


def annotation_from_dict(data: dict[str, Any]) -> Annotation:
    """Build an annotation from a mapping with an ``annotationType`` key.

    Unknown kinds become UnrecognizedAnnotation. Missing required fields
    raise ValueError.
    """
    annotation_type = data.get("annotationType") or data.get("annotation_type")
    if not annotation_type:
        raise ValueError("annotationType is required")
    if not isinstance(annotation_type, str):
        raise ValueError(f"annotationType must be a string, got {annotation_type!r}")

    cls = ANNOTATION_TYPES.get(annotation_type)
    if cls is None:
        return UnrecognizedAnnotation(annotation_type=annotation_type)

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key in ("annotationType", "annotation_type"):
            continue
        kwargs[_FIELD_ALIASES.get(key, key)] = value

    allowed = cls.__dataclass_fields__.keys()
    kwargs = {k: v for k, v in kwargs.items() if k in allowed}
    host = kwargs.get("host")
    if isinstance(host, str):
        kwargs["host"] = InetAddress(host)
    elif host is not None and not isinstance(host, InetAddress):
        raise ValueError(f"host must be an address string, got {host!r}")

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ValueError(f"Invalid {annotation_type} annotation: {e}") from e
