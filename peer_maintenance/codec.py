"""
Wire encodings for metrics snapshots and health states.

Two families are provided:

- BER (ASN.1 Basic Encoding Rules, via pyasn1) is the compact binary form
  consumed by monitoring collectors.
- JSON and YAML are the human-readable forms for administrators.

ASN.1 module::

    Snapshot ::= SEQUENCE {
        cpu     Cpu,
        disk    Disk,
        memory  Memory
    }
    Cpu ::= SEQUENCE { frequency UTF8String, stats UTF8String, time UTF8String }
    Disk ::= SEQUENCE { blockStorageSize INTEGER (0..MAX), blockStoragePath UTF8String }
    Memory ::= SEQUENCE { memory UTF8String, swap UTF8String }
    Health ::= ENUMERATED { healthy(0), ready(1) }

New metrics are only ever appended, so existing field names and positions
stay stable between versions.
"""

import json
import logging
from typing import Any, Union

import yaml
from pyasn1.codec.ber import decoder, encoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import char, namedtype, namedval, univ

from .core.errors import CodecError
from .core.models import HealthState
from .system import MetricsSnapshot


logger = logging.getLogger(__name__)

FORMATS = ("json", "yaml", "ber")


# ── ASN.1 schema ────────────────────────────────────────────

class Health(univ.Enumerated):
    namedValues = namedval.NamedValues(("healthy", 0), ("ready", 1))


class Cpu(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("frequency", char.UTF8String()),
        namedtype.NamedType("stats", char.UTF8String()),
        namedtype.NamedType("time", char.UTF8String()),
    )


class Disk(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("blockStorageSize", univ.Integer()),
        namedtype.NamedType("blockStoragePath", char.UTF8String()),
    )


class Memory(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("memory", char.UTF8String()),
        namedtype.NamedType("swap", char.UTF8String()),
    )


class Snapshot(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("cpu", Cpu()),
        namedtype.NamedType("disk", Disk()),
        namedtype.NamedType("memory", Memory()),
    )


# Enumerated values follow declaration order of HealthState
_HEALTH_STATES = list(HealthState)


def _ber_decode(data: bytes, spec):
    try:
        record, rest = decoder.decode(bytes(data), asn1Spec=spec)
    except PyAsn1Error as e:
        raise CodecError(f"Malformed BER record: {e}") from e
    if rest:
        raise CodecError(f"{len(rest)} trailing bytes after BER record")
    return record


# ── BER ─────────────────────────────────────────────────────

def snapshot_to_ber(snapshot: MetricsSnapshot) -> bytes:
    """Encode a snapshot as a BER ``Snapshot`` record."""
    record = Snapshot()
    record["cpu"]["frequency"] = snapshot.cpu.frequency
    record["cpu"]["stats"] = snapshot.cpu.stats
    record["cpu"]["time"] = snapshot.cpu.time
    record["disk"]["blockStorageSize"] = snapshot.disk.block_storage_size
    record["disk"]["blockStoragePath"] = snapshot.disk.block_storage_path
    record["memory"]["memory"] = snapshot.memory.memory
    record["memory"]["swap"] = snapshot.memory.swap
    return encoder.encode(record)


def snapshot_from_ber(data: bytes) -> MetricsSnapshot:
    """Decode a BER ``Snapshot`` record."""
    record = _ber_decode(data, Snapshot())
    try:
        return MetricsSnapshot.from_dict({
            "cpu": {
                "frequency": str(record["cpu"]["frequency"]),
                "stats": str(record["cpu"]["stats"]),
                "time": str(record["cpu"]["time"]),
            },
            "disk": {
                "block_storage_size": int(record["disk"]["blockStorageSize"]),
                "block_storage_path": str(record["disk"]["blockStoragePath"]),
            },
            "memory": {
                "memory": str(record["memory"]["memory"]),
                "swap": str(record["memory"]["swap"]),
            },
        })
    except (PyAsn1Error, ValueError) as e:
        raise CodecError(f"Invalid snapshot record: {e}") from e


def health_to_ber(state: HealthState) -> bytes:
    """Encode a health state as a BER ``Health`` value."""
    return encoder.encode(Health(_HEALTH_STATES.index(state)))


def health_from_ber(data: bytes) -> HealthState:
    """Decode a BER ``Health`` value."""
    value = _ber_decode(data, Health())
    try:
        index = int(value)
    except PyAsn1Error as e:
        raise CodecError(f"Invalid health record: {e}") from e
    if not 0 <= index < len(_HEALTH_STATES):
        raise CodecError(f"Unknown health state in BER record: {index}")
    return _HEALTH_STATES[index]


# ── JSON / YAML ─────────────────────────────────────────────

def _snapshot_from_data(data: Any) -> MetricsSnapshot:
    if not isinstance(data, dict):
        raise CodecError(f"Expected a mapping, got {type(data).__name__}")
    try:
        return MetricsSnapshot.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise CodecError(f"Invalid snapshot: {e!r}") from e


def _health_from_data(data: Any) -> HealthState:
    if not isinstance(data, str):
        raise CodecError(f"Expected a health state name, got {type(data).__name__}")
    try:
        return HealthState.from_name(data)
    except ValueError as e:
        raise CodecError(str(e)) from e


def snapshot_to_json(snapshot: MetricsSnapshot) -> str:
    return json.dumps(snapshot.to_dict(), indent=2)


def snapshot_from_json(text: str) -> MetricsSnapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CodecError(f"Malformed JSON: {e}") from e
    return _snapshot_from_data(data)


def health_to_json(state: HealthState) -> str:
    return json.dumps(state.value)


def health_from_json(text: str) -> HealthState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CodecError(f"Malformed JSON: {e}") from e
    return _health_from_data(data)


def snapshot_to_yaml(snapshot: MetricsSnapshot) -> str:
    return yaml.safe_dump(snapshot.to_dict(), default_flow_style=False, sort_keys=False)


def snapshot_from_yaml(text: str) -> MetricsSnapshot:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CodecError(f"Malformed YAML: {e}") from e
    return _snapshot_from_data(data)


def health_to_yaml(state: HealthState) -> str:
    return yaml.safe_dump(state.value)


def health_from_yaml(text: str) -> HealthState:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CodecError(f"Malformed YAML: {e}") from e
    return _health_from_data(data)


def encode(value: Union[MetricsSnapshot, HealthState], fmt: str = "json") -> Union[str, bytes]:
    """Encode a snapshot or health state in one of ``FORMATS``."""
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format: {fmt}")

    if isinstance(value, HealthState):
        encoders = {"json": health_to_json, "yaml": health_to_yaml, "ber": health_to_ber}
    elif isinstance(value, MetricsSnapshot):
        encoders = {"json": snapshot_to_json, "yaml": snapshot_to_yaml, "ber": snapshot_to_ber}
    else:
        raise TypeError(f"Cannot encode {type(value).__name__}")

    return encoders[fmt](value)
