"""Inspection backend boundary: protocol, record decoding and the frida agent."""

from vz_backend.protocol import InspectionBackend, RawRecord, RecordKind
from vz_backend.records import decode_records
from vz_backend.script import ScriptBackend

__all__ = ["InspectionBackend", "RawRecord", "RecordKind", "ScriptBackend", "decode_records"]
