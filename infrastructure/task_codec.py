"""Wire format for task records stored in the Tasks bucket.

Keys are the task id as a big-endian unsigned 64-bit integer so that byte
order equals numeric order. Values are compact JSON objects with unset
timestamps omitted.
"""

import json
import struct

from core import Task

_KEY = struct.Struct(">Q")


def encode_key(task_id: int) -> bytes:
    return _KEY.pack(task_id)


def decode_key(key: bytes) -> int:
    if len(key) != _KEY.size:
        raise ValueError(f"task key must be {_KEY.size} bytes, got {len(key)}")
    return _KEY.unpack(key)[0]


def encode_task(task: Task) -> bytes:
    return json.dumps(task.to_dict(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def decode_task(raw: bytes) -> Task:
    """Decode a stored value; raises ValueError/TypeError/KeyError when malformed."""
    data = json.loads(raw.decode("utf-8"))
    return Task.from_dict(data)


__all__ = ["encode_key", "decode_key", "encode_task", "decode_task"]
