"""
Utility functions for kvbench.

Classes:
    KVBenchJsonEncoder: JSON encoder for kvbench result types.

Functions:
    write_json: Dump a document to a file with the kvbench encoder.
"""

import dataclasses
import enum
import json
import os

from typing import Any


class KVBenchJsonEncoder(json.JSONEncoder):
    """Custom JSON encoder for kvbench types.

    Handles serialization of special types that the standard JSON encoder
    cannot process:
    - Sets are converted to lists
    - Enums are converted to their values
    - Dataclasses (PhaseResult, RunConfig) use their ``as_dict`` or fields
    - Logger objects are converted to placeholder strings

    Example:
        >>> json.dumps({'phase': PHASE.set, 'keys': {'a'}}, cls=KVBenchJsonEncoder)
        '{"phase": "set", "keys": ["a"]}'
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, set):
            return sorted(obj)
        elif isinstance(obj, enum.Enum):
            return obj.value
        elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            if hasattr(obj, 'as_dict'):
                return obj.as_dict()
            return dataclasses.asdict(obj)
        elif "Logger" in str(type(obj)):
            return "Logger object"
        return super().default(obj)


def write_json(path: str, document: Any) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w') as fd:
        json.dump(document, fd, indent=2, cls=KVBenchJsonEncoder)
