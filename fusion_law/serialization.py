"""
Fusion Law Serialization

Converts fusion laws to and from plain records, and those records to and
from JSON:

    {
        "class": "Fusion law",
        "name": ..., "directory": ...,        (optional)
        "set": [labels],
        "law": [[[labels in the product] ...] ...],
        "evaluation": [values]                (optional)
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from .config import RECORD_CLASS
from .errors import FusionLawError, SerializationError
from .law import FusionLaw


def to_dict(law: FusionLaw) -> Dict[str, Any]:
    """Record describing law."""
    record: Dict[str, Any] = {"class": RECORD_CLASS}
    if law.name is not None:
        record["name"] = law.name
        record["directory"] = law.directory
    labels = list(law.labels)
    record["set"] = labels
    record["law"] = [
        [[labels[k] for k in sorted(cell)] for cell in row]
        for row in law.table.rows()
    ]
    if law.has_evaluation():
        record["evaluation"] = list(law.evaluation_values)
    return record


def _freeze(value: Any) -> Any:
    # JSON turns tuple labels into lists
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def from_dict(record: Dict[str, Any]) -> FusionLaw:
    """Fusion law described by record."""
    if not isinstance(record, dict) or record.get("class") != RECORD_CLASS:
        raise SerializationError("The record given does not have a valid fusion law")
    try:
        labels = [_freeze(x) for x in record["set"]]
        table = [[[_freeze(x) for x in cell] for cell in row] for row in record["law"]]
        evaluation = None
        if "evaluation" in record:
            values = record["evaluation"]
            if len(values) != len(labels):
                raise SerializationError(
                    f"Evaluation has {len(values)} values for {len(labels)} elements"
                )
            evaluation = dict(zip(labels, values))
    except KeyError as exc:
        raise SerializationError(f"Fusion law record is missing {exc.args[0]!r}") from exc
    except TypeError as exc:
        raise SerializationError(f"Malformed fusion law record: {exc}") from exc

    try:
        return FusionLaw(labels, table, evaluation,
                         name=record.get("name"), directory=record.get("directory"))
    except (FusionLawError, TypeError) as exc:
        raise SerializationError(f"Invalid fusion law record: {exc}") from exc


def dumps(law: FusionLaw, **kwargs) -> str:
    try:
        return json.dumps(to_dict(law), **kwargs)
    except TypeError as exc:
        raise SerializationError(f"Fusion law is not JSON serialisable: {exc}") from exc


def loads(text: str) -> FusionLaw:
    try:
        record = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Not a JSON document: {exc}") from exc
    return from_dict(record)


def save(law: FusionLaw, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(dumps(law, indent=2))
    return path


def load(path: Union[str, Path]) -> FusionLaw:
    return loads(Path(path).read_text())
