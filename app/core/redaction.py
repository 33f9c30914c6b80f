from typing import Any, Dict, Iterable, Mapping

SECRET_FIELDS = ("password",)


def exclude(record: Mapping[str, Any], keys: Iterable[str] = SECRET_FIELDS) -> Dict[str, Any]:
    """Return a copy of ``record`` without ``keys``. Missing keys are ignored."""
    dropped = set(keys)
    return {key: value for key, value in record.items() if key not in dropped}
