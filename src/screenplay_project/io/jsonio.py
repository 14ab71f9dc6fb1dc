import json
import os
from typing import Any, Dict


def _atomic_write(path: str, text: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(text)
    os.replace(tmp, path)


def safe_write_json(path: str, obj: Dict[str, Any]) -> None:
    _atomic_write(path, json.dumps(obj, indent=2, ensure_ascii=False))


def safe_write_text(path: str, text: str) -> None:
    _atomic_write(path, text)
