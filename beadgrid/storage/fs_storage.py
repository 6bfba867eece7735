import json
from pathlib import Path
from typing import Optional, Union

from ..settings import DATA_DIR


class FSStorage:
    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = Path(root or DATA_DIR)
        self.root.mkdir(parents=True, exist_ok=True)

    def save_bytes(self, path: str, data: bytes):
        p = self.root / path
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)

    def load_bytes(self, path: str) -> bytes:
        p = self.root / path
        if not p.is_file():
            raise KeyError(path)
        return p.read_bytes()

    def save_json(self, path: str, obj):
        self.save_bytes(path, json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8"))

    def load_json(self, path: str):
        return json.loads(self.load_bytes(path).decode("utf-8"))
