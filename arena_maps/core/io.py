from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Protocol, Union

from .errors import MapNotFoundError

logger = logging.getLogger(__name__)


class MapStorage(Protocol):
    def read_map(self, name: str) -> bytes: ...

    def write_map(self, name: str, data: bytes) -> None: ...

    def list_maps(self) -> List[str]: ...


class DirectoryStorage:
    """
    One JSON file per map inside a directory.
    - Names without an extension get '.json' appended.
    - Names that already carry an extension are used as-is.
    """

    def __init__(self, root: Union[str, Path] = "maps") -> None:
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        path = self.root / name
        if path.suffix == "":
            path = path.with_suffix(".json")
        return path

    def read_map(self, name: str) -> bytes:
        path = self.path_for(name)
        if not path.is_file():
            raise MapNotFoundError(name)
        return path.read_bytes()

    def write_map(self, name: str, data: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.path_for(name)
        with open(path, "wb") as f:
            f.write(data)
        logger.info("'%s' saved to: %s", name, path)

    def list_maps(self) -> List[str]:
        """Map names (without the .json extension), sorted."""
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.iterdir() if p.is_file() and p.suffix == ".json")


class MemoryStorage:
    def __init__(self) -> None:
        self.maps: Dict[str, bytes] = {}

    def read_map(self, name: str) -> bytes:
        try:
            return self.maps[name]
        except KeyError:
            raise MapNotFoundError(name) from None

    def write_map(self, name: str, data: bytes) -> None:
        self.maps[name] = bytes(data)

    def list_maps(self) -> List[str]:
        return sorted(self.maps)
