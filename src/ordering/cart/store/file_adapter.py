"""File-backed cart store: one JSON document per key inside a directory."""

import os
import re
import tempfile
from pathlib import Path

from shared.config import get_settings
from shared.exceptions import CollaboratorError

from ordering.cart.store.port import CartStore

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


class FileCartStore(CartStore):
    """Defaults to the ``CART_STORAGE_DIR`` setting when no directory is given."""

    def __init__(self, directory: str | os.PathLike | None = None) -> None:
        self.directory = Path(directory if directory is not None else get_settings().cart_storage_dir)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE.sub('_', key)}.json"

    def load(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CollaboratorError("cart-store", f"Cannot read {path}: {exc}") from exc

    def save(self, key: str, payload: str) -> None:
        path = self._path_for(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write beside the target and swap, so readers never see a partial file
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".cart-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise CollaboratorError("cart-store", f"Cannot write {path}: {exc}") from exc
