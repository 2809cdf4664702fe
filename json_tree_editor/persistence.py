"""Save collaborators consumed by `TreeEditor.commit`.

A collaborator is any callable `save(identifier, value)` returning a dict
with a `status` of "success" or "error" and an optional `message`.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Optional

from . import config
from .io_utils import dump_json, export_basename

logger = logging.getLogger(__name__)

SaveResponse = Dict[str, Any]
SaveCallable = Callable[[str, Any], SaveResponse]


class LocalFileStore:
    """Writes each saved value to `<directory>/<identifier>.json`."""

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory or config.output_dir()

    def path_for(self, identifier: str) -> str:
        return os.path.join(self.directory, f"{export_basename(identifier)}.json")

    def __call__(self, identifier: str, value: Any) -> SaveResponse:
        path = self.path_for(identifier)
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(dump_json(value))
        except OSError as exc:
            logger.warning("Saving %s failed: %s", path, exc)
            return {'status': 'error', 'message': f"Error writing {path}: {exc}"}
        logger.info("Saved %s", path)
        return {'status': 'success', 'path': path}
