"""Service layer for running smartmatch on directory exports."""

from smartmatch.services.match_service import (
    build_config,
    load_weights_from_file,
    match_from_files,
)

__all__ = [
    "build_config",
    "load_weights_from_file",
    "match_from_files",
]
