"""Core materialization for temporary fixtures."""

from .context import MaterializationContext, normalize_path, resolve_link_target
from .materializer import make, create_symlinks
from .materializer_async import make_async, create_symlinks_async

__all__ = [
    "MaterializationContext",
    "normalize_path",
    "resolve_link_target",
    "make",
    "make_async",
    "create_symlinks",
    "create_symlinks_async",
]
