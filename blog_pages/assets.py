"""Copy static assets (images, stylesheets) next to the generated pages."""

from __future__ import annotations

import shutil
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


def copy_static_assets(static_dir: Path | None, output_dir: Path) -> list[Path]:
    """Copy every file under ``static_dir`` into ``output_dir``.

    Parameters
    ----------
    static_dir : Path or None
        Directory of files served verbatim, mirroring its layout. ``None`` or a
        missing directory copies nothing.
    output_dir : Path
        Site output root.

    Returns
    -------
    list[Path]
        Destination paths of the copied files, sorted.
    """
    if static_dir is None or not static_dir.is_dir():
        return []
    shutil.copytree(static_dir, output_dir, dirs_exist_ok=True)
    return sorted(
        output_dir / source.relative_to(static_dir)
        for source in static_dir.rglob("*")
        if source.is_file()
    )


__all__ = ["copy_static_assets"]
