"""Common helpers shared by renderer implementations."""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union


def to_asciidoc_attributes(attributes: Mapping[str, Union[str, bool]]) -> Dict[str, Optional[str]]:
    """Convert configured attributes into the form the asciidoc API expects.

    ``True`` sets an attribute without a value, ``False`` unsets it.
    """
    converted: Dict[str, Optional[str]] = {}
    for name, value in attributes.items():
        if value is True:
            converted[name] = ""
        elif value is False:
            converted[name] = None
        else:
            converted[name] = str(value)
    return converted


def copy_resource_dirs(source_dir: Path, output_dir: Path, names: Iterable[str]) -> List[str]:
    """Mirror the named asset directories next to the rendered documents."""
    copied: List[str] = []
    for name in names:
        source = source_dir / name
        if not source.is_dir():
            continue
        target = output_dir / name
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()
        shutil.copytree(source, target)
        copied.append(name)
    return copied
