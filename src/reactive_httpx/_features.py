"""运行时特性检测：检查可选依赖以确定可用的解码能力。

Runtime feature detection for optional extras.
"""
from __future__ import annotations

import importlib.util


def _is_installed(module_name: str) -> bool:
    """Check if a module can be found without importing it."""
    return importlib.util.find_spec(module_name) is not None


# extra name -> (distribution on the index, import name)
EXTRAS: dict[str, tuple[str, str]] = {
    "vision": ("pillow", "PIL"),
}

HAS_VISION: bool = _is_installed(EXTRAS["vision"][1])


def require_extra(extra_name: str) -> None:
    """Raise ImportError with an installation hint if an extra is missing.

    Args:
        extra_name: Name of the pip extra (e.g., 'vision')

    Raises:
        ImportError: When the extra's package is not installed.
        KeyError: When ``extra_name`` is not a known extra.
    """
    package_name, module_name = EXTRAS[extra_name]
    if _is_installed(module_name):
        return
    raise ImportError(
        f"The '{extra_name}' extra ({package_name}) is required for this feature. "
        f"Install it with: pip install reactive-httpx[{extra_name}]"
    )
