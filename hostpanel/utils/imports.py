import importlib
import logging

from hostpanel.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def import_string(dotted_path: str):
    """
    Import a class or attribute from a dotted path.

    Accepts both ``package.module.Attr`` and ``package.module:Attr``.

    Raises:
        ConfigurationError: the module or attribute cannot be found.
    """
    if ":" in dotted_path:
        module_path, _, attr = dotted_path.partition(":")
    else:
        module_path, _, attr = dotted_path.rpartition(".")
    if not module_path or not attr:
        raise ConfigurationError(f"'{dotted_path}' is not a dotted import path", setting=dotted_path)

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module '{module_path}': {exc}", setting=dotted_path) from exc

    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(f"Module '{module_path}' has no attribute '{attr}'", setting=dotted_path) from exc
