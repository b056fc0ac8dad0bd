"""Load and validate workshop configuration YAML.

This subpackage parses the workshop's YAML settings file and produces a
:class:`WorkshopConfig` naming the content directory, the default page, an
optional explicit page manifest, and the template engine used for variable
substitution. The primary entry point is :func:`load_workshop_config`.

Examples
--------
>>> from pathlib import Path
>>> from workshop_pages.config import load_workshop_config
>>> config = load_workshop_config(Path("workshop.yaml"))  # doctest: +SKIP
>>> [entry.path for entry in config.pages or []]  # doctest: +SKIP
['index', 'setup/install']
"""

from .loader import load_workshop_config
from .models import ConfigError, PageEntry, WorkshopConfig

__all__ = [
    "ConfigError",
    "PageEntry",
    "WorkshopConfig",
    "load_workshop_config",
]
