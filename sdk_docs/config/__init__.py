"""Load, check and serialize the documentation site configuration.

This subpackage parses the project's ``config/site.yaml`` file into strongly
typed, immutable dataclasses (:class:`SiteConfig`, :class:`ThemeConfig`,
:class:`SidebarSection`, etc.) that the site generator consumes, reports
structural problems in the sidebar, and writes the configuration back out as
YAML, JSON or a ``module.exports`` JavaScript module. The primary entry point
is :func:`load_site_config`.

Examples
--------
>>> from sdk_docs.config import commercio_site_config
>>> site = commercio_site_config()
>>> [entry.display_title for entry in site.get_section("Utility helpers").entries]
['EncryptionHelper', 'KeysHelper']
"""

from .checks import ConfigIssue, check_site_config
from .commercio import commercio_site_config
from .loader import build_site_config, load_site_config
from .models import (
    HeadTag,
    MarkdownOptions,
    NavLink,
    SidebarEntry,
    SidebarSection,
    SiteConfig,
    SiteConfigError,
    ThemeConfig,
)
from .serialize import (
    SERIALIZATION_FORMATS,
    dump_site_config,
    dumps_site_config,
    site_config_to_mapping,
)

__all__ = [
    "SERIALIZATION_FORMATS",
    "ConfigIssue",
    "HeadTag",
    "MarkdownOptions",
    "NavLink",
    "SidebarEntry",
    "SidebarSection",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "build_site_config",
    "check_site_config",
    "commercio_site_config",
    "dump_site_config",
    "dumps_site_config",
    "load_site_config",
    "site_config_to_mapping",
]
