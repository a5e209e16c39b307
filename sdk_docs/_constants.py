"""Common literal values used across sdk_docs.

These constants keep output filenames centralized so the generator, CLI, and
tests can import the same values without drifting. Intended for internal use
within the sdk_docs package.

Examples
--------
>>> from sdk_docs import _constants
>>> _constants.SITE_MANIFEST_NAME
'.sdk-docs-manifest.json'
>>> _constants.STYLESHEET_PATH
'assets/pygments.css'
"""

SITE_MANIFEST_NAME = ".sdk-docs-manifest.json"
STYLESHEET_PATH = "assets/pygments.css"
HOME_CONTENT_PATH = "README"
DATE_FORMAT = "%b %d, %Y"
