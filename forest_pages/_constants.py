"""Common literal values used across forest_pages.

These constants keep metadata keys, reserved slug suffixes, and link markers
centralized so the compiler, manifest loader, and tests can import the same
values without drifting. Intended for internal use within the forest_pages
package.

Examples
--------
>>> from forest_pages import _constants
>>> "index" + _constants.METADATA_SUFFIX
'index:metadata'
>>> _constants.KEY_SLUG
'slug'
"""

KEY_SLUG = "slug"
KEY_TITLE = "title"
KEY_TAXON = "taxon"
KEY_ASREF = "asref"
KEY_BACKLINKS = "backlinks"

METADATA_SUFFIX = ":metadata"
DEFAULT_ROOT_SLUG = "index"
LOCAL_LINK_CLASS = "link local"

TRUTHY_VALUES = frozenset({"true", "yes", "on", "1"})
FALSY_VALUES = frozenset({"false", "no", "off", "0"})
