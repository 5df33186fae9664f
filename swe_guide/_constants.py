"""Common literal values used across swe_guide.

These constants keep defaults and filenames centralized so templates,
builders, and tests can import the same values without drifting. Intended for
internal use within the swe_guide package.

Examples
--------
>>> from swe_guide import _constants
>>> _constants.DEFAULT_CODE_LANGUAGE
'typescript'
>>> _constants.ROUTE_DOCUMENT
'index.html'
"""

DEFAULT_CODE_LANGUAGE = "typescript"
ROUTE_DOCUMENT = "index.html"
CONTENT_SUFFIXES = (".yaml", ".yml")
