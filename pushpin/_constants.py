"""Common literal values used across pushpin.

These constants keep filenames, file extensions, and reserved keys centralized
so the generator, the watcher, and tests can import the same values without
drifting. Intended for internal use within the pushpin package.

Examples
--------
>>> from pushpin import _constants
>>> _constants.LIST_POSTS_MACRO
'[[ListPosts]]'
>>> _constants.OUTPUT_SUFFIX
'.html'
"""

CONFIG_FILENAME = "pushpin.yaml"
PAGES_DIRNAME = "pages"
TEMPLATES_DIRNAME = "templates"
OUTPUT_DIRNAME = "public"

MARKDOWN_SUFFIX = ".md"
OUTPUT_SUFFIX = ".html"
TEMPLATE_PATTERN = "**/*.html"

FRONT_MATTER_DELIMITER = "---"
TEMPLATE_KEY = "template"
TITLE_KEY = "title"

LIST_POSTS_MACRO = "[[ListPosts]]"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7878
