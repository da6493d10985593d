"""Common literal values used across blog_pages.

These constants keep route layouts and filenames centralized so generators,
the CLI, and tests build the same paths.

Examples
--------
>>> from blog_pages import _constants
>>> _constants.POST_ROUTE_TEMPLATE.format(slug="intro")
'posts/intro/index.html'
"""

POST_ROUTE_TEMPLATE = "posts/{slug}/index.html"
INDEX_FILENAME = "index.html"
NOT_FOUND_FILENAME = "404.html"
