"""
Publish generated API documentation to Confluence wiki.

Reads the HTML files produced by a REST API documentation generator, and invokes Confluence API endpoints to create
or update a parent page and one child page per document.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

__author__ = "Levente Hunyadi"
__copyright__ = "Copyright 2022-2026, Levente Hunyadi"
__license__ = "MIT"
__maintainer__ = "Levente Hunyadi"
__status__ = "Production"
