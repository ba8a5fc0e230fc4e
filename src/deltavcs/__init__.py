"""deltavcs - a minimal content-addressed version control engine.

deltavcs tracks file content over time using a content-addressable object
store, a JSON staging index and a linear chain of commits.
"""

from deltavcs.constants import VERSION

__version__ = VERSION
__author__ = "deltavcs Contributors"

__all__ = ["__version__", "__author__"]
