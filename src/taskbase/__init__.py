"""TaskBase - personal task tracking API.

Registration, login and stateless bearer-token authorization in front of a
per-user todo store.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
