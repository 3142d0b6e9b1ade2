from intranet_search.search.backends.portal import PortalSearchBackend

__all__ = [
    "PortalSearchBackend",
]
