"""Client singletons for external HTTP interactions."""
from company_match.clients.web_client import FetchError, WebClient

__all__ = ["FetchError", "WebClient"]
