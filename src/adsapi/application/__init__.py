"""Client facade"""

from adsapi.application.client import Client
from adsapi.application.request import Request, handle_error

__all__ = ["Client", "Request", "handle_error"]
