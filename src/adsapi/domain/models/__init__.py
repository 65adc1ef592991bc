"""Request and response models"""

from adsapi.domain.models.request_spec import HttpMethod, RequestSpec
from adsapi.domain.models.response import Response

__all__ = ["HttpMethod", "RequestSpec", "Response"]
