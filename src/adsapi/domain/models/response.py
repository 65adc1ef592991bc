"""Response model - the result of one transport call"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class Response:
    """HTTP response returned by a transport"""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
    reason: str = ""  # Status reason phrase, e.g. "OK"

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup"""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    @property
    def is_success(self) -> bool:
        """Check if status is 2xx"""
        return 200 <= self.status_code < 300
