"""Turn stored media references into URLs clients can fetch."""

import re
from typing import Iterable, List, Optional

from cityfix.config import Settings, settings as default_settings

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")

STORAGE_LOCAL = "local"
STORAGE_S3 = "s3"


class MediaUrlResolver:
    def __init__(self, storage_type: str = STORAGE_LOCAL, api_url: str = "http://localhost:3000"):
        self.storage_type = storage_type
        self.api_url = api_url.rstrip("/")

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "MediaUrlResolver":
        config = config or default_settings
        return cls(storage_type=config.STORAGE_TYPE, api_url=config.API_URL)

    def resolve(self, reference: str) -> str:
        if _SCHEME_RE.match(reference):
            return reference
        if self.storage_type == STORAGE_S3:
            # Already the bucket URL written at upload time.
            return reference
        filename = reference.replace("\\", "/").rstrip("/").split("/")[-1]
        return f"{self.api_url}/uploads/{filename}"

    def resolve_optional(self, reference: Optional[str]) -> Optional[str]:
        return self.resolve(reference) if reference else None

    def resolve_many(self, references: Optional[Iterable[str]]) -> List[str]:
        return [self.resolve(ref) for ref in references or []]
