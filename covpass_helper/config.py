"""Settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from .passbuilder import PassIdentifiers
from .valuesets import DEFAULT_VALUE_SETS_URL


@dataclass(frozen=True)
class Settings:
    pass_type_identifier: str
    team_identifier: str
    value_sets_url: str = DEFAULT_VALUE_SETS_URL
    signer_url: str = "http://localhost:3000"
    assets_dir: Optional[str] = None
    locale: str = "en"
    http_timeout: float = 25

    @property
    def identifiers(self) -> PassIdentifiers:
        return PassIdentifiers(
            pass_type_identifier=self.pass_type_identifier,
            team_identifier=self.team_identifier,
        )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            pass_type_identifier=os.getenv("PASS_TYPE_IDENTIFIER", ""),
            team_identifier=os.getenv("TEAM_IDENTIFIER", ""),
            value_sets_url=os.getenv("VALUE_SETS_URL", DEFAULT_VALUE_SETS_URL),
            signer_url=os.getenv("SIGNER_URL", "http://localhost:3000"),
            assets_dir=os.getenv("ASSETS_DIR") or None,
            locale=os.getenv("PASS_LOCALE", "en"),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "25")),
        )
