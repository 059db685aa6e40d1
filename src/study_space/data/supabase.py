from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from supabase import Client, ClientOptions, create_client

from ..config.settings import SupabaseSettings
from ..errors import SupabaseNotConfiguredError

logger = logging.getLogger(__name__)


@dataclass
class SupabaseGateway:
    """Thin wrapper around the Supabase Python client with bounded request timeouts."""

    settings: SupabaseSettings
    _client: Optional[Client] = None

    def ensure_client(self) -> Client:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            raise SupabaseNotConfiguredError("Supabase settings are missing URL or anon key.")
        options = ClientOptions(
            postgrest_client_timeout=self.settings.timeout_seconds,
            storage_client_timeout=self.settings.timeout_seconds,
        )
        self._client = create_client(self.settings.url, self.settings.anon_key, options=options)
        logger.debug("Supabase client created for %s", self.settings.url)
        return self._client

    def is_ready(self) -> bool:
        return self._client is not None

    def table(self, name: str):
        return self.ensure_client().table(name)

    def bucket(self, name: str):
        return self.ensure_client().storage.from_(name)
