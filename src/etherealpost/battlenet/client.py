"""Battle.net Game Data API client for Auction House snapshots.

Usage:
    with BattleNetClient() as client:
        auction_file = client.get_connected_realm_auctions(3678)
        commodities = client.get_commodities()
"""

from __future__ import annotations

import logging
import time

from ..common.config import Settings, get_client_credentials
from ..common.http_client import HTTPClient
from .auctions import AuctionFile

logger = logging.getLogger(__name__)


class BattleNetClient:
    """Fetches auction files using the OAuth client-credentials flow."""

    AUCTIONS_PATH = "/data/wow/connected-realm/{connected_realm_id}/auctions"
    COMMODITIES_PATH = "/data/wow/auctions/commodities"

    # Refresh the token this many seconds before it actually expires.
    TOKEN_EXPIRY_MARGIN = 60

    def __init__(
        self,
        settings: Settings | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        self.settings = settings or Settings.load()
        if client_id is None or client_secret is None:
            client_id, client_secret = get_client_credentials()
        self._credentials = (client_id, client_secret)
        self._client = http_client or HTTPClient(self.settings)
        self._token: str | None = None
        self._token_expires_at = 0.0

    def get_access_token(self) -> str:
        """Return a cached OAuth access token, requesting a new one if needed."""
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        resp = self._client.post(
            self.settings.battlenet.oauth_url,
            data={"grant_type": "client_credentials"},
            auth=self._credentials,
        )
        payload = resp.json()
        token = payload.get("access_token")
        if not token:
            raise ValueError("OAuth response did not contain an access_token")

        expires_in = int(payload.get("expires_in", 0))
        self._token = token
        self._token_expires_at = (
            time.monotonic() + max(expires_in - self.TOKEN_EXPIRY_MARGIN, 0)
        )
        logger.info("Obtained Battle.net access token (expires in %ds)", expires_in)
        return token

    def get_connected_realm_auctions(self, connected_realm_id: int) -> AuctionFile:
        """Fetch every auction on a connected realm."""
        path = self.AUCTIONS_PATH.format(connected_realm_id=connected_realm_id)
        auction_file = self._get_auction_file(
            path, cache_key=f"auctions_{self.settings.battlenet.region}_{connected_realm_id}"
        )
        logger.info(
            "Fetched %d auctions for connected realm %d",
            len(auction_file),
            connected_realm_id,
        )
        return auction_file

    def get_commodities(self) -> AuctionFile:
        """Fetch the region-wide commodities market."""
        auction_file = self._get_auction_file(
            self.COMMODITIES_PATH,
            cache_key=f"commodities_{self.settings.battlenet.region}",
        )
        logger.info(
            "Fetched %d commodity auctions for region %s",
            len(auction_file),
            self.settings.battlenet.region,
        )
        return auction_file

    def _get_auction_file(self, path: str, cache_key: str) -> AuctionFile:
        battlenet = self.settings.battlenet
        resp = self._client.get(
            battlenet.base_url + path,
            params={
                "namespace": battlenet.dynamic_namespace,
                "locale": battlenet.locale,
            },
            headers={"Authorization": f"Bearer {self.get_access_token()}"},
            cache_key=cache_key,
        )
        return AuctionFile.from_json(resp.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BattleNetClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
