import logging

import httpx

from walkathon.errors import FetchFailure, ParseFailure
from walkathon.normalizer import normalize
from walkathon.tiers import SyncOutcome, SyncTier, register

logger = logging.getLogger(__name__)


@register
class LiveFeed(SyncTier):
    """Fetches the spreadsheet's CSV export over HTTP and normalizes it."""

    outcome = SyncOutcome.LIVE
    priority = 0

    def load(self):
        url = self.config.feed_url
        if not url:
            raise FetchFailure("No pre-registration feed URL configured")

        try:
            response = self._get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchFailure(f"Failed to fetch {url}: {e}") from e

        # error pages and empty exports come back as tiny payloads with a 200
        size = len(response.content)
        if size <= self.config.min_payload_bytes:
            raise FetchFailure(
                f"Feed payload too small ({size} bytes, need more than "
                f"{self.config.min_payload_bytes})"
            )

        participants = normalize(response.text)
        if not participants:
            raise ParseFailure("Feed contained no rows with a first and last name")

        logger.info("Fetched %d pre-registered participant(s)", len(participants))
        return participants

    def _get(self, url: str) -> httpx.Response:
        if self.http_client is not None:
            return self.http_client.get(url, follow_redirects=True)
        with httpx.Client(follow_redirects=True) as client:
            return client.get(url)
