"""
Listed NFT tokens.

A listing starts out listed; :meth:`ListingService.unlist` is the only
transition and it is one-way. Deleting works from either state.
"""

from ..core.record import Listing
from .base import EntityService
from .endpoints import mutation, query

STORE_NAME = "listed_tokens"


class ListingService(EntityService[Listing]):
    def _stamped(self, listing: Listing, now: int) -> Listing:
        # "false" is one byte longer than "true"
        return listing.touched(now, currently_listed=False)

    @query
    def get_status(self, record_id: str) -> bool:
        """Whether the token is currently listed."""
        return self._require(record_id).currently_listed

    @query
    def get_pinata_url(self, record_id: str) -> str:
        return self._require(record_id).pinata_url

    @mutation
    def unlist(self, record_id: str) -> Listing:
        """Mark the token as no longer listed. Repeat calls still bump ``updated_at``."""
        listing = self._require(record_id)
        return self._save(
            "update", listing.touched(self.clock.now(), currently_listed=False)
        )
