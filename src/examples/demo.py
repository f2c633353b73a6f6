"""
demo.py – One-shot walk through a listed token's life on the board.

Assumes:
  • boardstore installed (``pip install -e .``)
  • $BOARDSTORE_DATABASE_URL optional; defaults to an in-memory SQLite db
"""

import os
from pprint import pprint

from dotenv import load_dotenv

from boardstore import Listing, Message, init_boardstore, on
from boardstore.runtime import make_engine

load_dotenv()

db_url = os.environ.get("BOARDSTORE_DATABASE_URL", "sqlite://")

print(f"\nOpening store at {db_url}\n")

services = init_boardstore(make_engine(db_url))


# ────────────────────────────────── hooks ─────────────────────────────────────
@on.create(Listing, Message)
def announce(record) -> None:
    print(f"→ created {record.record_name} id={record.id}")


@on.update(Listing)
def announce_update(listing: Listing) -> None:
    print(f"→ updated listing id={listing.id} listed={listing.currently_listed}")


# ────────────────────────────────── flow ──────────────────────────────────────
def main() -> None:
    listings = services.listings

    added = listings.add(
        {"tokenId": "T1", "tokenName": "Asset", "body": "desc", "pinataURL": "ipfs://x"}
    )
    token = added.unwrap()
    pprint(added.to_dict())

    listings.unlist(token.id)
    print("status:", listings.get_status(token.id).unwrap())
    print("pinata:", listings.get_pinata_url(token.id).unwrap())

    removed = listings.delete(token.id)
    print("deleted:", removed.unwrap().token_name)
    pprint(listings.get_one(token.id).to_dict())

    pprint(listings.add({"tokenId": "T2", "tokenName": "", "body": "x", "pinataURL": "y"}).to_dict())

    services.messages.add(
        {"title": "gm", "body": "hello board", "attachmentURL": "ipfs://y"}
    )
    pprint(services.messages.list_all().to_dict())


if __name__ == "__main__":
    main()
