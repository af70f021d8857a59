"""Issue a bearer token for a ledger address.

Usage: python -m scripts.issue_token <address>
Reads JWT_SECRET from .env like the server does.
"""
import argparse

from src.dl_gateway.auth.jwt_handler import create_access_token
from src.dl_ledger.domain.constants import LEDGER_ADDRESS


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue an access token for a ledger address")
    parser.add_argument("address", help="ledger address placed in the token's sub claim")
    args = parser.parse_args()
    if args.address == LEDGER_ADDRESS:
        parser.error(f"{LEDGER_ADDRESS!r} is the ledger's own holding address")
    print(create_access_token(args.address))


if __name__ == "__main__":
    main()
