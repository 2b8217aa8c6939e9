"""Print a long-lived bearer token for an existing admin (token mode only)."""
import argparse

from artist_roster_api.app.core.config import settings
from artist_roster_api.app.core.security import create_access_token

ap = argparse.ArgumentParser(description=__doc__)
ap.add_argument("username")
ap.add_argument("--days", type=int, default=365, help="token lifetime in days")
args = ap.parse_args()

print(create_access_token({"sub": args.username}, settings, expires_delta=args.days * 24 * 60 * 60))
