import argparse
import sys

from auth.dependencies import create_access_token
from database.config import SessionLocal
from database.models import User


def get_token(email: str, minutes: int = None) -> str:
    """Mint a session token for an existing user (local development only)."""
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
    finally:
        db.close()

    if not user:
        print(f"User not found: {email}")
        sys.exit(1)

    return create_access_token(user.email, expires_minutes=minutes)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print a bearer token for a user")
    parser.add_argument("email")
    parser.add_argument("--minutes", type=int, default=None, help="Token lifetime in minutes")
    args = parser.parse_args()

    print(get_token(args.email, args.minutes))
