"""Register a signed-in identity and print a bearer token for it.

The identity provider integration calls this after a successful external
sign-in (or an operator runs it by hand)::

    python -m comment_stage.scripts.issue_token --external-id google-123 \\
        --email ada@example.com --display-name "Ada"
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from comment_stage.core.errors import CommentStageError
from comment_stage.core.security import create_access_token
from comment_stage.core.settings import settings
from comment_stage.db.session import SessionLocal
from comment_stage.services.users import sign_in

logger = logging.getLogger(__name__)


def issue_token(
    db: Session,
    *,
    external_identity_id: str,
    email: str,
    display_name: str,
    avatar_url: str | None = None,
) -> tuple[int, str]:
    """Find or create the user, then return its id and a fresh access token."""
    user = sign_in(
        db,
        external_identity_id=external_identity_id,
        email=email,
        display_name=display_name,
        avatar_url=avatar_url,
    )
    token = create_access_token(user.id, extra_claims={"email": user.email})
    logger.info("Issued access token for user %s", user.id)
    return user.id, token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--external-id", required=True, help="Subject issued by the identity provider")
    parser.add_argument("--email", required=True)
    parser.add_argument("--display-name", required=True)
    parser.add_argument("--avatar-url", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.external_id.strip() or not args.display_name.strip():
        print("--external-id and --display-name must not be blank", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.log_level.upper())
    db = SessionLocal()
    try:
        user_id, token = issue_token(
            db,
            external_identity_id=args.external_id.strip(),
            email=args.email,
            display_name=args.display_name.strip(),
            avatar_url=args.avatar_url,
        )
    except CommentStageError as exc:
        print(f"Could not issue token: {exc.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"user_id={user_id}")
    print(token)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
