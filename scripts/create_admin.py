# scripts/create_admin.py
from __future__ import annotations

import sys

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from pagecraft.db.session import SessionLocal
from pagecraft.models.auth import AppRole, User
from pagecraft.services.authz import set_user_role
from pagecraft.services.passwords import hash_password


def run(email: str, password: str, full_name: str = "Site Admin") -> None:
    """Create (or reset) an active admin. Idempotent: re-running updates the password."""
    db: Session = SessionLocal()
    try:
        email = email.strip().lower()
        user = db.scalar(select(User).where(func.lower(User.email) == email))
        if not user:
            user = User(email=email, full_name=full_name, hashed_password=hash_password(password), is_active=True)
            db.add(user)
            db.flush()
            print(f"+ user created: {email}")
        else:
            user.hashed_password = hash_password(password)
            user.is_active = True
            print(f"~ user exists, password reset: {email}")

        set_user_role(db, user_id=user.id, role=AppRole.admin)
        db.commit()
        print("done: admin ready")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    # python -m scripts.create_admin <email> <password> [full_name]
    if len(sys.argv) < 3:
        sys.exit("usage: python -m scripts.create_admin <email> <password> [full_name]")
    run(sys.argv[1], sys.argv[2], sys.argv[3] if len(sys.argv) >= 4 else "Site Admin")
