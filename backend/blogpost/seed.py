import os
from sqlalchemy import select
from blogpost.db.session import SessionLocal, init_db
from blogpost.models.user import Role, User
from blogpost.core.security import hash_password

def main():
    email = os.environ.get("SEED_ADMIN_EMAIL", "admin@example.com")
    name = os.environ.get("SEED_ADMIN_NAME", "Admin")
    password = os.environ.get("SEED_ADMIN_PASS", "admin12345")

    init_db()
    db = SessionLocal()
    try:
        existing = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if existing:
            return
        db.add(User(name=name, email=email, password_hash=hash_password(password), role=Role.ADMIN))
        db.commit()
    finally:
        db.close()

if __name__ == "__main__":
    main()
