import sys
import os

# Add current directory to path
sys.path.append(os.getcwd())

from pact_api.database import SessionLocal
from pact_api.models.user import User
from pact_api.core.security import hash_password

SEED_USERS = [
    {"email": "alice@test.com", "username": "alice"},
    {"email": "bob@test.com", "username": "bob"},
]
SEED_PASSWORD = "123456"


def seed_users():
    print("--- Seeding users ---")

    with SessionLocal() as session:
        # Delete through the ORM so tasks, friendships and memberships cascade
        existing = session.query(User).all()
        for user in existing:
            session.delete(user)
        session.commit()
        print(f"Removed {len(existing)} existing users")

        for data in SEED_USERS:
            session.add(User(
                email=data["email"],
                username=data["username"],
                hashed_password=hash_password(SEED_PASSWORD),
            ))
        session.commit()

    for data in SEED_USERS:
        print(f"Created {data['email']} / {SEED_PASSWORD}")


if __name__ == "__main__":
    seed_users()
