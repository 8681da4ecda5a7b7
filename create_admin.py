import argparse
import os

from healthsync import create_app
from healthsync.extensions import db
from healthsync.errors import InvalidOperationError
from healthsync.permissions import ROLE_ADMIN
from healthsync.seed import seed_roles_and_permissions
from healthsync.services.accounts import create_account

parser = argparse.ArgumentParser(description="Create the first HealthSync administrator.")
parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL", "admin@healthsync.local"))
parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
parser.add_argument("--name", default=os.getenv("ADMIN_NAME", "Administrator"))
args = parser.parse_args()

if not args.password or len(args.password) < 6:
    parser.error("a password of at least 6 characters is required (--password or ADMIN_PASSWORD)")

app = create_app()

with app.app_context():
    seed_roles_and_permissions()
    try:
        user = create_account(
            args.email,
            args.password,
            full_name=args.name,
            role_name=ROLE_ADMIN,
            email_confirmed=True,
        )
    except InvalidOperationError:
        db.session.rollback()
        print(f"User with email '{args.email}' already exists.")
    else:
        db.session.commit()
        print(f"Admin created: {user.email} (id {user.id})")
