"""Create a back-office user, or reset an existing user's role and password.

Usage: python scripts/create_user.py USERNAME PASSWORD [EDITOR|ADMIN|SUPERADMIN]
"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from association_site import create_app
from association_site.auth.passwords import hash_password
from association_site.extensions import db
from association_site.models import Role, User


def main(argv):
    if len(argv) not in (2, 3):
        print(__doc__)
        return 1

    username, password = argv[0], argv[1]
    role_name = (argv[2] if len(argv) == 3 else 'EDITOR').upper()
    if role_name not in Role.__members__:
        print(f'Unknown role {role_name}')
        return 1
    if len(password) < 6:
        print('Password must be at least 6 characters')
        return 1

    app = create_app()
    with app.app_context():
        user = User.query.filter_by(username=username).first()
        if not user:
            user = User(username=username, password_hash=hash_password(password), role=Role[role_name])
            db.session.add(user)
            print(f'New {role_name} user "{username}" created')
        else:
            user.password_hash = hash_password(password)
            user.role = Role[role_name]
            print(f'Existing user "{username}" updated to {role_name}')
        db.session.commit()
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
