"""
User model and data access functions.
Handles credential checks, account creation, and Flask-Login integration.
The logged-in User doubles as the actor identity passed to reservation
operations (actor_id / actor_name).
"""

import uuid
from werkzeug.security import generate_password_hash, check_password_hash
from database import get_db

USER_TYPES = ('resident', 'admin', 'superadmin')


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.email = user_dict['email']
        self.first_name = user_dict['first_name']
        self.middle_name = user_dict.get('middle_name')
        self.last_name = user_dict['last_name']
        self.user_type = user_dict['user_type']
        self.active = user_dict['active']
        self.created_at = user_dict['created_at']

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def is_admin(self):
        return self.user_type in ('admin', 'superadmin')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return self.active == 1

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login."""
        return str(self.id)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'email': self.email,
            'firstName': self.first_name,
            'middleName': self.middle_name,
            'lastName': self.last_name,
            'userType': self.user_type,
        }


def get_user_by_id(user_id: str) -> dict:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE id = ?', (user_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> dict:
    """
    Get user by email (case-insensitive).

    Args:
        email: Email to search for

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE lower(email) = lower(?)', (email.strip(),))
    row = cursor.fetchone()
    return dict(row) if row else None


def create_user(
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    user_type: str = 'resident',
    middle_name: str = None
) -> str:
    """
    Create a new user.

    Returns:
        str: New user ID

    Raises:
        ValueError: If user_type is unknown or the email is taken
    """
    if user_type not in USER_TYPES:
        raise ValueError(f'Invalid user type: {user_type}')
    if get_user_by_email(email):
        raise ValueError(f'Email already registered: {email}')

    user_id = uuid.uuid4().hex
    db = get_db()
    db.execute('''
        INSERT INTO users (id, first_name, middle_name, last_name, email,
                           password_hash, user_type)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    ''', (user_id, first_name, middle_name, last_name, email.strip(),
          generate_password_hash(password), user_type))
    db.commit()
    return user_id


def check_password(user_dict: dict, password: str) -> bool:
    """Verify a plain password against the stored hash."""
    return check_password_hash(user_dict['password_hash'], password)
