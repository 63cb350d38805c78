"""
Password hashing

New hashes use Werkzeug's scrypt format. Hashes written as
``scrypt:<salt>:<hexdigest>`` (N=16384, r=8, p=1, 64-byte key) are still
accepted so existing admin rows keep working; they are checked by Werkzeug
after rewriting them into its ``scrypt:n:r:p$salt$hash`` form.
"""

from werkzeug.security import check_password_hash, generate_password_hash

COLON_SCRYPT_PREFIX = 'scrypt:'
COLON_SCRYPT_PARAMS = 'scrypt:16384:8:1'


def hash_password(password):
    """Return a salted scrypt hash for storage in admin_users."""
    return generate_password_hash(password, method='scrypt')


def to_werkzeug_hash(stored_hash):
    """Rewrite a ``scrypt:<salt>:<hexdigest>`` hash for check_password_hash.

    Returns None when the value is not in that form.
    """
    parts = stored_hash.split(':')
    if len(parts) != 3 or not parts[1] or not parts[2]:
        return None
    _, salt, digest = parts
    return f'{COLON_SCRYPT_PARAMS}${salt}${digest}'


def verify_password(password, stored_hash):
    """Check a password against a stored hash in constant time."""
    if not stored_hash:
        return False

    if stored_hash.startswith(COLON_SCRYPT_PREFIX) and '$' not in stored_hash:
        stored_hash = to_werkzeug_hash(stored_hash)
        if stored_hash is None:
            return False

    try:
        return check_password_hash(stored_hash, password)
    except (ValueError, TypeError):
        return False
