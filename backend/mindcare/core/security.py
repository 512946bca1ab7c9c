"""
Password hashing used by the account store as a black-box credential verifier.
"""
import hashlib
import bcrypt


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 so secrets longer than 72 bytes still count.
    The 32-byte digest stays under bcrypt's input limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def get_password_hash(password: str) -> str:
    """Hash a plaintext password for storage."""
    hashed = bcrypt.hashpw(_pre_hash_password(password), bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash."""
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_pre_hash_password(plain_password), hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
