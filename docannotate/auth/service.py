
import logging
from docannotate.errors import Conflict, Unauthorized
from docannotate.models.user import User
from docannotate.storage import AnnotationStore
from docannotate.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

def register_user(store: AnnotationStore, username: str, email: str | None, password: str) -> User:
    if store.get_user_by_username(username):
        raise Conflict("Username already taken")
    salt, hashed = hash_password(password)
    return store.create_user(username, email, hashed, salt)

def authenticate(store: AnnotationStore, username: str, password: str) -> User:
    user = store.get_user_by_username(username)
    if not user or not verify_password(password, user.password_salt, user.password_hash):
        logger.warning("Failed login for %s", username)
        raise Unauthorized("Invalid credentials")
    return user

def issue_token(user: User) -> str:
    return create_access_token(user.id)
