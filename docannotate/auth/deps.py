
from typing import Iterator
from fastapi import Request, Depends
from jose import JWTError
from docannotate.config import settings
from docannotate.db import session as db_session
from docannotate.errors import Unauthorized
from docannotate.models.user import User
from docannotate.storage import AnnotationStore, SqlStore
from docannotate.utils.security import decode_token


def get_store(request: Request) -> Iterator[AnnotationStore]:
    if db_session.engine is None:
        yield request.app.state.memory_store
        return
    db = db_session.SessionLocal()
    try:
        yield SqlStore(db)
    finally:
        db.close()

def _get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1]
    return request.cookies.get(settings.cookie_name)

def get_optional_user(request: Request, store: AnnotationStore = Depends(get_store)) -> User | None:
    token = _get_token(request)
    if not token:
        return None
    try:
        payload = decode_token(token)
    except JWTError:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    return store.get_user(user_id)

def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise Unauthorized("Unauthorized")
    return user
