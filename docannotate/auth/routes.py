
from fastapi import APIRouter, Depends, Response
from docannotate.auth.deps import get_store, get_current_user
from docannotate.auth.service import register_user, authenticate, issue_token
from docannotate.config import settings
from docannotate.models.user import User
from docannotate.schemas.auth import RegisterIn, LoginIn, AuthOut, UserOut
from docannotate.storage import AnnotationStore

router = APIRouter(prefix="/api/auth", tags=["auth"])

def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        httponly=True,
        samesite="Lax",
        secure=settings.app_env == "prod",
        path="/",
        max_age=settings.access_token_expire_minutes * 60,
    )

@router.post("/register", response_model=AuthOut, status_code=201)
def register(body: RegisterIn, response: Response, store: AnnotationStore = Depends(get_store)):
    user = register_user(store, body.username, body.email, body.password)
    token = issue_token(user)
    set_auth_cookie(response, token)
    return AuthOut(user=UserOut.model_validate(user), access_token=token)

@router.post("/login", response_model=AuthOut)
def login(body: LoginIn, response: Response, store: AnnotationStore = Depends(get_store)):
    user = authenticate(store, body.username, body.password)
    token = issue_token(user)
    set_auth_cookie(response, token)
    return AuthOut(user=UserOut.model_validate(user), access_token=token)

@router.post("/logout", status_code=204)
def logout():
    response = Response(status_code=204)
    response.delete_cookie(settings.cookie_name, path="/")
    return response

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
