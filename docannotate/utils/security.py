
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt
from docannotate.config import settings

pwd_context = CryptContext(schemes=["scrypt"], deprecated="auto", scrypt__rounds=settings.password_hash_rounds)

def hash_password(password: str) -> tuple[str, str]:
    """Returns (salt, hash); the salt is also embedded in the hash string."""
    hashed = pwd_context.hash(password)
    # modular crypt format: $scrypt$params$salt$checksum
    salt = hashed.rsplit("$", 2)[1]
    return salt, hashed

def verify_password(password: str, salt: str, hashed: str) -> bool:
    if not pwd_context.identify(hashed) or hashed.rsplit("$", 2)[1] != salt:
        return False
    return pwd_context.verify(password, hashed)

def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or settings.access_token_expire_minutes)
    to_encode = {"sub": subject, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm="HS256")

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.secret_key, algorithms=["HS256"])
