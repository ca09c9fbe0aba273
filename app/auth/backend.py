"""Authentication backend and current-user dependencies."""
from fastapi_users import FastAPIUsers
from fastapi_users.authentication import CookieTransport, AuthenticationBackend

from app.core.security import get_jwt_strategy
from app.models.user import User
from .manager import get_user_manager

cookie_transport = CookieTransport(cookie_name="auth_cookie", cookie_max_age=3600 * 24 * 7)

auth_backend = AuthenticationBackend(
    name="jwt",
    transport=cookie_transport,
    get_strategy=get_jwt_strategy,
)

fastapi_users = FastAPIUsers[User, int](
    get_user_manager,
    [auth_backend],
)

current_admin = fastapi_users.current_user(active=True, superuser=True)
