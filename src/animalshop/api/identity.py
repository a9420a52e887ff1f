"""Caller identity for API routes.

``Authorization: Bearer <jwt>`` identifies a signed-in user; ``X-Guest-Id``
identifies an anonymous shopper. Cart routes accept either, preferring the
user.
"""

from dataclasses import dataclass

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.exceptions import ValidationError

from animalshop.accounts.account import Role
from animalshop.accounts.credentials import decode_access_token
from animalshop.cart.cart import CartOwner
from animalshop.exceptions import AuthenticationError, PermissionDeniedError

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    user_id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def optional_caller(credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> Caller | None:
    if credentials is None:
        return None
    claims = decode_access_token(credentials.credentials)
    return Caller(user_id=claims["sub"], email=claims.get("email", ""), role=claims.get("role", Role.USER.value))


def current_caller(caller: Caller | None = Depends(optional_caller)) -> Caller:
    if caller is None:
        raise AuthenticationError("No token provided")
    return caller


def admin_caller(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_admin:
        raise PermissionDeniedError()
    return caller


async def cart_owner(
    caller: Caller | None = Depends(optional_caller),
    x_guest_id: str | None = Header(None),
) -> CartOwner:
    if caller is not None:
        return CartOwner.user(caller.user_id)
    if x_guest_id:
        return CartOwner.guest(x_guest_id)
    raise ValidationError({"authentication": ["Authentication or X-Guest-Id header required"]})
