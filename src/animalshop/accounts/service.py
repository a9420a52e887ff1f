"""Entry points for registration, sign-in and role changes.

Signing in with a guest id attached folds that guest's cart into the user's.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from animalshop.accounts.account import Account
from animalshop.accounts.credentials import check_password, create_access_token, hash_password
from animalshop.accounts.registration import ChangeRole, RegisterAccount
from animalshop.cart.service import merge_carts
from animalshop.config import DEFAULT_PAGE_SIZE
from animalshop.exceptions import AuthenticationError, ResourceNotFoundError
from animalshop.utils.pagination import paginate

logger = structlog.get_logger(__name__)


def register(email: str, password: str) -> dict:
    account = current_domain.process(
        RegisterAccount(email=email, password_hash=hash_password(password)),
        asynchronous=False,
    )
    logger.info("account_registered", account_id=account["id"])
    return account


def login(email: str, password: str, guest_id: str | None = None) -> dict:
    account = current_domain.repository_for(Account).find_by_email(email)
    if account is None or not check_password(password, account.password_hash):
        logger.info("login_rejected")
        raise AuthenticationError("Invalid email or password")

    result = {"user": account.view(), "token": create_access_token(account)}
    if guest_id:
        result["cart"] = merge_carts(str(account.id), guest_id)

    logger.info("login_succeeded", account_id=str(account.id), merged_guest_cart=bool(guest_id))
    return result


def get_account(account_id) -> dict:
    try:
        return current_domain.repository_for(Account).get(str(account_id)).view()
    except ObjectNotFoundError:
        raise ResourceNotFoundError("User") from None


def list_accounts(page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    query = current_domain.repository_for(Account)._dao.query.order_by("created_at")
    return paginate(query, page, limit, serializer=Account.view)


def change_role(account_id, role: str) -> dict:
    account = current_domain.process(ChangeRole(account_id=account_id, role=role), asynchronous=False)
    logger.info("role_changed", account_id=account_id, role=role)
    return account
