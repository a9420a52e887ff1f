"""Account registration and role management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from animalshop.accounts.account import Account, Role
from animalshop.domain import shop
from animalshop.exceptions import ResourceNotFoundError


@shop.command(part_of="Account")
class RegisterAccount:
    """Create a user account. The password arrives already hashed."""

    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)


@shop.command(part_of="Account")
class ChangeRole:
    account_id = Identifier(required=True)
    role = String(required=True, choices=Role)


@shop.command_handler(part_of=Account)
class AccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(Account)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email already registered"]})

        account = Account.register(email=command.email, password_hash=command.password_hash)
        repo.add(account)
        return account.view()

    @handle(ChangeRole)
    def change_role(self, command):
        repo = current_domain.repository_for(Account)
        try:
            account = repo.get(command.account_id)
        except ObjectNotFoundError:
            raise ResourceNotFoundError("User") from None

        account.change_role(command.role)
        repo.add(account)
        return account.view()
