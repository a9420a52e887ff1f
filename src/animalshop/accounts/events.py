"""Domain events for the Account aggregate."""

from protean.fields import Identifier, String

from animalshop.domain import shop


@shop.event(part_of="Account")
class AccountRegistered:
    account_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    role = String(required=True, max_length=10)


@shop.event(part_of="Account")
class RoleChanged:
    """An administrator granted or revoked the admin role."""

    account_id = Identifier(required=True)
    previous_role = String(required=True, max_length=10)
    new_role = String(required=True, max_length=10)
