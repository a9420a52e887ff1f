"""Account aggregate: a sign-in identity with a role."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from animalshop.accounts.events import AccountRegistered, RoleChanged
from animalshop.domain import shop


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


def normalize_email(email):
    return email.strip().lower() if email else email


@shop.aggregate
class Account:
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.USER.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        email = self.email or ""
        local, _, domain = email.partition("@")
        if not local or "." not in domain or " " in email or domain.startswith(".") or domain.endswith("."):
            raise ValidationError({"email": ["Valid email is required"]})

    @classmethod
    def register(cls, email, password_hash):
        now = datetime.now(UTC)
        account = cls(
            email=normalize_email(email),
            password_hash=password_hash,
            role=Role.USER.value,
            created_at=now,
            updated_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                email=account.email,
                role=account.role,
            )
        )
        return account

    def change_role(self, role):
        previous = self.role
        self.role = role
        self.updated_at = datetime.now(UTC)

        self.raise_(
            RoleChanged(
                account_id=str(self.id),
                previous_role=previous,
                new_role=role,
            )
        )

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def view(self):
        """Public representation; never includes the password hash."""
        return {
            "id": str(self.id),
            "email": self.email,
            "role": self.role,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@shop.repository(part_of=Account)
class AccountRepository:
    def find_by_email(self, email) -> Account | None:
        accounts = self._dao.query.filter(email=normalize_email(email)).all().items
        return accounts[0] if accounts else None
