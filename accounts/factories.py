"""
Account factory for generating test accounts.

This module uses `factory_boy` to provide an `AccountFactory` class that
simplifies the creation of `Account` objects in tests, with realistic fake
names, unique email addresses, and properly hashed passwords.

Example:
    >>> account = AccountFactory(email="user@example.com")
    >>> account.check_password("defaultpassword")
    True
"""

import factory
from django.contrib.auth import get_user_model

Account = get_user_model()


class AccountFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Account instances for testing.

    Meta:
        model (Account): The project's user model.
        skip_postgeneration_save (bool): Prevents double-saving the object
            when the password hook modifies it.
    """

    class Meta:
        model = Account
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        """
        Hash and store the given password, or ``"defaultpassword"``.

        Nothing happens when the instance is only built, not created.
        """

        if not create:
            return

        self.set_password(extracted or "defaultpassword")
        self.save()
