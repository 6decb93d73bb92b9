from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Marketplace account; sellers own products, customers write reviews."""

    class UserType(models.TextChoices):
        CUSTOMER = "Customer", "Customer"
        SELLER = "Seller", "Seller"
        LOGISTICIAN = "Logistician", "Logistician"
        ADMIN = "Admin", "Admin"

    # id, username, password, is_active, is_staff, is_superuser, groups, user_permissions are inherited
    email = models.EmailField(unique=True)
    user_type = models.CharField(
        max_length=20, choices=UserType.choices, default=UserType.CUSTOMER
    )
    phone_number = models.CharField(max_length=50, blank=True, null=True)
    country = models.CharField(max_length=100, blank=True, default="")
    profile_image = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        db_table = "users"

    def __str__(self):
        return self.username

    @property
    def is_seller(self) -> bool:
        return self.user_type == self.UserType.SELLER
