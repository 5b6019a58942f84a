from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class Role(models.TextChoices):
    """Closed, totally ordered set of account roles (lowest first)."""
    REGULAR = 'regular', 'Regular'
    CASHIER = 'cashier', 'Cashier'
    MANAGER = 'manager', 'Manager'
    SUPERUSER = 'superuser', 'Superuser'

    @property
    def rank(self):
        return list(type(self)).index(self)

    def at_least(self, other):
        return self.rank >= type(self)(other).rank


class UserManager(BaseUserManager):
    """Manager keyed on utorid instead of username"""
    use_in_migrations = True

    def create_user(self, utorid, email, name='', password=None, **extra_fields):
        if not utorid:
            raise ValueError('utorid is required')
        user = self.model(utorid=utorid, email=self.normalize_email(email), name=name or utorid, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, utorid, email, name='', password=None, **extra_fields):
        extra_fields.setdefault('role', Role.SUPERUSER)
        extra_fields.setdefault('verified', True)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(utorid, email, name=name, password=password, **extra_fields)


class User(AbstractUser):
    """
    Loyalty program account.

    ``points`` is the balance and only changes through ledger operations.
    An account created by a cashier has no usable password until it is
    activated with its reset token.
    """
    username = None
    first_name = None
    last_name = None

    utorid = models.CharField(max_length=8, unique=True)
    name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.REGULAR)
    points = models.IntegerField(default=0)
    verified = models.BooleanField(default=False)
    suspicious = models.BooleanField(default=False)
    birthday = models.CharField(max_length=10, null=True, blank=True, help_text="YYYY-MM-DD")
    avatar_url = models.CharField(max_length=500, null=True, blank=True, help_text="Avatar URL served by the static host")
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = 'utorid'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['email']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['id']

    def __str__(self):
        return self.utorid

    @property
    def role_enum(self):
        return Role(self.role)

    def has_role(self, min_role):
        return self.role_enum.at_least(min_role)

    @property
    def is_manager(self):
        return self.has_role(Role.MANAGER)
