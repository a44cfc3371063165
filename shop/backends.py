"""Backend de autenticación para las cuentas de administración del entorno."""

import hmac
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

logger = logging.getLogger(__name__)


def _same(a, b) -> bool:
    return hmac.compare_digest(str(a).encode("utf-8"), str(b).encode("utf-8"))


class AdminAccountsBackend(ModelBackend):
    """
    Valida usuario y contraseña contra settings.ADMIN_ACCOUNTS. El usuario
    staff se crea en el primer login, sin contraseña utilizable.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        if not username or password is None:
            return None

        for acc_user, acc_pass in getattr(settings, "ADMIN_ACCOUNTS", []):
            if _same(acc_user, username) and _same(acc_pass, password):
                break
        else:
            return None

        User = get_user_model()
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"is_staff": True},
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=["password"])
            logger.info("Cuenta de administración creada para %s", username)

        if not user.is_staff:
            user.is_staff = True
            user.save(update_fields=["is_staff"])

        if self.user_can_authenticate(user):
            return user
        return None
