from datetime import timedelta

from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.state import token_backend


def make_token(email=None, *, expires_in=timedelta(hours=1), **claims):
    """Mint an identity token the way the external provider would."""
    payload = {'exp': timezone.now() + expires_in, **claims}
    if email is not None:
        payload['email'] = email
    return token_backend.encode(payload)


def client_for(email) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {make_token(email)}')
    return client
