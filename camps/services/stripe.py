import logging
from dataclasses import dataclass
from decimal import Decimal

import requests
from django.conf import settings

from camps.exceptions import PaymentProviderError

logger = logging.getLogger(__name__)


@dataclass
class ChargeIntent:
    id: str
    client_secret: str
    amount: int
    currency: str


def to_minor_units(amount) -> int:
    return int((Decimal(str(amount)) * 100).to_integral_value())


def create_payment_intent(amount) -> ChargeIntent:
    """Create a card PaymentIntent for ``amount`` (major currency units)."""
    cfg = settings.MEDIEASE
    if not cfg['STRIPE_SECRET_KEY']:
        raise PaymentProviderError('Payments are not configured on this server')
    url = f"{cfg['STRIPE_API_BASE'].rstrip('/')}/payment_intents"
    data = {
        'amount': to_minor_units(amount),
        'currency': cfg['CURRENCY'],
        'payment_method_types[]': 'card',
    }
    try:
        r = requests.post(url, data=data, auth=(cfg['STRIPE_SECRET_KEY'], ''), timeout=cfg['PAYMENT_TIMEOUT'])
    except requests.RequestException as exc:
        logger.error("payment intent request failed: %s", exc)
        raise PaymentProviderError() from exc
    body = r.json() if r.content else {}
    if r.status_code >= 400:
        message = (body.get('error') or {}).get('message') or f'HTTP {r.status_code}'
        logger.error("payment intent rejected: %s", message)
        raise PaymentProviderError(f'Payment provider error: {message}')
    if not body.get('id') or not body.get('client_secret'):
        raise PaymentProviderError('Invalid response from payment provider')
    return ChargeIntent(
        id=body['id'],
        client_secret=body['client_secret'],
        amount=int(body.get('amount', data['amount'])),
        currency=body.get('currency', data['currency']),
    )
