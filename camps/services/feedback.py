from typing import Any, Dict, Optional

from django.conf import settings
from rest_framework.exceptions import NotFound

from camps.models import Camp, Feedback, User
from camps.services.audit import log_action


def submit_feedback(participant_email: str, fields: Dict[str, Any]) -> Feedback:
    camp_id = fields.get('camp_id')
    camp = None
    if camp_id:
        camp = Camp.objects.filter(id=camp_id).first()
        if not camp:
            raise NotFound('Camp not found')
    user = User.objects.filter(email=participant_email).first()
    feedback = Feedback.objects.create(
        participant_email=participant_email,
        participant_name=fields.get('participant_name') or (user.name if user else ''),
        photo_url=fields.get('photo_url') or (user.photo_url if user else ''),
        camp=camp,
        camp_name=fields.get('camp_name') or (camp.name if camp else ''),
        rating=fields['rating'],
        comment=fields.get('comment') or '',
    )
    log_action(actor=participant_email, action='feedback_submit', object_type='feedback', object_id=feedback.id)
    return feedback


def latest_ratings(limit: Optional[int] = None) -> list[Feedback]:
    limit = limit or settings.MEDIEASE['RATINGS_LIMIT']
    return list(Feedback.objects.order_by('-created_at', '-id')[:limit])
