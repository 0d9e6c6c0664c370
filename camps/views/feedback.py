from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsParticipantRole
from ..responses import inserted
from ..serializers.feedback import FeedbackCreateSerializer, FeedbackSerializer
from ..services import feedback as feedback_service


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def submit_feedback(request):
    s = FeedbackCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    fb = feedback_service.submit_feedback(request.user.email, {
        'camp_id': vd.get('campId'),
        'camp_name': vd.get('camp_name'),
        'participant_name': vd.get('participant_name'),
        'photo_url': vd.get('photoURL'),
        'rating': vd['rating'],
        'comment': vd.get('comment'),
    })
    return Response(inserted(fb.id, feedback=FeedbackSerializer(fb).data))


@api_view(['GET'])
@permission_classes([AllowAny])
def ratings(request):
    """Latest participant feedback for the landing page."""
    return Response(FeedbackSerializer(feedback_service.latest_ratings(), many=True).data)
