import pytest

from camps.models import Feedback

pytestmark = pytest.mark.django_db


def test_submit_feedback_fills_in_profile_and_camp(participant_client, participant, camp):
    participant.photo_url = 'https://img.test/rahim.png'
    participant.save()
    r = participant_client.post('/user/feedback', {'campId': camp.id, 'rating': 5, 'comment': 'Very <i>helpful</i>'},
                                format='json')
    assert r.status_code == 200
    fb = Feedback.objects.get(id=r.data['insertedId'])
    assert fb.camp_name == 'Eye Care Camp'
    assert fb.participant_name == 'Rahim'
    assert fb.photo_url == 'https://img.test/rahim.png'
    assert fb.comment == 'Very helpful'


@pytest.mark.parametrize('rating', [0, 6])
def test_rating_must_be_one_to_five(participant_client, rating):
    assert participant_client.post('/user/feedback', {'rating': rating}, format='json').status_code == 400


def test_admin_cannot_submit_feedback(admin_client):
    assert admin_client.post('/user/feedback', {'rating': 4}, format='json').status_code == 403


def test_ratings_are_public_and_latest_first(anon_client, participant, settings):
    settings.MEDIEASE = {**settings.MEDIEASE, 'RATINGS_LIMIT': 3}
    for i in range(5):
        Feedback.objects.create(participant_email=participant.email, rating=(i % 5) + 1, comment=f'#{i}')
    r = anon_client.get('/ratings')
    assert r.status_code == 200
    assert [f['comment'] for f in r.data] == ['#4', '#3', '#2']


def test_feedback_for_unknown_camp_is_404(participant_client):
    r = participant_client.post('/user/feedback', {'campId': 9999, 'rating': 4}, format='json')
    assert r.status_code == 404
    assert r.data['error']['message'] == 'Camp not found'
    assert not Feedback.objects.exists()


def test_feedback_without_camp_is_accepted(participant_client):
    r = participant_client.post('/user/feedback', {'rating': 4, 'comment': 'Great service'}, format='json')
    assert r.status_code == 200
    assert Feedback.objects.get().camp is None
