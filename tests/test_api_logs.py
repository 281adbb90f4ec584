from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import sessionmaker

from medtrack.repository.repo_medication import MedicationRepository
from medtrack.repository.repo_medication_log import MedicationLogRepository
from medtrack.repository.repo_user import UserRepository
from medtrack.schemas.sche_medication_log import MedicationLogCreateRequest
from medtrack.services.srv_medication import MedicationService
from medtrack.services.srv_medication_log import MedicationLogService


def _mark(client, headers, medication_id, **extra):
    payload = {'medication_id': medication_id}
    payload.update(extra)
    return client.post('/api/logs', json=payload, headers=headers)


def test_mark_defaults_to_account_name_and_medication_time(client, auth_headers, create_medication):
    med = create_medication(time='09:15')

    resp = _mark(client, auth_headers, med['medication_id'])

    assert resp.status_code == 200
    log = resp.json()['data']
    assert log['medication_id'] == med['medication_id']
    assert log['scheduled_time'] == '09:15'
    assert log['marked_by'] == 'Lan'
    assert log['taken_on'] == datetime.now(timezone.utc).date().isoformat()


def test_marking_twice_keeps_one_log(client, auth_headers, create_medication):
    med = create_medication()

    first = _mark(client, auth_headers, med['medication_id'], marked_by='Minh').json()['data']
    second = _mark(client, auth_headers, med['medication_id'], marked_by='Lan').json()['data']

    assert first['log_id'] == second['log_id']
    assert second['marked_by'] == 'Minh'
    assert len(client.get('/api/logs/today', headers=auth_headers).json()['data']) == 1


def test_marked_medication_shows_as_taken(client, auth_headers, create_medication):
    med = create_medication()
    _mark(client, auth_headers, med['medication_id'], marked_by='Minh')

    listed = client.get('/api/medications', headers=auth_headers).json()['data'][0]

    assert listed['taken'] is True
    assert listed['marked_by'] == 'Minh'
    assert listed['taken_at'] is not None


def test_mark_is_scoped_to_the_day(client, auth_headers, create_medication):
    med = create_medication()
    _mark(client, auth_headers, med['medication_id'])
    tomorrow = (datetime.now(timezone.utc).date() + timedelta(days=1)).isoformat()

    listed = client.get('/api/medications', params={'date': tomorrow}, headers=auth_headers).json()['data'][0]
    logs = client.get('/api/logs/today', params={'date': tomorrow}, headers=auth_headers).json()['data']

    assert listed['taken'] is False
    assert logs == []


def test_unmark_is_idempotent(client, auth_headers, create_medication):
    med = create_medication()
    _mark(client, auth_headers, med['medication_id'])

    first = client.delete(f"/api/logs/{med['medication_id']}", headers=auth_headers)
    second = client.delete(f"/api/logs/{med['medication_id']}", headers=auth_headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert client.get('/api/logs/today', headers=auth_headers).json()['data'] == []
    assert client.get('/api/medications', headers=auth_headers).json()['data'][0]['taken'] is False


def test_mark_unknown_or_foreign_medication(client, auth_headers, other_headers, create_medication):
    med = create_medication()

    resp = _mark(client, other_headers, med['medication_id'])

    assert resp.status_code == 404


def test_delete_medication_removes_its_logs(client, auth_headers, create_medication):
    med = create_medication()
    _mark(client, auth_headers, med['medication_id'])

    client.delete(f"/api/medications/{med['medication_id']}", headers=auth_headers)

    assert client.get('/api/logs/today', headers=auth_headers).json()['data'] == []


def test_mark_validates_scheduled_time(client, auth_headers, create_medication):
    med = create_medication()

    resp = _mark(client, auth_headers, med['medication_id'], scheduled_time='8am')

    assert resp.status_code == 422


def test_concurrent_mark_returns_the_winning_log(client, engine, auth_headers, create_medication, monkeypatch):
    med = create_medication()
    winner = _mark(client, auth_headers, med['medication_id'], marked_by='Minh').json()['data']

    # The second request read the day before the first one committed
    monkeypatch.setattr(MedicationLogRepository, 'get_in_window', lambda self, user_id, start, end: [])
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        log_repo = MedicationLogRepository(session)
        service = MedicationLogService(log_repo, MedicationService(MedicationRepository(session), log_repo))
        user = UserRepository(session).get_by_email('family@example.com')
        log, created = service.mark_taken(
            MedicationLogCreateRequest(medication_id=med['medication_id'], marked_by='Lan'), user, timezone.utc
        )
    finally:
        session.close()
    monkeypatch.undo()

    assert created is False
    assert str(log.log_id) == winner['log_id']
    assert log.marked_by == 'Minh'
    logs = client.get('/api/logs/today', headers=auth_headers).json()['data']
    assert [entry['log_id'] for entry in logs] == [winner['log_id']]
