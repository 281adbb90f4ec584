from datetime import datetime, timedelta, timezone


def _today():
    return datetime.now(timezone.utc).date()


def test_schedule_only_lists_active_courses(client, auth_headers, create_medication):
    today = _today()
    create_medication(name='Ongoing', time='08:00')
    create_medication(name='Current', time='09:00',
                      start_date=(today - timedelta(days=1)).isoformat(),
                      end_date=(today + timedelta(days=1)).isoformat())
    create_medication(name='Later', time='07:00',
                      start_date=(today + timedelta(days=2)).isoformat(),
                      end_date=(today + timedelta(days=5)).isoformat())

    resp = client.get('/api/schedule', headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()['data']
    assert data['date'] == today.isoformat()
    assert [med['name'] for med in data['medications']] == ['Ongoing', 'Current']


def test_schedule_for_a_given_date(client, auth_headers, create_medication):
    create_medication(name='January', start_date='2024-01-01', end_date='2024-01-10')

    inside = client.get('/api/schedule', params={'date': '2024-01-10'}, headers=auth_headers).json()['data']
    outside = client.get('/api/schedule', params={'date': '2024-01-11'}, headers=auth_headers).json()['data']

    assert [med['name'] for med in inside['medications']] == ['January']
    assert outside['medications'] == []


def test_schedule_sorting_and_hiding_completed(client, auth_headers, create_medication):
    aspirin = create_medication(name='Aspirin', time='20:00')
    create_medication(name='Zinc', time='06:00')
    client.post('/api/logs', json={'medication_id': aspirin['medication_id']}, headers=auth_headers)

    by_name = client.get('/api/schedule', params={'sort_by': 'name'}, headers=auth_headers).json()['data']
    by_status = client.get('/api/schedule', params={'sort_by': 'status'}, headers=auth_headers).json()['data']
    pending = client.get('/api/schedule', params={'show_completed': 'false'}, headers=auth_headers).json()['data']

    assert [med['name'] for med in by_name['medications']] == ['Aspirin', 'Zinc']
    assert [med['name'] for med in by_status['medications']] == ['Zinc', 'Aspirin']
    assert [med['name'] for med in pending['medications']] == ['Zinc']
    assert pending['show_completed'] is False


def test_schedule_rejects_unknown_sort(client, auth_headers):
    resp = client.get('/api/schedule', params={'sort_by': 'dosage'}, headers=auth_headers)
    assert resp.status_code == 422


def test_overview_counts_todays_doses(client, auth_headers, create_medication):
    today = _today()
    first = create_medication(name='Aspirin', time='08:00')
    create_medication(name='Insulin', time='19:00')
    create_medication(name='Tomorrow only', time='10:00',
                      start_date=(today + timedelta(days=1)).isoformat(),
                      end_date=(today + timedelta(days=3)).isoformat())
    client.post('/api/logs', json={'medication_id': first['medication_id']}, headers=auth_headers)

    data = client.get('/api/schedule/overview', headers=auth_headers).json()['data']

    assert data['summary'] == {'taken_count': 1, 'total_count': 2, 'progress': 50.0}
    assert [med['name'] for med in data['today']['medications']] == ['Aspirin', 'Insulin']
    assert [med['name'] for med in data['tomorrow']['medications']] == ['Aspirin', 'Tomorrow only', 'Insulin']
    # Tomorrow is reconciled with tomorrow's logs
    assert all(med['taken'] is False for med in data['tomorrow']['medications'])


def test_overview_without_medications(client, auth_headers):
    data = client.get('/api/schedule/overview', headers=auth_headers).json()['data']

    assert data['summary'] == {'taken_count': 0, 'total_count': 0, 'progress': 0.0}
    assert data['today']['medications'] == []
