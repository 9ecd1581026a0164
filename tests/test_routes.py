"""
Route tests.
Exercises the JSON API end to end through the Flask test client.
"""

import pytest

BOOKING = {
    'representativeName': 'Juan Dela Cruz',
    'contactNumber': '09171234567',
    'reservationDate': '2030-06-01',
    'startTime': '18:00',
    'duration': 2,
    'purpose': 'League game',
    'numberOfPeople': 10,
    'additionalNotes': None,
}


def _book(client, **overrides):
    payload = dict(BOOKING, **overrides)
    return client.post('/court-reservations', json=payload)


class TestPublicRoutes:

    def test_health(self, client):
        response = client.get('/api/health')
        data = response.get_json()

        assert response.status_code == 200
        assert data['status'] == 'ok'
        assert data['database'] == 'ok'

    def test_protected_routes_answer_401(self, client):
        for route in ['/court-reservations', '/court-reservations/calendar',
                      '/admin/logs', '/admin/transactions', '/auth/me']:
            response = client.get(route)
            assert response.status_code == 401, route
            assert response.get_json()['success'] is False

    def test_unknown_route_is_json_404(self, client):
        response = client.get('/nowhere')
        assert response.status_code == 404
        assert response.get_json()['success'] is False


class TestAuthRoutes:

    def test_login_and_me(self, app, client):
        response = client.post('/auth/login', json={
            'email': app.config['DEFAULT_SUPERADMIN_EMAIL'].upper(),
            'password': app.config['DEFAULT_SUPERADMIN_PASSWORD'],
        })
        assert response.status_code == 200

        me = client.get('/auth/me').get_json()['data']
        assert me['userType'] == 'superadmin'

    def test_wrong_password(self, app, client):
        response = client.post('/auth/login', json={
            'email': app.config['DEFAULT_ADMIN_EMAIL'], 'password': 'nope'
        })
        assert response.status_code == 401

    def test_login_validation(self, client):
        response = client.post('/auth/login', json={'email': 'not-an-email', 'password': 'x'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid email format'

    def test_logout(self, resident_client):
        assert resident_client.post('/auth/logout').status_code == 200
        assert resident_client.get('/auth/me').status_code == 401

    def test_csrf_token(self, client):
        response = client.get('/auth/csrf-token')
        assert response.status_code == 200
        assert response.get_json()['data']['csrfToken']


class TestCourtReservationRoutes:

    def test_create(self, resident_client):
        response = _book(resident_client)
        data = response.get_json()

        assert response.status_code == 201
        assert data['data']['reservation']['status'] == 'pending'
        assert data['data']['reservation']['serviceId'] == 'CR-300601-001'
        assert data['data']['transaction']['amount'] == 400

    def test_create_validation_error(self, resident_client):
        response = _book(resident_client, startTime='6pm')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Start time must be HH:MM'

        response = _book(resident_client, representativeName='')
        assert response.status_code == 400

        response = _book(resident_client, contactNumber='12345')
        assert response.status_code == 400

    def test_create_conflict_is_409(self, resident_client):
        assert _book(resident_client).status_code == 201

        response = _book(resident_client, startTime='19:00', duration=1)
        assert response.status_code == 409
        assert response.get_json()['success'] is False

    def test_residents_only_list_their_own(self, app, resident_client, make_resident, create_reservation):
        other = make_resident('Maria', 'Santos')
        create_reservation(other, '2030-06-02', '10:00', 1)
        _book(resident_client)

        data = resident_client.get('/court-reservations').get_json()
        assert data['count'] == 1
        assert data['data'][0]['representativeName'] == 'Juan Dela Cruz'

        # Asking for someone else's bookings is ignored for residents
        data = resident_client.get(f'/court-reservations?userId={other}').get_json()
        assert data['count'] == 1

    def test_admin_lists_everyone(self, admin_client, resident_id, make_resident, create_reservation):
        other = make_resident('Maria', 'Santos')
        create_reservation(resident_id, '2030-06-01', '10:00', 1)
        create_reservation(other, '2030-06-02', '10:00', 1)

        assert admin_client.get('/court-reservations').get_json()['count'] == 2
        assert admin_client.get(f'/court-reservations?userId={other}').get_json()['count'] == 1
        assert admin_client.get('/court-reservations?startDate=bad').status_code == 400

    def test_detail_is_owner_or_admin(self, admin_client, resident_client, make_resident, create_reservation):
        reservation_id = _book(resident_client).get_json()['data']['reservation']['id']
        other = create_reservation(make_resident('Maria', 'Santos'), '2030-06-02')

        assert resident_client.get(f'/court-reservations/{reservation_id}').status_code == 200
        assert resident_client.get(f"/court-reservations/{other['id']}").status_code == 403
        assert resident_client.get('/court-reservations/missing').status_code == 404

        data = admin_client.get(f'/court-reservations/{reservation_id}').get_json()['data']
        assert data['transaction']['referenceId'] == reservation_id

    def test_admin_status_update(self, admin_client, resident_client):
        reservation_id = _book(resident_client).get_json()['data']['reservation']['id']

        response = admin_client.put(f'/court-reservations/{reservation_id}/status',
                                    json={'status': 'rejected', 'adminComment': 'ok'})
        assert response.status_code == 400

        response = admin_client.put(f'/court-reservations/{reservation_id}/status',
                                    json={'status': 'approved'})
        data = response.get_json()
        assert response.status_code == 200
        assert data['data']['reservation']['status'] == 'approved'
        assert data['data']['reservation']['processedByName'] == 'Admin User'
        assert data['data']['transaction']['status'] == 'approved'
        assert 'warning' not in data

        response = admin_client.put(f'/court-reservations/{reservation_id}/status',
                                    json={'status': 'pending'})
        assert response.status_code == 409

        logs = admin_client.get('/admin/logs').get_json()
        assert logs['total'] == 1
        assert logs['data'][0]['adminName'] == 'Admin User'

    def test_admin_comment_kept_when_omitted_and_cleared_when_empty(self, admin_client, resident_client):
        reservation_id = _book(resident_client).get_json()['data']['reservation']['id']
        url = f'/court-reservations/{reservation_id}/status'

        data = admin_client.put(url, json={'status': 'pending', 'adminComment': 'Bring IDs'}).get_json()
        assert data['data']['reservation']['adminComment'] == 'Bring IDs'

        data = admin_client.put(url, json={'status': 'pending'}).get_json()
        assert data['data']['reservation']['adminComment'] == 'Bring IDs'

        data = admin_client.put(url, json={'status': 'pending', 'adminComment': None}).get_json()
        assert data['data']['reservation']['adminComment'] == 'Bring IDs'

        data = admin_client.put(url, json={'status': 'approved', 'adminComment': ''}).get_json()
        assert data['data']['reservation']['adminComment'] == ''
        assert data['data']['transaction']['adminComment'] == ''

    def test_status_update_requires_admin(self, resident_client):
        reservation_id = _book(resident_client).get_json()['data']['reservation']['id']

        response = resident_client.put(f'/court-reservations/{reservation_id}/status',
                                       json={'status': 'approved'})
        assert response.status_code == 403

    def test_status_update_reports_side_effect_failure(self, admin_client, resident_client, monkeypatch):
        import models.transaction

        reservation_id = _book(resident_client).get_json()['data']['reservation']['id']

        def broken(*args, **kwargs):
            raise RuntimeError('ledger unavailable')

        monkeypatch.setattr(models.transaction, 'sync_transaction_status', broken)

        response = admin_client.put(f'/court-reservations/{reservation_id}/status',
                                    json={'status': 'approved'})
        data = response.get_json()

        assert response.status_code == 200
        assert data['data']['reservation']['status'] == 'approved'
        assert 'ledger' in data['warning']
        assert {effect['name']: effect['ok'] for effect in data['sideEffects']} == {
            'ledger': False, 'audit': True
        }

    def test_cancel(self, resident_client, app, make_resident):
        reservation_id = _book(resident_client).get_json()['data']['reservation']['id']

        response = resident_client.post(f'/court-reservations/{reservation_id}/cancel')
        data = response.get_json()
        assert response.status_code == 200
        assert data['data']['reservation']['status'] == 'cancelled'
        assert data['data']['transaction']['status'] == 'cancelled'

        response = resident_client.post(f'/court-reservations/{reservation_id}/cancel')
        assert response.status_code == 409

    def test_cancel_someone_elses_booking(self, app, resident_client, admin_client):
        reservation_id = _book(resident_client).get_json()['data']['reservation']['id']

        # Admins are not the booker either; they use the status endpoint
        response = admin_client.post(f'/court-reservations/{reservation_id}/cancel')
        assert response.status_code == 403


class TestCalendarRoutes:

    def test_calendar_redacts_for_residents(self, resident_client, admin_client):
        _book(resident_client)

        resident_events = resident_client.get('/court-reservations/calendar?month=6&year=2030').get_json()
        admin_events = admin_client.get('/court-reservations/calendar?month=6&year=2030').get_json()

        assert resident_events['data'][0]['title'] == 'Reserved'
        assert admin_events['data'][0]['title'] == 'Juan Dela Cruz - League game'
        assert admin_events['data'][0]['colorTag'] == 'warning'

    def test_calendar_bad_range(self, resident_client):
        response = resident_client.get('/court-reservations/calendar?month=13&year=2030')
        assert response.status_code == 400

    def test_check_conflict(self, resident_client):
        _book(resident_client)

        response = resident_client.get(
            '/court-reservations/check-conflict?date=2030-06-01&startTime=19:00&duration=1'
        )
        assert response.status_code == 200
        assert response.get_json()['hasConflict'] is True

        response = resident_client.get(
            '/court-reservations/check-conflict?date=2030-06-01&startTime=20:00&duration=1'
        )
        assert response.get_json()['hasConflict'] is False

    @pytest.mark.parametrize('query', [
        '',
        '?date=2030-06-01',
        '?date=2030-06-01&startTime=10:00',
    ])
    def test_check_conflict_missing_params(self, resident_client, query):
        response = resident_client.get(f'/court-reservations/check-conflict{query}')
        data = response.get_json()

        assert response.status_code == 400
        assert data['hasConflict'] is False


class TestAdminRoutes:

    def test_transactions(self, admin_client, resident_client, resident_id):
        _book(resident_client)
        _book(resident_client, startTime='08:00', duration=1)

        data = admin_client.get('/admin/transactions').get_json()
        assert data['count'] == 2

        data = admin_client.get(f'/admin/transactions?userId={resident_id}&status=pending').get_json()
        assert data['count'] == 2
        assert {row['amount'] for row in data['data']} == {400, 0}

    def test_admin_routes_require_admin(self, resident_client):
        assert resident_client.get('/admin/logs').status_code == 403
        assert resident_client.get('/admin/transactions').status_code == 403
