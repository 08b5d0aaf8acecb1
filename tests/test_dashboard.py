def test_admin_dashboard(client, admin_headers):
    response = client.get('/api/dashboard/admin', headers=admin_headers)
    assert response.status_code == 200
    data = response.json()['data']
    assert data['total_patients'] == 3
    assert data['total_medicines'] == 4
    assert data['low_stock_medicines'] == 3
    assert [p['name'] for p in data['recent_patients']] == ['Ali Khan', 'Ayesha Bibi', 'Bilal Ahmed']


def test_doctor_dashboard(client, doctor_headers):
    data = client.get('/api/dashboard/doctor', headers=doctor_headers).json()['data']
    assert data['total_patients'] == 3
    assert 'total_medicines' not in data


def test_dashboards_are_role_gated(client, doctor_headers, admin_headers):
    assert client.get('/api/dashboard/admin', headers=doctor_headers).status_code == 403
    assert client.get('/api/dashboard/doctor', headers=admin_headers).status_code == 403


def test_patient_list_is_paged_by_the_backend(client, clinic_backend, doctor_headers):
    response = client.get('/api/patients', headers=doctor_headers, params={'page_size': 2, 'gender': 'Male'})
    assert response.status_code == 200
    body = response.json()
    assert [p['name'] for p in body['data']] == ['Ali Khan', 'Bilal Ahmed']
    assert body['metadata'] == {'current_page': 1, 'page_size': 2, 'total_items': 2, 'total_pages': 1}

    _, path, params, _ = clinic_backend.calls[-1]
    assert path == '/patients'
    assert params['limit'] == 2
    assert params['gender'] == 'Male'
    assert params['minAge'] is None
