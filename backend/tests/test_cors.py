from fastapi.testclient import TestClient
from findride.main import app

client = TestClient(app)


def test_cors_preflight_allowed_origin():
    response = client.options('/api/distance', headers={
        'Origin': 'http://localhost:3000',
        'Access-Control-Request-Method': 'GET'
    })
    assert response.status_code == 200
    assert response.headers.get('access-control-allow-origin') == 'http://localhost:3000'


def test_cors_preflight_unknown_origin():
    response = client.options('/api/distance', headers={
        'Origin': 'http://foo.com',
        'Access-Control-Request-Method': 'GET'
    })
    assert response.status_code == 400
    assert 'access-control-allow-origin' not in response.headers


def test_plain_options_is_not_allowed():
    response = client.options('/api/distance')
    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
