from captchaform import __version__


def test_version_endpoint(client):
    """
    Verifies that the /version endpoint returns the expected version number.
    """
    response = client.get('/version')
    assert response.status_code == 200, "Expected HTTP status 200."

    data = response.get_json()
    assert data is not None, "Response should be JSON."
    assert data['version'] == __version__, f"Version should be {__version__}."


def test_health_endpoint(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_unknown_page_returns_404(client):
    response = client.get('/does-not-exist')

    assert response.status_code == 404
    assert "Page Not Found" in response.get_data(as_text=True)
