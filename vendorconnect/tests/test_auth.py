import pytest


@pytest.mark.asyncio
async def test_register(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "newuser@test.com",
            "password": "securepass123",
            "full_name": "New User",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "newuser@test.com"
    assert data["full_name"] == "New User"
    assert data["role"] == "buyer"
    assert data["vendor_id"] is None
    assert "id" in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    payload = {
        "email": "duplicate@test.com",
        "password": "securepass123",
        "full_name": "First User",
    }
    await client.post("/api/v1/auth/register", json=payload)

    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_register_short_password(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "short@test.com", "password": "abc", "full_name": "Short Pass"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_admin_rejected(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "sneaky@test.com",
            "password": "securepass123",
            "full_name": "Sneaky Admin",
            "role": "admin",
        },
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_login(client):
    await client.post(
        "/api/v1/auth/register",
        json={
            "email": "login@test.com",
            "password": "mypassword",
            "full_name": "Login User",
        },
    )

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "login@test.com", "password": "mypassword"},
    )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"


@pytest.mark.asyncio
async def test_login_invalid_credentials(client):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@test.com", "password": "wrong"},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_me(client, buyer_headers):
    response = await client.get("/api/v1/auth/me", headers=buyer_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "buyer"
    assert "email" in data


@pytest.mark.asyncio
async def test_get_me_reports_vendor_profile(client, vendor, vendor_headers):
    response = await client.get("/api/v1/auth/me", headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["vendor_id"] == str(vendor.id)


@pytest.mark.asyncio
async def test_get_me_no_auth(client):
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_me_bad_token(client):
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_refresh_token(client):
    await client.post(
        "/api/v1/auth/register",
        json={
            "email": "refresh@test.com",
            "password": "mypassword",
            "full_name": "Refresh User",
        },
    )
    login_resp = await client.post(
        "/api/v1/auth/login",
        json={"email": "refresh@test.com", "password": "mypassword"},
    )
    tokens = login_resp.json()

    response = await client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": tokens["refresh_token"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data

    # An access token is not accepted as a refresh token
    response = await client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": tokens["access_token"]},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_health_carries_request_id(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Request-Duration-Ms" in response.headers
