LATEST_URL = "/api/v1/currency/latest-rates/USD"


def test_headers_report_remaining_quota(make_client):
    client = make_client(max_requests=3)

    responses = [client.get(LATEST_URL) for _ in range(3)]

    assert [r.status_code for r in responses] == [200, 200, 200]
    assert [r.headers["X-RateLimit-Remaining"] for r in responses] == ["2", "1", "0"]
    assert responses[0].headers["X-RateLimit-Limit"] == "3"


def test_fourth_request_is_rejected_with_429(make_client, mock_rate_cache):
    client = make_client(max_requests=3)
    for _ in range(3):
        client.get(LATEST_URL)

    response = client.get(LATEST_URL)

    assert response.status_code == 429
    assert response.json() == {
        "message": "Too many requests. Please try again later.",
        "status_code": 429,
        "errors": [],
    }
    assert 1 <= int(response.headers["Retry-After"]) <= 60
    assert mock_rate_cache.get_latest.await_count == 3


def test_quota_is_shared_across_endpoints(make_client):
    client = make_client(max_requests=2)
    client.get(LATEST_URL)
    client.post("/api/v1/currency/convert", json={"from_currency": "USD", "to_currency": "EUR", "amount": 1})

    response = client.get(
        "/api/v1/currency/historical-rates",
        params={"base_currency": "USD", "start_date": "2025-01-01", "end_date": "2025-01-03"},
    )

    assert response.status_code == 429


def test_restricted_requests_still_consume_quota(make_client):
    client = make_client(max_requests=1)

    assert client.get("/api/v1/currency/latest-rates/TRY").status_code == 400
    assert client.get(LATEST_URL).status_code == 429


def test_health_and_root_are_exempt(make_client):
    client = make_client(max_requests=1)
    client.get(LATEST_URL)

    for _ in range(3):
        assert client.get("/api/v1/health").status_code == 200
        assert client.get("/").status_code == 200
