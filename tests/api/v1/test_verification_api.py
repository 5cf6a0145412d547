import logging
from unittest.mock import patch

import pytest

from artisan_alley.schemas.verification import AuthenticityAnalysis, AuthenticityVerification

logger = logging.getLogger(__name__)

URL = "/api/v1/artist/verify-product"


def payload(product_id, **overrides):
    body = {
        "productId": product_id,
        "experienceYears": "10+",
        "specialization": "Landscapes",
        "toolsUsed": "Hog bristle brushes, palette knife",
        "creationTime": "3-4weeks",
        "undertakingAccepted": True,
    }
    body.update(overrides)
    return body


@pytest.fixture
def ai_score_90():
    result = AuthenticityVerification(
        authenticity_score=90,
        verification_id="AUTH-1700000000000-TEST",
        confidence=0.9,
        analysis=AuthenticityAnalysis(
            handcrafted_indicators=["Natural material variations"],
            material_analysis="Analysis confirms genuine Oil on Canvas materials.",
            tool_marks="Distinctive tool marks.",
            overall_assessment="Strong indicators.",
        ),
    )
    with patch("artisan_alley.services.verification.verify_authenticity", return_value=result) as mock:
        yield mock


def test_verify_product_success(client, auth_headers, artist, product, ai_score_90):
    response = client.post(URL, json=payload(product.id), headers=auth_headers(artist))

    logger.info(f"Response JSON: {response.json()}")
    assert response.status_code == 200
    data = response.json()
    assert data["finalScore"] == 92
    assert data["status"] == "verified"
    assert data["message"] == "Product verified as authentic handmade artwork"
    assert data["authenticityScore"] == 90
    assert data["verificationId"] == "AUTH-1700000000000-TEST"
    assert data["confidence"] == 0.9
    assert data["analysis"]["handcraftedIndicators"] == ["Natural material variations"]

    detail = client.get(f"/api/v1/products/{product.id}").json()
    assert detail["authenticityStatus"] == "verified"
    assert detail["authenticityScore"] == 92
    assert detail["artistUndertaking"]["ipAddress"] == "testclient"


def test_verify_product_pending(client, auth_headers, artist, product, ai_score_90):
    response = client.post(
        URL, json=payload(product.id, experienceYears="1-2", creationTime=""), headers=auth_headers(artist)
    )

    assert response.status_code == 200
    assert response.json()["finalScore"] == 80
    assert response.json()["status"] == "pending"


def test_blank_experience_counts_as_unset(client, auth_headers, artist, product, ai_score_90):
    response = client.post(URL, json=payload(product.id, experienceYears=""), headers=auth_headers(artist))

    # 90*0.7 + 50*0.15 + 90*0.15 = 84
    assert response.status_code == 200
    assert response.json()["finalScore"] == 84


def test_undertaking_not_accepted(client, auth_headers, artist, product, ai_score_90, caplog):
    with caplog.at_level("WARNING"):
        response = client.post(URL, json=payload(product.id, undertakingAccepted=False), headers=auth_headers(artist))

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "UNDERTAKING_REQUIRED"
    assert "without undertaking" in caplog.text

    detail = client.get(f"/api/v1/products/{product.id}").json()
    assert detail["authenticityStatus"] == "pending"
    assert detail["authenticityScore"] is None


def test_unknown_experience_bracket_is_rejected(client, auth_headers, artist, product):
    response = client.post(URL, json=payload(product.id, experienceYears="forever"), headers=auth_headers(artist))
    assert response.status_code == 422


def test_missing_product_id_is_rejected(client, auth_headers, artist):
    body = payload("x")
    del body["productId"]
    response = client.post(URL, json=body, headers=auth_headers(artist))
    assert response.status_code == 422


def test_product_not_found(client, auth_headers, artist, ai_score_90):
    response = client.post(URL, json=payload("no-such-product"), headers=auth_headers(artist))

    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "PRODUCT_NOT_FOUND"


def test_other_artist_forbidden(client, auth_headers, other_artist, product, ai_score_90):
    response = client.post(URL, json=payload(product.id), headers=auth_headers(other_artist))

    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "NOT_PRODUCT_OWNER"


def test_customer_forbidden(client, auth_headers, customer, product):
    response = client.post(URL, json=payload(product.id), headers=auth_headers(customer))

    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "INSUFFICIENT_PERMISSIONS"


def test_requires_authentication(client, product):
    response = client.post(URL, json=payload(product.id))

    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "INVALID_AUTH_HEADER"


def test_invalid_token(client, product):
    response = client.post(URL, json=payload(product.id), headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "INVALID_TOKEN"


def test_unexpected_error_is_500(client, auth_headers, artist, product, caplog):
    with patch("artisan_alley.services.verification.verify_authenticity", side_effect=RuntimeError("boom")):
        with caplog.at_level("ERROR"):
            response = client.post(URL, json=payload(product.id), headers=auth_headers(artist))

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "VERIFICATION_FAILED"
    assert "boom" in caplog.text
