import random
from decimal import Decimal
from unittest.mock import patch

import pytest

from artisan_alley.db.models import AuthenticityStatus
from artisan_alley.models.product import VerificationSubmission
from artisan_alley.schemas.verification import AuthenticityAnalysis, AuthenticityVerification
from artisan_alley.services.trust_state import ProductNotFoundError
from artisan_alley.services.verification import (
    NotProductOwnerError,
    UndertakingNotAcceptedError,
    run_ai_check,
    submit_product_verification,
)


def ai_result(score, verification_id="AUTH-1700000000000-TEST"):
    return AuthenticityVerification(
        authenticity_score=score,
        verification_id=verification_id,
        confidence=0.91,
        analysis=AuthenticityAnalysis(
            handcrafted_indicators=["Natural material variations"],
            material_analysis="genuine",
            tool_marks="visible",
            overall_assessment="authentic",
        ),
    )


def submission(product_id, **overrides):
    fields = dict(
        product_id=product_id,
        experience_years="10+",
        specialization="Landscapes",
        tools_used="Hog bristle brushes, palette knife",
        creation_time="3-4weeks",
        undertaking_accepted=True,
    )
    fields.update(overrides)
    return VerificationSubmission(**fields)


@pytest.fixture
def mock_ai():
    with patch("artisan_alley.services.verification.verify_authenticity") as mock:
        mock.return_value = ai_result(90)
        yield mock


class TestSubmitProductVerification:
    def test_undertaking_not_accepted_changes_nothing(self, db_session, product, artist, mock_ai):
        with pytest.raises(UndertakingNotAcceptedError):
            submit_product_verification(db_session, submission(product.id, undertaking_accepted=False), artist.id)

        db_session.refresh(product)
        assert product.authenticity_status == "pending"
        assert product.authenticity_score is None
        assert product.artist_undertaking is None
        assert product.version == 1
        mock_ai.assert_not_called()

    def test_undertaking_checked_before_product_lookup(self, db_session, artist):
        with pytest.raises(UndertakingNotAcceptedError):
            submit_product_verification(db_session, submission("missing", undertaking_accepted=False), artist.id)

    def test_missing_product(self, db_session, artist, mock_ai):
        with pytest.raises(ProductNotFoundError):
            submit_product_verification(db_session, submission("missing"), artist.id)
        mock_ai.assert_not_called()

    def test_other_artist_cannot_verify(self, db_session, product, other_artist, mock_ai):
        with pytest.raises(NotProductOwnerError):
            submit_product_verification(db_session, submission(product.id), other_artist.id)

        db_session.refresh(product)
        assert product.authenticity_status == "pending"

    def test_experienced_artist_is_verified(self, db_session, product, artist, mock_ai):
        outcome = submit_product_verification(db_session, submission(product.id), artist.id, client_host="10.1.2.3")

        mock_ai.assert_called_once_with(
            image_urls=product.images,
            product_title="Monsoon Over Sahyadri",
            medium="Oil on Canvas",
            artist_name="Meera Kulkarni",
            rng=None,
        )
        assert outcome.final_score == 92
        assert outcome.status == AuthenticityStatus.VERIFIED
        assert outcome.message == "Product verified as authentic handmade artwork"
        assert outcome.authenticity_score == 90
        assert outcome.verification_id == "AUTH-1700000000000-TEST"

        db_session.refresh(product)
        assert product.authenticity_status == "verified"
        assert product.authenticity_score == Decimal("92")
        assert product.verification_id == "AUTH-1700000000000-TEST"
        assert product.version == 2

        undertaking = product.artist_undertaking
        assert undertaking["signed"] is True
        assert undertaking["experienceYears"] == "10+"
        assert undertaking["toolsUsed"] == "Hog bristle brushes, palette knife"
        assert undertaking["specialization"] == "Landscapes"
        assert undertaking["creationTime"] == "3-4weeks"
        assert undertaking["ipAddress"] == "10.1.2.3"
        assert undertaking["timestamp"]

    def test_new_artist_with_missing_detail_is_pending(self, db_session, product, artist, mock_ai):
        outcome = submit_product_verification(
            db_session, submission(product.id, experience_years="1-2", tools_used=""), artist.id
        )

        assert outcome.final_score == 80
        assert outcome.status == AuthenticityStatus.PENDING
        db_session.refresh(product)
        assert product.authenticity_status == "pending"
        assert product.authenticity_score == Decimal("80")
        assert product.artist_undertaking["ipAddress"] == "unknown"

    def test_missing_artist_and_medium_use_defaults(self, db_session, make_product, mock_ai):
        orphan = make_product("deleted-artist", medium=None)

        submit_product_verification(db_session, submission(orphan.id), "deleted-artist")

        kwargs = mock_ai.call_args.kwargs
        assert kwargs["artist_name"] == "Unknown Artist"
        assert kwargs["medium"] == "Mixed Media"

    def test_resubmission_overwrites_with_fresh_id(self, db_session, product, artist):
        first = submit_product_verification(db_session, submission(product.id), artist.id, rng=random.Random(1))
        second = submit_product_verification(
            db_session, submission(product.id, experience_years=None), artist.id, rng=random.Random(2)
        )

        assert first.verification_id != second.verification_id
        db_session.refresh(product)
        assert product.verification_id == second.verification_id
        assert product.authenticity_score == Decimal(second.final_score)
        assert product.artist_undertaking["experienceYears"] is None
        assert product.version == 3


class TestRunAiCheck:
    def test_high_score_verifies_and_stores_raw_score(self, db_session, product, artist, mock_ai):
        mock_ai.return_value = ai_result(95.4)

        result = run_ai_check(db_session, product.id, artist.id, ["artist"])

        assert result.product.authenticity_status == "verified"
        assert result.product.authenticity_score == Decimal("95.40")
        assert result.verification.verification_id == result.product.verification_id

    def test_score_of_90_stays_pending(self, db_session, product, artist, mock_ai):
        result = run_ai_check(db_session, product.id, artist.id, ["artist"])

        assert result.product.authenticity_status == "pending"
        assert result.product.authenticity_score == Decimal("90")

    def test_admin_may_check_any_product(self, db_session, product, admin, mock_ai):
        result = run_ai_check(db_session, product.id, admin.id, ["admin"])
        assert result.product.id == product.id

    def test_other_artist_is_refused(self, db_session, product, other_artist, mock_ai):
        with pytest.raises(NotProductOwnerError):
            run_ai_check(db_session, product.id, other_artist.id, ["artist"])
        mock_ai.assert_not_called()

    def test_missing_product(self, db_session, admin, mock_ai):
        with pytest.raises(ProductNotFoundError):
            run_ai_check(db_session, "missing", admin.id, ["admin"])

    def test_supplied_image_urls_replace_stored_images(self, db_session, product, artist, mock_ai):
        urls = ["https://images.example.com/close-up.jpg"]

        run_ai_check(db_session, product.id, artist.id, ["artist"], image_urls=urls)

        assert mock_ai.call_args.kwargs["image_urls"] == urls

    def test_stored_images_used_without_supplied_urls(self, db_session, product, artist, mock_ai):
        run_ai_check(db_session, product.id, artist.id, ["artist"], image_urls=[])

        assert mock_ai.call_args.kwargs["image_urls"] == product.images
