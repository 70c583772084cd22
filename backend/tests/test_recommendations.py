"""Tests for service-type recommendations."""

from __future__ import annotations

from decimal import Decimal

from app.schemas.pricing import ServiceRequirements, TimePreference
from app.services.recommendation_service import estimate_service_price


def _scores(ranked) -> dict[str, int]:
    return {rec.service_type.id: rec.score for rec in ranked}


def test_ranks_every_service(engine, make_item) -> None:
    ranked = engine.get_service_recommendations(
        [make_item(fragile=True)], Decimal("10")
    )

    assert _scores(ranked) == {
        "man-and-van": 60,
        "large-van": 60,
        "multiple-trips": 60,
        "premium": 60,
        "van-only": 35,
    }
    # Ties keep catalog order.
    assert [rec.service_type.id for rec in ranked] == [
        "man-and-van",
        "large-van",
        "multiple-trips",
        "premium",
        "van-only",
    ]
    top = ranked[0]
    assert top.reasons == [
        "Suitable for your volume",
        "Professional handling for fragile items",
        "Professional help included",
    ]
    assert top.estimated_price == Decimal("68.50")


def test_oversized_load_favours_multiple_trips(engine, make_item) -> None:
    ranked = engine.get_service_recommendations(
        [make_item(volume=Decimal("40"))], Decimal("10")
    )
    scores = _scores(ranked)

    assert ranked[0].service_type.id == "multiple-trips"
    assert scores["multiple-trips"] == 45
    assert scores["man-and-van"] == 0
    assert scores["van-only"] == 0
    assert "May require multiple trips" in ranked[-1].reasons


def test_scores_never_negative(engine, make_item) -> None:
    ranked = engine.get_service_recommendations(
        [make_item(volume=Decimal("60"), weight=Decimal("5000"))],
        Decimal("10"),
        ServiceRequirements(budget=Decimal("1")),
    )
    assert all(rec.score == 0 for rec in ranked)


def test_long_distance_and_valuables_favour_premium(engine, make_item) -> None:
    ranked = engine.get_service_recommendations(
        [make_item(valuable=True)], Decimal("60")
    )
    premium = next(rec for rec in ranked if rec.service_type.id == "premium")

    assert ranked[0] is premium
    assert "Best for long-distance moves" in premium.reasons
    assert "Premium insurance included" in premium.reasons


def test_budget_requirement(engine, make_item) -> None:
    ranked = engine.get_service_recommendations(
        [make_item()], Decimal("10"), ServiceRequirements(budget=Decimal("60"))
    )
    by_id = {rec.service_type.id: rec for rec in ranked}

    assert by_id["van-only"].estimated_price == Decimal("58.50")
    assert "Within your budget" in by_id["van-only"].reasons
    assert by_id["man-and-van"].score == 30


def test_zero_budget_is_honoured(engine, make_item) -> None:
    ranked = engine.get_service_recommendations(
        [make_item()], Decimal("10"), ServiceRequirements(budget=Decimal("0"))
    )
    assert all("Within your budget" not in rec.reasons for rec in ranked)


def test_economical_diy_prefers_van_only(engine, make_item) -> None:
    ranked = engine.get_service_recommendations(
        [make_item()],
        Decimal("10"),
        ServiceRequirements(
            time_preference=TimePreference.ECONOMICAL, help_needed=False
        ),
    )

    assert ranked[0].service_type.id == "van-only"
    assert ranked[0].score == 60
    assert "Most economical option" in ranked[0].reasons
    assert "Perfect for DIY moves" in ranked[0].reasons
    assert _scores(ranked)["man-and-van"] == 35


def test_fast_and_premium_preferences(engine, make_item) -> None:
    fast = _scores(
        engine.get_service_recommendations(
            [make_item()],
            Decimal("10"),
            ServiceRequirements(time_preference=TimePreference.FAST),
        )
    )
    premium = engine.get_service_recommendations(
        [make_item()],
        Decimal("10"),
        ServiceRequirements(time_preference=TimePreference.PREMIUM),
    )

    assert fast["man-and-van"] == 55
    assert fast["van-only"] == 35
    assert premium[0].service_type.id == "premium"
    assert "Premium service quality" in premium[0].reasons


def test_estimate_ignores_free_distance(engine) -> None:
    service = engine.catalog.get("man-and-van")
    assert estimate_service_price(
        service, Decimal("0"), Decimal("3"), engine.config
    ) == Decimal("45.00")
