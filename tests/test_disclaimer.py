"""Tests pour les avertissements, la transparence et le contenu pédagogique."""

from datetime import datetime, timedelta

import pytest

from almanac.domain.disclaimer import (
    HIGH_SCORE_NOTE,
    LOW_SCORE_NOTE,
    DisclaimerLevel,
    build_transparency,
    create_disclaimer,
    disclaimer_level,
    educational_content,
    enhance,
    should_force_display,
)
from almanac.domain.entities import ElementEnergy, FortuneResult, Recommendation

NOW = datetime(2024, 1, 15, 10, 0)
MAX_CONFIDENCE = 95.0


def _fortune(overall: int, investment: int, recommendation: Recommendation) -> FortuneResult:
    return FortuneResult(
        date="2024-01-15",
        overall_score=overall,
        investment_score=investment,
        recommendation=recommendation,
        advice="今日運勢平穩",
        lucky_time="09:00-09:30 (開盤搶進)",
        avoid_time="10:45-11:15 (中場休息)",
        elements=ElementEnergy(metal=50, wood=78, water=65, fire=50, earth=55),
    )


@pytest.mark.parametrize(
    ("score", "recommendation", "expected"),
    [
        (85, Recommendation.BUY, DisclaimerLevel.CRITICAL),
        (79, Recommendation.BUY, DisclaimerLevel.HIGH),
        (20, Recommendation.SELL, DisclaimerLevel.MEDIUM),
        (60, Recommendation.HOLD, DisclaimerLevel.MEDIUM),
        (59, Recommendation.HOLD, DisclaimerLevel.LOW),
    ],
)
def test_disclaimer_levels(score, recommendation, expected):
    """Teste le niveau d'avertissement selon recommandation et score."""
    assert disclaimer_level(score, recommendation) is expected


def test_score_notes_and_acknowledgment():
    """Teste les notes de score extrême et l'exigence de confirmation."""
    critical = create_disclaimer(90, Recommendation.BUY)
    assert HIGH_SCORE_NOTE in critical.messages
    assert critical.requires_acknowledgment is True

    low = create_disclaimer(35, Recommendation.HOLD)
    assert LOW_SCORE_NOTE in low.messages
    assert low.requires_acknowledgment is False


def test_force_display_window():
    """Teste la validité de 7 jours d'une confirmation."""
    disclaimer = create_disclaimer(75, Recommendation.BUY)
    assert should_force_display(disclaimer, None, NOW) is True
    assert should_force_display(disclaimer, NOW - timedelta(days=3), NOW) is False
    assert should_force_display(disclaimer, NOW - timedelta(days=8), NOW) is True
    optional = create_disclaimer(50, Recommendation.HOLD)
    assert should_force_display(optional, None, NOW) is False


def test_transparency_confidence():
    """Teste la confiance affichée: 60 + 0.3 x score global, plafonnée à 95."""
    assert build_transparency(_fortune(50, 50, Recommendation.HOLD), NOW).confidence_level == pytest.approx(75.0)
    assert build_transparency(_fortune(100, 50, Recommendation.HOLD), NOW).confidence_level == pytest.approx(90.0)
    assert build_transparency(_fortune(100, 50, Recommendation.HOLD), NOW).confidence_level <= MAX_CONFIDENCE


def test_educational_content_adds_low_score_card():
    """Teste la fiche de gestion du risque pour un score d'investissement faible."""
    assert len(educational_content(_fortune(60, 65, Recommendation.HOLD))) == 2
    cards = educational_content(_fortune(40, 30, Recommendation.SELL))
    assert [c.category for c in cards][-1] == "risk-management"
    assert "金: 50" in cards[0].content


def test_enhance_preserves_fortune_fields():
    """Teste que l'enrichissement conserve les champs et sérialise en camelCase."""
    fortune = _fortune(70, 82, Recommendation.BUY)
    enhanced = enhance(fortune, NOW)
    assert enhanced.investment_score == 82
    assert enhanced.disclaimer.level is DisclaimerLevel.CRITICAL
    dumped = enhanced.model_dump(by_alias=True)
    assert "educationalContent" in dumped
    assert dumped["transparency"]["lastUpdated"] == NOW.isoformat()
