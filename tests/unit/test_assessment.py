"""Unit tests for baseline assessment scoring (cyberaware/gamification/assessment.py)"""
import pytest

from cyberaware.gamification.assessment import (
    ASSESSMENT_QUESTIONS,
    DEFAULT_CONFIDENCE,
    QuestionType,
    parse_confidence,
    score_assessment,
)


@pytest.fixture
def expert_answers():
    """Confident, all knowledge answers correct, preferred behavior"""
    return {
        "confidence-password": "5",
        "confidence-phishing": "5",
        "knowledge-2fa": "extra-security",
        "knowledge-phishing": "contact-directly",
        "knowledge-updates": "asap",
        "behavior-passwords": "unique-strong",
    }


# ============================================================================
# Confidence Parsing Tests
# ============================================================================

def test_parse_confidence_valid():
    """Test numeric answers 1-5 pass through"""
    assert parse_confidence("1") == 1
    assert parse_confidence("5") == 5


@pytest.mark.parametrize("raw", [None, "", "abc", "0", "6", "-2"])
def test_parse_confidence_falls_back_to_default(raw):
    """Test missing, non-numeric and out-of-range answers become 3"""
    assert parse_confidence(raw) == DEFAULT_CONFIDENCE


# ============================================================================
# Scoring Tests
# ============================================================================

def test_all_knowledge_correct(expert_answers):
    """Test a perfect run scores 100% and recommends nothing"""
    result = score_assessment(expert_answers)

    assert result.knowledge_score == 3
    assert result.knowledge_percentage == 100
    assert result.password_confidence == 5
    assert result.phishing_confidence == 5
    assert result.recommended_modules == []
    assert result.total_questions == len(ASSESSMENT_QUESTIONS)


def test_all_knowledge_correct_low_confidence(expert_answers):
    """Test privacy/updates are not recommended at 100% even with low confidence"""
    expert_answers["confidence-password"] = "2"
    expert_answers["confidence-phishing"] = "3"

    result = score_assessment(expert_answers)

    assert result.knowledge_percentage == 100
    assert result.recommended_modules == ["password", "phishing"]
    assert "privacy" not in result.recommended_modules
    assert "updates" not in result.recommended_modules


def test_empty_answers():
    """Test an unanswered assessment recommends every module"""
    result = score_assessment({})

    assert result.knowledge_score == 0
    assert result.knowledge_percentage == 0
    assert result.password_confidence == 3
    assert result.phishing_confidence == 3
    assert result.recommended_modules == ["password", "phishing", "privacy", "updates"]


def test_weak_password_behavior_recommends_password(expert_answers):
    """Test non-preferred password habit triggers the password module"""
    expert_answers["behavior-passwords"] = "same-everywhere"

    result = score_assessment(expert_answers)

    assert result.recommended_modules == ["password"]


def test_unanswered_phishing_question_recommends_phishing(expert_answers):
    """Test skipping the phishing knowledge question triggers the phishing module"""
    del expert_answers["knowledge-phishing"]

    result = score_assessment(expert_answers)

    assert "phishing" in result.recommended_modules
    assert result.knowledge_score == 2


def test_two_of_three_below_pass_threshold(expert_answers):
    """Test 66% knowledge is below the 70% pass mark"""
    expert_answers["knowledge-updates"] = "yearly"

    result = score_assessment(expert_answers)

    assert result.knowledge_percentage == pytest.approx(66.666, rel=1e-3)
    assert result.recommended_modules == ["privacy", "updates"]


def test_no_knowledge_questions():
    """Test a catalog without knowledge questions scores 0%"""
    questions = [q for q in ASSESSMENT_QUESTIONS if q.type is not QuestionType.KNOWLEDGE]

    result = score_assessment({}, questions=questions)

    assert result.knowledge_percentage == 0.0
    assert result.total_questions == 3


def test_deduplicate_keeps_order():
    """Test deduplication keeps first-seen order"""
    result = score_assessment({}, deduplicate=True)

    assert result.recommended_modules == ["password", "phishing", "privacy", "updates"]
