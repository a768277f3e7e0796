"""
Baseline Assessment Scoring

The baseline assessment mixes three kinds of questions:
- confidence: self-rating 1-5 for a topic
- knowledge: one objectively correct option
- behavior: one preferred option describing good practice

score_assessment() turns the answers into confidence scores, a knowledge
percentage and a list of recommended learning modules.
"""

from enum import Enum
from typing import Mapping, Optional, Sequence
import logging

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 3
LOW_CONFIDENCE_THRESHOLD = 3  # inclusive
KNOWLEDGE_PASS_PERCENT = 70


class QuestionType(str, Enum):
    CONFIDENCE = "confidence"
    KNOWLEDGE = "knowledge"
    BEHAVIOR = "behavior"


class AnswerOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    correct: bool = False
    preferred: bool = False


class AssessmentQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    question: str
    type: QuestionType
    options: tuple[AnswerOption, ...]

    def option(self, value: Optional[str]) -> Optional[AnswerOption]:
        return next((opt for opt in self.options if opt.value == value), None)


class AssessmentResult(BaseModel):
    """Outcome of a completed baseline assessment"""
    model_config = ConfigDict(frozen=True)

    password_confidence: int
    phishing_confidence: int
    knowledge_score: int
    knowledge_percentage: float
    recommended_modules: list[str] = Field(default_factory=list)
    total_questions: int


def _confidence_options() -> tuple[AnswerOption, ...]:
    labels = (
        "Not confident at all",
        "Slightly confident",
        "Moderately confident",
        "Very confident",
        "Extremely confident",
    )
    return tuple(AnswerOption(value=str(i), label=label) for i, label in enumerate(labels, start=1))


ASSESSMENT_QUESTIONS: tuple[AssessmentQuestion, ...] = (
    AssessmentQuestion(
        id="confidence-password",
        question="How confident are you in creating strong passwords?",
        type=QuestionType.CONFIDENCE,
        options=_confidence_options(),
    ),
    AssessmentQuestion(
        id="confidence-phishing",
        question="How confident are you in identifying phishing emails?",
        type=QuestionType.CONFIDENCE,
        options=_confidence_options(),
    ),
    AssessmentQuestion(
        id="knowledge-2fa",
        question="What is two-factor authentication (2FA)?",
        type=QuestionType.KNOWLEDGE,
        options=(
            AnswerOption(value="backup", label="A way to backup your data"),
            AnswerOption(
                value="extra-security",
                label="An extra layer of security requiring two forms of verification",
                correct=True,
            ),
            AnswerOption(value="password-strength", label="A method to make passwords stronger"),
            AnswerOption(value="antivirus", label="A type of antivirus software"),
        ),
    ),
    AssessmentQuestion(
        id="knowledge-phishing",
        question="Which is the BEST way to verify a suspicious email?",
        type=QuestionType.KNOWLEDGE,
        options=(
            AnswerOption(value="click-links", label="Click the links to see where they go"),
            AnswerOption(value="reply-email", label="Reply to the email asking if it's legitimate"),
            AnswerOption(
                value="contact-directly",
                label="Contact the organization directly through official channels",
                correct=True,
            ),
            AnswerOption(value="forward-friends", label="Forward it to friends for their opinion"),
        ),
    ),
    AssessmentQuestion(
        id="knowledge-updates",
        question="How often should you update your software?",
        type=QuestionType.KNOWLEDGE,
        options=(
            AnswerOption(value="monthly", label="Once a month"),
            AnswerOption(value="quarterly", label="Every 3 months"),
            AnswerOption(value="yearly", label="Once a year"),
            AnswerOption(value="asap", label="As soon as updates are available", correct=True),
        ),
    ),
    AssessmentQuestion(
        id="behavior-passwords",
        question="How do you typically create passwords?",
        type=QuestionType.BEHAVIOR,
        options=(
            AnswerOption(value="same-everywhere", label="Use the same password for everything"),
            AnswerOption(value="similar-variations", label="Use similar passwords with small variations"),
            AnswerOption(value="unique-simple", label="Create unique but simple passwords"),
            AnswerOption(
                value="unique-strong",
                label="Create unique, strong passwords for each account",
                preferred=True,
            ),
        ),
    ),
)


def parse_confidence(raw: Optional[str], question_id: str = "") -> int:
    """
    Parse a 1-5 confidence answer

    Unanswered, non-numeric and out-of-range answers fall back to the
    neutral default of 3.
    """
    if raw is None or raw == "":
        return DEFAULT_CONFIDENCE
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric confidence answer {raw!r} for {question_id}, using {DEFAULT_CONFIDENCE}")
        return DEFAULT_CONFIDENCE
    if not 1 <= value <= 5:
        logger.warning(f"Confidence answer {value} for {question_id} out of range, using {DEFAULT_CONFIDENCE}")
        return DEFAULT_CONFIDENCE
    return value


def score_assessment(
    answers: Mapping[str, str],
    questions: Sequence[AssessmentQuestion] = ASSESSMENT_QUESTIONS,
    deduplicate: bool = False,
) -> AssessmentResult:
    """
    Score a completed baseline assessment

    Args:
        answers: question id -> selected option value
        questions: question catalog to score against
        deduplicate: drop repeated module recommendations (order kept)

    Returns:
        AssessmentResult

    Recommendation rules (each evaluated independently):
    - password: password confidence <= 3, or behavior-passwords answer is
      not the preferred option
    - phishing: phishing confidence <= 3, or knowledge-phishing unanswered
    - privacy and updates: knowledge percentage below 70
    """
    password_confidence = parse_confidence(answers.get("confidence-password"), "confidence-password")
    phishing_confidence = parse_confidence(answers.get("confidence-phishing"), "confidence-phishing")

    knowledge_questions = [q for q in questions if q.type is QuestionType.KNOWLEDGE]
    knowledge_score = 0
    for question in knowledge_questions:
        selected = question.option(answers.get(question.id))
        if selected is not None and selected.correct:
            knowledge_score += 1

    if knowledge_questions:
        knowledge_percentage = knowledge_score / len(knowledge_questions) * 100
    else:
        knowledge_percentage = 0.0

    recommended: list[str] = []
    if password_confidence <= LOW_CONFIDENCE_THRESHOLD or answers.get("behavior-passwords") != "unique-strong":
        recommended.append("password")
    if phishing_confidence <= LOW_CONFIDENCE_THRESHOLD or not answers.get("knowledge-phishing"):
        recommended.append("phishing")
    if knowledge_percentage < KNOWLEDGE_PASS_PERCENT:
        recommended.extend(["privacy", "updates"])

    if deduplicate:
        recommended = list(dict.fromkeys(recommended))

    logger.debug(
        f"Assessment scored: knowledge {knowledge_score}/{len(knowledge_questions)}, "
        f"recommended {recommended}"
    )

    return AssessmentResult(
        password_confidence=password_confidence,
        phishing_confidence=phishing_confidence,
        knowledge_score=knowledge_score,
        knowledge_percentage=knowledge_percentage,
        recommended_modules=recommended,
        total_questions=len(questions),
    )
