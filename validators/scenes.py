"""Shape validators for dialogue and quiz scenes.

Both scene types arrive in two encodings, produced by different generations
of the content pipeline:

  dialogue  ``dialogue_turns[]`` (speaker, character_id, text)
            ``messages[]``       (text)
  quiz      ``questions[]``      (question_text, options[] with is_correct)
            ``question`` + ``options[]`` (legacy flat form)

The encoding is resolved first, by a priority-ordered presence check (richer
encoding wins), and only that encoding is validated.  Mixing encodings across
scenes of one manifest is legal.
"""

from collections.abc import Mapping
from enum import Enum

from models.validation import ContentLimits
from validators.diagnostics import Diagnostics
from validators.fields import category_of, is_present, require_field, require_object

# Option text may live under either key; first present wins.
_OPTION_TEXT_FIELDS: tuple[str, ...] = ("text", "option_text")


class DialogueEncoding(str, Enum):
    TURNS    = "dialogue_turns"
    MESSAGES = "messages"
    NONE     = "none"


class QuizEncoding(str, Enum):
    QUESTIONS = "questions"
    LEGACY    = "legacy"


def dialogue_encoding(scene: Mapping) -> DialogueEncoding:
    if is_present(scene, "dialogue_turns"):
        return DialogueEncoding.TURNS
    if is_present(scene, "messages"):
        return DialogueEncoding.MESSAGES
    return DialogueEncoding.NONE


def quiz_encoding(scene: Mapping) -> QuizEncoding:
    if is_present(scene, "questions"):
        return QuizEncoding.QUESTIONS
    return QuizEncoding.LEGACY


# ---------------------------------------------------------------------------
# Dialogue
# ---------------------------------------------------------------------------


def validate_dialogue_scene(
    scene: Mapping, path: str, diagnostics: Diagnostics, limits: ContentLimits
) -> None:
    encoding = dialogue_encoding(scene)

    if encoding is DialogueEncoding.TURNS:
        turns = scene["dialogue_turns"]
        if category_of(turns) != "array":
            diagnostics.error(
                f"{path}.dialogue_turns", "dialogue_turns must be an array", "invalid_type"
            )
            return
        for index, turn in enumerate(turns):
            _validate_turn(turn, f"{path}.dialogue_turns[{index}]", diagnostics, limits)

    elif encoding is DialogueEncoding.MESSAGES:
        messages = scene["messages"]
        if category_of(messages) != "array":
            diagnostics.error(f"{path}.messages", "messages must be an array", "invalid_type")
        elif not messages:
            diagnostics.error(
                f"{path}.messages", "Dialogue must have at least one message", "invalid_value"
            )

    else:
        diagnostics.error(
            path, "Dialogue scene must have either messages or dialogue_turns", "missing"
        )


def _validate_turn(
    turn: object, path: str, diagnostics: Diagnostics, limits: ContentLimits
) -> None:
    if not require_object(turn, path, diagnostics):
        return
    require_field(turn, "speaker", "string", diagnostics, path)
    has_text = require_field(turn, "text", "string", diagnostics, path)
    require_field(turn, "character_id", "string", diagnostics, path)

    if has_text and len(turn["text"]) > limits.max_turn_text_chars:
        diagnostics.warning(
            f"{path}.text",
            f"Dialogue turn text is very long ({len(turn['text'])} chars, "
            f"recommended max {limits.max_turn_text_chars})",
            "best_practice",
        )


# ---------------------------------------------------------------------------
# Quiz
# ---------------------------------------------------------------------------


def validate_quiz_scene(
    scene: Mapping, path: str, diagnostics: Diagnostics, limits: ContentLimits
) -> None:
    if quiz_encoding(scene) is QuizEncoding.QUESTIONS:
        questions = scene["questions"]
        if category_of(questions) != "array":
            diagnostics.error(f"{path}.questions", "questions must be an array", "invalid_type")
            return
        for index, question in enumerate(questions):
            _validate_question(question, f"{path}.questions[{index}]", diagnostics)
        if len(questions) > limits.max_quiz_questions:
            diagnostics.warning(
                f"{path}.questions",
                f"Quiz has {len(questions)} questions, may be too long for a short "
                f"session (recommended max {limits.max_quiz_questions})",
                "best_practice",
            )
        return

    require_field(scene, "question", "string", diagnostics, path)
    if require_field(scene, "options", "array", diagnostics, path) and len(scene["options"]) < 2:
        diagnostics.error(f"{path}.options", "Quiz must have at least 2 options", "invalid_value")


def _validate_question(question: object, path: str, diagnostics: Diagnostics) -> None:
    if not require_object(question, path, diagnostics):
        return
    require_field(question, "question_text", "string", diagnostics, path)
    if not require_field(question, "options", "array", diagnostics, path):
        return

    has_correct = False
    for index, option in enumerate(question["options"]):
        option_path = f"{path}.options[{index}]"
        if not require_object(option, option_path, diagnostics):
            continue
        _validate_option_text(option, option_path, diagnostics)
        if option.get("is_correct") is True:
            has_correct = True

    # Whole-question invariant: checked once the full option list is scanned.
    if not has_correct:
        diagnostics.error(
            path, "Quiz question must have at least one correct option", "invalid_value"
        )


def _validate_option_text(option: Mapping, path: str, diagnostics: Diagnostics) -> None:
    # An empty string counts as absent, so the next synonym is tried.
    for field in _OPTION_TEXT_FIELDS:
        if is_present(option, field) and option[field] != "":
            value = option[field]
            if not isinstance(value, str):
                diagnostics.error(
                    f"{path}.{field}",
                    f"Field '{field}' must be of type string, got {category_of(value)}",
                    "invalid_type",
                )
            return
    diagnostics.error(path, "Option must have either text or option_text", "missing")
