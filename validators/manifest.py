"""ContentValidator — structural validation of AI-generated training games.

Entry points (all total: any input returns a ValidationResult, nothing is
raised for untrusted content):

  validate_game_manifest(content)     full manifest
  validate_scene_content(content)     one scene, addressed as ``root``
  validate_quiz_content(content)      quiz payload, type forced to quiz
  validate_dialogue_content(content)  dialogue payload, type forced to dialogue
  validate_content(content, type)     dispatch on ContentType

Traversal is shallow and field driven: only named properties are read, so a
circular reference elsewhere in the document cannot cause unbounded
recursion.  Validation stops early in exactly two places: a non-object root,
and a scene whose type is missing or unrecognised (that scene only).

Configuration priority for the supported-language set:
  1. explicit constructor arg  2. CONTENT_SUPPORTED_LANGUAGES env var
  3. built-in default (sv, de, fr, nl, en)
"""

import os
from collections.abc import Iterable, Mapping
from typing import Any

from app.models.game_manifest import END_OF_GAME, SCENE_TYPES, ContentType, SceneType
from app.utils.logging import get_logger
from models.validation import ContentLimits, ValidationResult
from validators.content_size import check_size
from validators.diagnostics import Diagnostics
from validators.fields import is_present, require_field, require_object
from validators.metadata import MetadataValidator
from validators.navigation import validate_navigation
from validators.scenes import validate_dialogue_scene, validate_quiz_scene

logger = get_logger("validators.manifest")

LANGUAGES_ENV_VAR = "CONTENT_SUPPORTED_LANGUAGES"


def _languages_from_env() -> list[str] | None:
    raw = os.environ.get(LANGUAGES_ENV_VAR)
    if not raw:
        return None
    return [code.strip() for code in raw.split(",") if code.strip()]


class ContentValidator:
    """Validate manifests and scene payloads from the content pipeline.

    Usage::

        validator = ContentValidator()
        result = validator.validate_game_manifest(json.loads(raw))
        if not result.is_valid:
            for error in result.errors:
                print(error)

    The instance holds configuration only; every call builds its own
    :class:`~validators.diagnostics.Diagnostics`, so one validator can be
    shared across threads.

    Args:
        supported_languages: Language codes accepted without a warning.
        limits: Size and length limits for the advisory warnings.
    """

    def __init__(
        self,
        supported_languages: Iterable[str] | None = None,
        limits: ContentLimits | None = None,
    ) -> None:
        if supported_languages is None:
            supported_languages = _languages_from_env()
        self._metadata = MetadataValidator(supported_languages)
        self.limits = limits or ContentLimits()

    @property
    def supported_languages(self) -> frozenset[str]:
        return self._metadata.supported_languages

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, content: Any, content_type: ContentType | str) -> ValidationResult:
        """Validate *content* as the given kind of payload.

        Raises:
            ValueError: If *content_type* is not a known ContentType.  This is
                a caller error, not a content error.
        """
        content_type = ContentType(content_type)
        if content_type is ContentType.GAME:
            return self.validate_game_manifest(content)
        if content_type is ContentType.SCENE:
            return self.validate_scene_content(content)
        if content_type is ContentType.QUIZ:
            return self.validate_quiz_content(content)
        return self.validate_dialogue_content(content)

    def validate_game_manifest(self, content: Any) -> ValidationResult:
        diagnostics = Diagnostics()

        if not isinstance(content, Mapping):
            diagnostics.error("root", "Content must be a valid JSON object", "invalid_type")
            return self._finish(diagnostics, ContentType.GAME)

        # Root fields are reported independently; no short-circuit between them.
        require_field(content, "gameId", "string", diagnostics)
        require_field(content, "version", "string", diagnostics)
        has_metadata = require_field(content, "metadata", "object", diagnostics)
        has_scenes = require_field(content, "scenes", "array", diagnostics)

        if has_metadata:
            self._metadata.validate(content["metadata"], diagnostics)

        if has_scenes:
            scenes = content["scenes"]
            if not scenes:
                diagnostics.error("scenes", "Game must have at least one scene", "invalid_value")
            self._validate_scene_list(scenes, diagnostics)

        check_size(content, "root", self.limits.max_manifest_bytes, "Manifest", diagnostics)
        return self._finish(diagnostics, ContentType.GAME)

    def validate_scene_content(self, content: Any) -> ValidationResult:
        diagnostics = Diagnostics()

        if not isinstance(content, Mapping):
            diagnostics.error("root", "Scene content must be a valid JSON object", "invalid_type")
            return self._finish(diagnostics, ContentType.SCENE)

        self._validate_scene(content, "root", diagnostics)
        return self._finish(diagnostics, ContentType.SCENE)

    def validate_quiz_content(self, content: Any) -> ValidationResult:
        diagnostics = Diagnostics()

        if not isinstance(content, Mapping):
            diagnostics.error("root", "Quiz content must be a valid JSON object", "invalid_type")
            return self._finish(diagnostics, ContentType.QUIZ)

        scene = {**content, "type": SceneType.QUIZ.value}
        validate_quiz_scene(scene, "root", diagnostics, self.limits)
        return self._finish(diagnostics, ContentType.QUIZ)

    def validate_dialogue_content(self, content: Any) -> ValidationResult:
        diagnostics = Diagnostics()

        if not isinstance(content, Mapping):
            diagnostics.error("root", "Dialogue content must be a valid JSON object", "invalid_type")
            return self._finish(diagnostics, ContentType.DIALOGUE)

        scene = {**content, "type": SceneType.DIALOGUE.value}
        validate_dialogue_scene(scene, "root", diagnostics, self.limits)
        return self._finish(diagnostics, ContentType.DIALOGUE)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _validate_scene_list(self, scenes: list, diagnostics: Diagnostics) -> None:
        """Validate every scene, then the id/navigation advisories.

        Duplicate ids and dangling ``navigation.next`` targets are warnings
        only; both are found with one id set, so cost stays linear.
        """
        seen_ids: set[str] = set()
        targets: list[tuple[str, str]] = []

        for index, scene in enumerate(scenes):
            path = f"scenes[{index}]"
            target = self._validate_scene(scene, path, diagnostics)
            if target is not None:
                targets.append((f"{path}.navigation.next", target))

            scene_id = scene.get("id") if isinstance(scene, Mapping) else None
            if isinstance(scene_id, str):
                if scene_id in seen_ids:
                    diagnostics.warning(
                        f"{path}.id", f"Duplicate scene id '{scene_id}'", "best_practice"
                    )
                seen_ids.add(scene_id)

        for nav_path, target in targets:
            if target != END_OF_GAME and target not in seen_ids:
                diagnostics.warning(
                    nav_path,
                    f"Navigation next '{target}' does not match any scene id",
                    "best_practice",
                )

    def _validate_scene(self, scene: Any, path: str, diagnostics: Diagnostics) -> str | None:
        """Check one scene and dispatch it by type.

        Returns:
            The scene's ``navigation.next`` target when it is a valid string.
        """
        if not require_object(scene, path, diagnostics):
            return None

        require_field(scene, "id", "string", diagnostics, path)
        if not require_field(scene, "type", "string", diagnostics, path):
            return None

        scene_type = scene["type"]
        if scene_type not in SCENE_TYPES:
            diagnostics.error(
                f"{path}.type",
                f"Invalid scene type '{scene_type}'. Must be one of: {', '.join(SCENE_TYPES)}",
                "invalid_value",
            )
            return None

        if scene_type == SceneType.DIALOGUE:
            validate_dialogue_scene(scene, path, diagnostics, self.limits)
            check_size(
                scene, path, self.limits.max_dialogue_scene_bytes, "Dialogue scene", diagnostics
            )
        elif scene_type == SceneType.QUIZ:
            validate_quiz_scene(scene, path, diagnostics, self.limits)
            check_size(scene, path, self.limits.max_quiz_scene_bytes, "Quiz scene", diagnostics)

        if is_present(scene, "navigation"):
            return validate_navigation(scene["navigation"], f"{path}.navigation", diagnostics)
        return None

    def _finish(self, diagnostics: Diagnostics, content_type: ContentType) -> ValidationResult:
        result = diagnostics.result()
        logger.debug(
            "content_validated",
            content_type=content_type.value,
            is_valid=result.is_valid,
            errors=len(result.errors),
            warnings=len(result.warnings),
        )
        return result


# ---------------------------------------------------------------------------
# Module-level entry points: a fresh validator per call
# ---------------------------------------------------------------------------


def validate_game_manifest(content: Any) -> ValidationResult:
    return ContentValidator().validate_game_manifest(content)


def validate_scene_content(content: Any) -> ValidationResult:
    return ContentValidator().validate_scene_content(content)


def validate_quiz_content(content: Any) -> ValidationResult:
    return ContentValidator().validate_quiz_content(content)


def validate_dialogue_content(content: Any) -> ValidationResult:
    return ContentValidator().validate_dialogue_content(content)


def validate_content(content: Any, content_type: ContentType | str) -> ValidationResult:
    return ContentValidator().validate(content, content_type)
