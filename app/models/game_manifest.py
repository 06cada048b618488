"""Vocabularies for the training-game manifest schema.

The manifest itself is never parsed into typed models here: it arrives as
untrusted JSON from the content pipeline and is inspected field by field by
``validators.manifest``.  These enums name the closed sets that inspection
checks against.
"""

from enum import Enum


class SceneType(str, Enum):
    DIALOGUE   = "dialogue"
    QUIZ       = "quiz"
    ASSESSMENT = "assessment"
    RESOURCE   = "resource"
    SUMMARY    = "summary"


class ContentType(str, Enum):
    """What a submitted payload claims to be."""

    GAME     = "game"
    SCENE    = "scene"
    QUIZ     = "quiz"
    DIALOGUE = "dialogue"


SCENE_TYPES: tuple[str, ...] = tuple(t.value for t in SceneType)

# Terminal value for navigation.next.
END_OF_GAME = "end"
