"""
Ports Layer (Hexagonal Architecture)
====================================

Abstract interfaces defining the contracts between the application core
and external systems.

Secondary Ports (driven):
- CredibilityScoringService: Content → raw scoring response
- KeyValueStorage: Durable slot for serialized history
- TextExtractor: Image → text
"""

from credibility_analyzer.ports.scoring_service import (
    CredibilityScoringService,
    ScoringResponse,
    ScoringTransportError,
)
from credibility_analyzer.ports.storage import KeyValueStorage, StorageError
from credibility_analyzer.ports.text_extractor import TextExtractor, validate_image_file

__all__ = [
    "CredibilityScoringService",
    "KeyValueStorage",
    "ScoringResponse",
    "ScoringTransportError",
    "StorageError",
    "TextExtractor",
    "validate_image_file",
]
