"""
Outbound Adapters
=================

Concrete implementations of the driven ports.
"""

from credibility_analyzer.adapters.outbound.scoring_http import HTTPScoringAdapter
from credibility_analyzer.adapters.outbound.storage_file import JSONFileStorage
from credibility_analyzer.adapters.outbound.storage_memory import InMemoryStorage
from credibility_analyzer.adapters.outbound.storage_redis import RedisStorage

__all__ = [
    "HTTPScoringAdapter",
    "InMemoryStorage",
    "JSONFileStorage",
    "RedisStorage",
]
