"""
Credibility Analyzer
====================

A resilient client for a remote content-credibility scoring service.

Layers:
- domain: Value objects (AnalysisOutcome, HistoryEntry), errors and pure services
- ports: Abstract interfaces (CredibilityScoringService, KeyValueStorage, TextExtractor)
- application: Use-case orchestration (AnalyzeContentUseCase, SubmitAnalysisUseCase)
- adapters: Concrete implementations for external services
- infrastructure: Config, logging, cancellation, DI wiring
"""

__version__ = "0.1.0"
