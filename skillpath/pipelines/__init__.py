"""
Pipelines module - Stateless orchestration across services.
"""

from skillpath.pipelines.assessment import process_model_turn_pipeline

__all__ = ["process_model_turn_pipeline"]
