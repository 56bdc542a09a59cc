"""
SkillPath assessment core.

Turns free-form language model output into validated skill assessments and
keeps each learner's active learning path in step with the latest result.
"""
