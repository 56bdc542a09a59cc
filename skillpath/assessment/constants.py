"""
Constants shared by assessment validation, extraction and sanitization.
"""

import re

ALLOWED_MODULE_TYPES = ("article", "video", "quiz", "project")
ALLOWED_DIFFICULTIES = ("beginner", "intermediate", "advanced")

MIN_MODULES = 3
MAX_MODULES = 6
MAX_REASONING_LENGTH = 2000

# e.g. "6 min", "15 mins", "1 h", "2 hours"
DURATION_PATTERN = re.compile(
    r"[0-9]{1,3} ?(?:min|mins|minutes|h|hr|hrs|hour|hours)",
    re.IGNORECASE | re.ASCII,
)
MAX_DURATION_LABEL_LENGTH = 32

MAX_DESCRIPTION_LENGTH = 2000
MAX_SEARCH_KEYWORDS = 12
MAX_RESOURCE_URL_LENGTH = 2048

LOW_CONFIDENCE_THRESHOLD = 0.6

# Learning path status values
PATH_STATUS_ACTIVE = "active"
PATH_STATUS_ARCHIVED = "archived"
PATH_STATUS_COMPLETED = "completed"

# Collection names
SKILLS_COLLECTION = "aiSkills"
ASSESSMENTS_COLLECTION = "aiAssessments"
LEARNING_PATHS_COLLECTION = "aiLearningPaths"
