"""Scheduling and grading policy constants."""

# SM-2 parameters
INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
FIRST_INTERVAL = 1  # days after the first passing review (and after any failure)
SECOND_INTERVAL = 6  # days after the second consecutive passing review
EASE_DECIMALS = 2

# Quality scale (0 = total blackout, 5 = perfect)
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

# Binary swipe mapping
CORRECT_QUALITY = 4
INCORRECT_QUALITY = 2

# Consecutive passing reviews needed for a card to count as mastered
MASTERED_REPETITIONS = 3
