"""ANSI color codes for terminal output.

Provides the color palette and the active colors used by the run summary.
All colors optimized for dark terminal backgrounds.
"""

from enum import StrEnum


class AllColors(StrEnum):
    """ANSI color palette for dark terminal backgrounds.

    Use these values to customize the Color enum below.
    """

    # Bright Colors (Best for dark backgrounds)
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"

    # Special
    RESET = "\033[0m"


# Active Colors (Used in Summary Display)
# CUSTOMIZE HERE: Change these to any color from AllColors above
class Color(StrEnum):
    """Active colors used for the run summary.

    To change colors: Replace the value with any from AllColors above.
    """

    GREEN = AllColors.BRIGHT_GREEN  # Step succeeded / tunnel ran
    RED = AllColors.BRIGHT_RED  # Step failed / run failed
    YELLOW = AllColors.BRIGHT_YELLOW  # Warning
    CYAN = AllColors.BRIGHT_CYAN  # Headings
    RESET = AllColors.RESET  # Reset (don't change)
