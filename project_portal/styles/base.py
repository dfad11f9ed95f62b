"""Central CSS definitions for project-portal."""

# Common UI patterns shared across screens
COMMON_CSS = """
/* Title line - muted, left aligned */
.portal-title {
    color: $text-muted;
    text-style: bold;
}

/* Hint text - bottom of screens */
.portal-hint {
    color: $text-disabled;
}

/* Hidden containers take no space */
.hidden {
    display: none;
}
"""

# Confirmation prompts (delete)
CONFIRM_CSS = """
.confirm-prompt {
    color: $error;
    text-style: bold;
}
"""

BASE_CSS = COMMON_CSS + CONFIRM_CSS
