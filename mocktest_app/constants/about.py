"""Static metadata describing MockTest Desk."""

APP_NAME = "MockTest Desk"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "MockTest Desk runs timed multiple-choice mock tests on this device. "
    "Tests are organised in sections, support negative marking and Markdown + LaTeX prompts, "
    "and every attempt is stored locally for later review."
)

HELP_TEXT = (
    "Pick a test from the catalog and press Start. The countdown submits the test "
    "automatically when it reaches zero; use Mark for Review to flag questions you want to revisit.\n\n"
    "Custom tests can be imported from a .txt file:\n\n"
    "TITLE: Radians\nDURATION: 10\nDIFFICULTY: beginner\n\n"
    "SECTION: Conversions\n\n"
    "Q: What is $30^o$ in radians?\n"
    "A: \\frac{\\pi}{2}\nB: \\frac{\\pi}{6}\nC: \\frac{\\pi}{3}\n"
    "CORRECT: B\nMARKS: 2\nNEGATIVE: 0.5"
)
